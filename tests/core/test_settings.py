"""Tests for the settings store and YAML persistence."""

import pytest
import yaml

from arena.settings import (
    DEFAULT_SETTINGS, Settings, check_setting, default_config_path, load_settings, save_settings,
)


def test_defaults_are_declared():
    settings = Settings()
    assert settings.to_dict() == DEFAULT_SETTINGS
    assert "server_tick_delay" in settings
    assert len(settings) == len(DEFAULT_SETTINGS)


def test_undeclared_keys_cannot_be_set():
    settings = Settings()
    with pytest.raises(KeyError):
        settings["made_up"] = 1


def test_update_ignores_unknown_keys():
    settings = Settings({"listen_port": 9000, "made_up": True})
    assert settings["listen_port"] == 9000
    assert "made_up" not in settings


def test_values_must_match_default_type():
    settings = Settings()
    with pytest.raises(TypeError):
        settings["server_tick_delay"] = "fast"
    with pytest.raises(TypeError):
        settings["server_name"] = 5
    assert settings["server_tick_delay"] == 40


def test_check_setting_converts_between_numbers():
    assert check_setting("player_min_mass", 12) == 12.0
    assert isinstance(check_setting("player_min_mass", 12), float)
    assert check_setting("world_min_count", 3.0) == 3
    assert isinstance(check_setting("world_min_count", 3.0), int)
    with pytest.raises(TypeError):
        check_setting("world_min_count", 2.5)
    with pytest.raises(TypeError):
        check_setting("world_min_count", True)


def test_update_ignores_wrongly_typed_values():
    settings = Settings({"world_min_count": "two", "listen_port": 9000})
    assert settings["world_min_count"] == DEFAULT_SETTINGS["world_min_count"]
    assert settings["listen_port"] == 9000


def test_load_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "absent.yaml"))
    assert settings.to_dict() == DEFAULT_SETTINGS


def test_load_merges_over_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("server_name: test arena\nworld_max_players: 8\n")

    settings = load_settings(str(path))

    assert settings["server_name"] == "test arena"
    assert settings["world_max_players"] == 8
    assert settings["listen_port"] == DEFAULT_SETTINGS["listen_port"]


def test_load_rejects_non_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_settings(str(path))


def test_save_round_trips_through_yaml(tmp_path):
    path = tmp_path / "nested" / "settings.yaml"
    settings = Settings({"player_max_cells": 4})

    save_settings(settings, str(path))

    with open(path) as f:
        assert yaml.safe_load(f)["player_max_cells"] == 4
    assert load_settings(str(path))["player_max_cells"] == 4


def test_config_path_from_environment(monkeypatch):
    monkeypatch.setenv("ARENA_CONFIG", "/etc/arena.yaml")
    assert default_config_path() == "/etc/arena.yaml"
    monkeypatch.delenv("ARENA_CONFIG")
    assert default_config_path() == "settings.yaml"
