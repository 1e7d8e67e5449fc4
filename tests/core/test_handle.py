"""Tests for the server handle lifecycle."""

import io

import pytest

from arena.handle import ServerHandle
from arena.settings import Settings
from arena.utils.logger import ConsoleOutput


def _handle(**overrides):
    return ServerHandle(Settings(overrides), ConsoleOutput(io.StringIO()))


def test_start_creates_min_worlds_and_bots():
    handle = _handle(world_min_count=2, world_player_bots_per_world=3)

    assert handle.start(start_ticker=False) is True
    assert sorted(handle.worlds) == [1, 2]
    assert len(handle.players) == 6
    assert handle.uptime >= 0
    assert handle.start() is False
    handle.stop()


def test_failed_start_rolls_back(monkeypatch):
    handle = _handle(world_min_count=2, world_player_bots_per_world=1)
    real_create_world = handle.create_world
    created = []

    def create_world():
        if created:
            raise RuntimeError("world limit reached")
        created.append(real_create_world())
        return created[-1]

    monkeypatch.setattr(handle, "create_world", create_world)

    with pytest.raises(RuntimeError):
        handle.start(start_ticker=False)

    assert handle.running is False
    assert handle.start_time is None
    assert handle.worlds == {}
    assert handle.players == {}
    assert handle.routers == []
    assert handle.ticker.is_running is False


def test_failed_start_reports_error_and_allows_retry(run, handle):
    handle.settings["world_min_count"] = 3
    assert run("restart") == ["error executing restart: world limit reached"]
    assert handle.running is False
    assert handle.worlds == {}

    handle.settings["world_min_count"] = 1
    assert run("start") == []
    assert sorted(handle.worlds) == [1]


def test_stop_clears_state():
    handle = _handle(world_player_bots_per_world=2)
    handle.start(start_ticker=False)

    assert handle.stop() is True
    assert handle.running is False
    assert handle.worlds == {}
    assert handle.players == {}
    assert handle.routers == []
    assert handle.uptime == 0
    assert handle.stop() is False


def test_world_ids_reuse_lowest_free_id():
    handle = _handle(world_max_count=3)
    handle.start(start_ticker=False)
    second = handle.create_world()
    assert second.id == 2

    handle.remove_world(1)
    assert handle.create_world().id == 1
    handle.stop()


def test_tick_updates_world_stats():
    handle = _handle(world_player_bots_per_world=1)
    handle.start(start_ticker=False)

    handle.ticker.step()

    assert handle.worlds[1].stats.internal == 1
    handle.stop()


def test_set_settings_updates_ticker():
    handle = _handle()
    settings = handle.settings.copy()
    settings["server_tick_delay"] = 10

    handle.set_settings(settings)

    assert handle.settings is settings
    assert handle.tick_delay == 10
