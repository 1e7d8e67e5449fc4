# arena/settings.py
"""
Server settings.

All keys are declared up front in DEFAULT_SETTINGS; the console can only
read and change keys that exist here. Settings are loaded from and saved
to YAML.
"""

import logging
import os
from typing import Any, Dict, Iterator, Optional

import yaml

logger = logging.getLogger(__name__)

# Environment override for the config path used by the CLI
ENV_CONFIG_PATH = "ARENA_CONFIG"
DEFAULT_CONFIG_PATH = "settings.yaml"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "server_name": "cell-arena",
    "listen_port": 443,
    "listen_max_connections": 100,
    "server_tick_delay": 40,            # ms between ticks
    "world_min_count": 1,               # worlds created on start
    "world_max_count": 2,
    "world_max_players": 50,
    "world_player_bots_per_world": 0,
    "world_border_width": 14142.135623730952,
    "world_border_height": 14142.135623730952,
    "player_max_cells": 16,
    "player_min_mass": 10.0,
    "player_start_mass": 32.0,
    "minion_start_mass": 32.0,
}


def _value_kind(value) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def check_setting(key: str, value: Any) -> Any:
    """Validate a value against the type of the key's default.

    Integers and floats are interchangeable where the default is a float;
    integer settings accept only whole numbers.

    Returns:
        The value converted to the default's type

    Raises:
        TypeError: If the value's type does not fit the setting
    """
    default = DEFAULT_SETTINGS[key]
    expected = _value_kind(default)
    actual = _value_kind(value)
    if expected == "number" and actual in ("integer", "number"):
        return float(value)
    if expected == "integer" and actual == "number" and value.is_integer():
        return int(value)
    if actual != expected:
        raise TypeError(f"expected {expected}, got {actual}")
    return value


class Settings:
    """Key/value store restricted to the pre-declared keys."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values = dict(DEFAULT_SETTINGS)
        if values:
            self.update(values)

    def update(self, values: Dict[str, Any]) -> None:
        for key, value in values.items():
            if key not in self._values:
                logger.warning(f"Ignoring unknown setting: {key}")
                continue
            try:
                self._values[key] = check_setting(key, value)
            except TypeError as e:
                logger.warning(f"Ignoring setting {key}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in self._values:
            raise KeyError(key)
        self._values[key] = check_setting(key, value)

    def __contains__(self, key) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def keys(self):
        return self._values.keys()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def copy(self) -> "Settings":
        return Settings(self._values)

    def __repr__(self):
        return f"Settings({self._values!r})"


def default_config_path() -> str:
    return os.environ.get(ENV_CONFIG_PATH, DEFAULT_CONFIG_PATH)


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from a YAML file, falling back to defaults.

    Args:
        path: Path to a YAML mapping of setting overrides

    Returns:
        Settings: Defaults merged with the file's values
    """
    if path is None or not os.path.exists(path):
        if path is not None:
            logger.info(f"No settings file at {path}, using defaults")
        return Settings()

    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    logger.info(f"Loaded settings from {path}")
    return Settings(data)


def save_settings(settings: Settings, path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w') as f:
        yaml.safe_dump(settings.to_dict(), f, sort_keys=True)
    logger.debug(f"Saved settings to {path}")
