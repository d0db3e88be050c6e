"""Configuration management for Portlist."""

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

import platformdirs
import yaml

from .constants import APP_NAME, DEFAULT_POLLING_INTERVAL, KILL_GRACEFUL_TIMEOUT

SORT_COLUMNS = ("port", "pid", "command", "directory", "parent")
SORT_DIRECTIONS = ("asc", "desc")
GROUP_MODES = ("directory", "parent", "none")


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""

    pass


@dataclass
class Settings:
    """User settings persisted in config.yaml."""

    polling_interval: float = DEFAULT_POLLING_INTERVAL  # Seconds between scans
    sort_column: str = "port"
    sort_direction: str = "asc"
    group_by: str = "directory"
    kill_timeout: float = KILL_GRACEFUL_TIMEOUT  # Seconds before SIGKILL


def get_config_dir() -> Path:
    """Get the configuration directory for Portlist.

    Returns:
        Path to configuration directory
    """
    config_dir = Path(platformdirs.user_config_dir(APP_NAME, APP_NAME))
    config_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
    return config_dir


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to config.yaml
    """
    return get_config_dir() / "config.yaml"


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults for anything missing or invalid.

    Args:
        path: Path to config file. Defaults to the user config location.

    Returns:
        Settings instance
    """
    path = path or get_config_path()
    settings = Settings()

    if not path.exists():
        return settings

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return settings

    if not isinstance(data, dict):
        return settings

    for f in fields(Settings):
        if f.name not in data:
            continue
        try:
            settings = replace(settings, **{f.name: _validate(f.name, data[f.name])})
        except ConfigError:
            continue

    return settings


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings to disk.

    Args:
        settings: Settings to persist
        path: Path to config file. Defaults to the user config location.

    Returns:
        Path the settings were written to
    """
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    with open(path, "w") as f:
        yaml.safe_dump(asdict(settings), f, default_flow_style=False, sort_keys=False)
    return path


def update_setting(settings: Settings, key: str, value: str) -> Settings:
    """Return a copy of settings with one value changed.

    Args:
        settings: Current settings
        key: Setting name
        value: New value as entered by the user

    Returns:
        Updated settings

    Raises:
        ConfigError: If the key is unknown or the value invalid
    """
    if key not in {f.name for f in fields(Settings)}:
        raise ConfigError(f"Unknown setting: {key}")
    return replace(settings, **{key: _validate(key, value)})


def _validate(key: str, value: Any) -> Any:
    """Coerce and validate a single setting value.

    Raises:
        ConfigError: If the value is invalid for the key
    """
    if key in ("polling_interval", "kill_timeout"):
        if isinstance(value, bool):
            raise ConfigError(f"{key} must be a number")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{key} must be a number") from None
        if number <= 0:
            raise ConfigError(f"{key} must be greater than 0")
        return number

    choices = {
        "sort_column": SORT_COLUMNS,
        "sort_direction": SORT_DIRECTIONS,
        "group_by": GROUP_MODES,
    }[key]
    if value not in choices:
        raise ConfigError(f"{key} must be one of: {', '.join(choices)}")
    return value
