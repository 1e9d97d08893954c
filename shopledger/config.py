"""Configuration file management for shopledger."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from shopledger.domain.errors import ConfigError, ValidationError
from shopledger.domain.history import SortKey

DEFAULT_CONFIG: dict[str, Any] = {
    "currency_symbol": "₹",
    "default_sort": "date-desc",
    "export_dir": "",
    "log_level": "WARNING",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "shopledger" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load effective settings: defaults overlaid with the config file.

    A missing config file is not an error; the defaults apply.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings dictionary containing every key in DEFAULT_CONFIG.

    Raises:
        ConfigError: If the config file is not valid TOML.
    """
    settings = dict(DEFAULT_CONFIG)
    try:
        settings.update(load_config(config_path))
    except FileNotFoundError:
        pass
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{config_path or get_config_path()} is not valid TOML: {e}") from e
    return settings


def validate_setting(key: str, value: str) -> str:
    """Check a setting before it is written.

    Raises:
        ValidationError: If the key is unknown or the value is not allowed.
    """
    if key not in DEFAULT_CONFIG:
        raise ValidationError(f"Unknown setting '{key}' (choose from: {', '.join(DEFAULT_CONFIG)})")
    if key == "default_sort":
        return SortKey.parse(value).value
    if key == "log_level":
        if value.upper() not in LOG_LEVELS:
            raise ValidationError(f"Unknown log level '{value}' (choose from: {', '.join(LOG_LEVELS)})")
        return value.upper()
    return value


def set_setting(key: str, value: str, config_path: Path | None = None) -> dict[str, Any]:
    """Validate and store a single setting.

    Args:
        key: Setting name.
        value: New value.
        config_path: Path to config file. If None, uses default location.

    Returns:
        The updated settings.
    """
    clean_value = validate_setting(key, value)
    settings = load_settings(config_path)
    settings[key] = clean_value
    save_config(settings, config_path)
    return settings
