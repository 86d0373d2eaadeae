import os
from pathlib import Path
from typing import Any, Dict

import structlog
import toml

logger = structlog.get_logger(__name__)


def find_config_file() -> str:
    """
    Find the configuration file in standard locations.

    Look for config in the following locations (in order):
    1. ./flat_thread.toml (current directory)
    2. ~/.config/flat_thread/config.toml (user config directory)
    3. /etc/flat_thread/config.toml (system config directory)

    Returns:
        Path to the first config file found, or an empty string if none exists
    """
    candidates = [
        Path("./flat_thread.toml"),
        Path.home() / ".config" / "flat_thread" / "config.toml",
        Path("/etc/flat_thread/config.toml"),
    ]
    for candidate in candidates:
        if candidate.exists():
            return str(candidate)

    return ""


def default_config() -> Dict[str, Dict[str, Any]]:
    return {
        "snapshot": {"path": "comments.json"},
        "replies": {
            "label_one": "{count} reply",
            "label_other": "{count} replies",
            "expand_all": False,
        },
        "logging": {"level": "INFO", "format": "console"},
    }


def load_config(config_path: str = "") -> Dict[str, Dict[str, Any]]:
    """
    Load configuration from a TOML file.

    Args:
        config_path: Path to the configuration file. If not provided,
                    the function will search for a config file in standard locations.

    Returns:
        Dictionary with configuration values, file values merged over defaults
        section by section
    """
    if not config_path:
        config_path = find_config_file()

    config = default_config()

    if config_path and os.path.exists(config_path):
        try:
            user_config = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.warning("config_load_failed", path=config_path, error=str(e))
            return config

        for section in config:
            if isinstance(user_config.get(section), dict):
                config[section].update(user_config[section])

    return config
