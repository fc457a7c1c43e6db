"""Configuration management for chatlink."""

import json
import os
from pathlib import Path
from typing import Any

from .models import ChatlinkConfig

# Application name for XDG paths
APP_NAME = "chatlink"

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "scanner": {
        "soft_wrap": True,  # break opportunities inside plain URL labels
        "soft_break": "\u200b",
        "max_tag_span": 2048,  # max characters between `<` and `>` of one tag
    },
    "render": {
        "text_style": "",
        "link_style": "bright_blue",
        "underline": True,
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config home directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")))


def get_config_path() -> Path:
    """
    Get the path to the config file.

    Priority:
    1. CHATLINK_CONFIG environment variable
    2. XDG default: ~/.config/chatlink/config.json
    """
    env_path = os.environ.get("CHATLINK_CONFIG")
    if env_path:
        return Path(env_path)
    return get_xdg_config_home() / APP_NAME / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration, merging with defaults."""
    config = deep_merge(DEFAULT_CONFIG, {})
    config_path = get_config_path()

    if config_path.exists():
        with open(config_path) as f:
            user_config = json.load(f)
            config = deep_merge(config, user_config)

    return config


def load_chatlink_config() -> ChatlinkConfig:
    """Load configuration as a validated, immutable model."""
    return ChatlinkConfig.model_validate(load_config())


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = {key: (deep_merge(value, {}) if isinstance(value, dict) else value) for key, value in base.items()}
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
