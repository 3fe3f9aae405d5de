"""Configuration for Client Register, loaded from the environment."""

from register_config.settings import (
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = ["Settings", "clear_settings_cache", "get_config_dir", "get_settings"]
