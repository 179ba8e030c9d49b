from __future__ import annotations

from .settings import (
    CONFIG_DIRNAME,
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    MIN_INTERVAL_MS,
    ListenerConfig,
    NetworkConfig,
    Settings,
    default_config_path,
    get_settings,
    load_settings,
    render_settings_toml,
    resolve_config_path,
    validate_interval,
    write_settings,
)

__all__ = [
    "CONFIG_DIRNAME",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "MIN_INTERVAL_MS",
    "ListenerConfig",
    "NetworkConfig",
    "Settings",
    "default_config_path",
    "get_settings",
    "load_settings",
    "render_settings_toml",
    "resolve_config_path",
    "validate_interval",
    "write_settings",
]
