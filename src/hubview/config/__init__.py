"""Configuration management module.

This module provides:
- YAML file based configuration with environment overrides
- Validation of the hub connection settings
"""

from .settings import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_HUB_NAMESPACE,
    DefaultsSettings,
    HubSettings,
    LogFormat,
    LogLevel,
    Settings,
    SpokeDefaults,
    expand_path,
    load_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "load_settings",
    "expand_path",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_HUB_NAMESPACE",
    # Enums
    "LogLevel",
    "LogFormat",
    # Component settings
    "HubSettings",
    "DefaultsSettings",
    "SpokeDefaults",
]
