"""Configuration management with Pydantic Settings.

Values are resolved from:
1. Environment variables (highest priority, prefix ``HUBVIEW_``, nested
   fields separated by ``__`` e.g. ``HUBVIEW_HUB__CONTEXT``)
2. The YAML configuration file
3. Defaults (lowest priority)
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hubview.errors import ConfigError

DEFAULT_CONFIG_PATH = "~/.hubview/config.yaml"
DEFAULT_HUB_NAMESPACE = "open-cluster-management"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


def expand_path(path: str) -> str:
    """Expand environment variables and a leading ``~`` in a path."""
    if not path:
        return path
    return os.path.expanduser(os.path.expandvars(path))


class HubSettings(BaseModel):
    """Connection to the ACM hub cluster."""

    kubeconfig: str = Field(default="", description="Path to the hub kubeconfig")
    context: str | None = Field(default=None, description="Kubeconfig context (current if unset)")
    namespace: str = Field(default=DEFAULT_HUB_NAMESPACE, description="ACM namespace on the hub")

    @field_validator("kubeconfig")
    @classmethod
    def expand_kubeconfig(cls, v: str) -> str:
        return expand_path(v)


class SpokeDefaults(BaseModel):
    """Defaults applied to spoke clusters."""

    provider: str = ""
    region: str = ""


class DefaultsSettings(BaseModel):
    spoke: SpokeDefaults = Field(default_factory=SpokeDefaults)


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="HUBVIEW_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    hub: HubSettings = Field(default_factory=HubSettings)
    defaults: DefaultsSettings = Field(default_factory=DefaultsSettings)
    verbose: bool = Field(default=False, description="Enable debug logging")

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.TEXT, description="Logging format")

    max_concurrent_fetches: int = Field(
        default=10,
        description="Max concurrent ClusterDeployment lookups",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # File contents arrive as init kwargs; the environment wins over them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("max_concurrent_fetches")
    @classmethod
    def validate_max_concurrent_fetches(cls, v: int) -> int:
        """Ensure at least one fetch can run."""
        return max(1, v)

    @model_validator(mode="after")
    def validate_hub(self) -> Settings:
        if not self.hub.kubeconfig:
            raise ValueError("hub kubeconfig is required")
        if not self.hub.namespace:
            raise ValueError("hub namespace is required")
        return self

    @property
    def effective_log_level(self) -> LogLevel:
        """Log level after applying the verbose switch."""
        return LogLevel.DEBUG if self.verbose else self.log_level


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Config file path; environment variables and ``~`` are expanded

    Returns:
        Validated Settings

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    config_path = Path(expand_path(str(path)))

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"failed to read config file {config_path}: {e}") from e

    try:
        data: Any = yaml.safe_load(raw) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to parse config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"failed to parse config {config_path}: expected a mapping")

    try:
        return Settings(**data)
    except ValidationError as e:
        reasons = "; ".join(
            str(error["msg"]).removeprefix("Value error, ") for error in e.errors()
        )
        raise ConfigError(f"validation failed: {reasons}") from e
