"""Configuration settings and loading.

Only the command line and ``Runtime.from_config`` read configuration; the
transport, client and inference modules take plain constructor arguments.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from halkit.errors import ConfigurationError


class HalkitConfig(BaseSettings):
    """Configuration for a halkit runtime."""

    model_config = SettingsConfigDict(
        env_prefix="HALKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "http://localhost:8000"
    timeout_ms: int = 30000
    default_headers: dict[str, str] = Field(default_factory=dict)
    credentials: bool = True
    mode: Literal["development", "production"] = "production"
    environment: str = "production"
    sample_size: int = 10
    sort_by_priority: bool = False

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout_ms", "sample_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v


def load_config(config_path: str | Path | None = None) -> HalkitConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults

    Raises:
        ConfigurationError: The file is not valid YAML or a value is invalid.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                try:
                    config_data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
            if not isinstance(config_data, dict):
                raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    config_data.update(_get_env_overrides())

    try:
        return HalkitConfig(**config_data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(first["msg"], field=field or None) from e


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "HALKIT_BASE_URL": "base_url",
        "HALKIT_TIMEOUT_MS": ("timeout_ms", int),
        "HALKIT_MODE": "mode",
        "HALKIT_ENVIRONMENT": "environment",
        "HALKIT_CREDENTIALS": ("credentials", _parse_bool),
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            if isinstance(config_key, tuple):
                key, converter = config_key
                try:
                    overrides[key] = converter(value)
                except ValueError as e:
                    raise ConfigurationError(f"Invalid value for {env_key}", field=key, value=value) from e
            else:
                overrides[config_key] = value

    return overrides


__all__ = ["HalkitConfig", "load_config"]
