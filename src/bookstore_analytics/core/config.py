"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class AnalyticsConfig(BaseModel):
    # Partitions smaller than this are always aggregated sequentially
    parallel_threshold: int = 50_000
    max_workers: int = 1  # 1 = sequential
    chunk_size: int = 10_000
    best_seller_limit: int = 10  # Top-N shown in reports

    @field_validator("parallel_threshold", "max_workers", "chunk_size", "best_seller_limit")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"must be positive, got {v}")
        return v

    @property
    def parallel(self) -> bool:
        return self.max_workers > 1


class MoneyConfig(BaseModel):
    currency: str = "USD"
    currency_symbol: str = "$"

    @field_validator("currency")
    @classmethod
    def currency_must_be_iso(cls, v: str) -> str:
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"currency must be an ISO 4217 code, got '{v}'")
        return code


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"

    @field_validator("log_level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{v}'")
        return level

    @field_validator("log_format")
    @classmethod
    def format_must_be_known(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    money: MoneyConfig = Field(default_factory=MoneyConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "BOOKSTORE_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: If *config_path* is given but does not exist.
    """
    from .errors import ConfigError

    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    return Settings(**data)
