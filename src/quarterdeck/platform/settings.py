"""Centralized configuration using pydantic-settings.

All configuration is loaded from environment variables and .env files.
For nested settings, use double underscore: RECEIPTS__CURRENCY_CODE=PKR
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from babel.dates import get_timezone
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ObservabilitySettings(BaseModel):
    """Logging configuration."""

    log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
    log_format: str = Field("json", description="Log format (json or text)")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in {"json", "text"}:
            raise ValueError("log_format must be 'json' or 'text'")
        return v


class ReceiptSettings(BaseModel):
    """Receipt engine configuration.

    Currency and locale are process-wide; receipts are never rendered in a
    per-call currency or locale.
    """

    currency_code: str = Field("PKR", description="ISO 4217 currency code shown on receipts")
    locale: str = Field("en_PK", description="Locale for number and date formatting")
    number_prefix: str = Field("QD", description="Prefix for generated receipt numbers")

    organization_name: str = Field("The Quarterdeck", description="Masthead name")
    organization_tagline: str = Field(
        "Sports & Recreation Complex", description="Masthead subtitle"
    )
    organization_location: str = Field("Islamabad, Pakistan", description="Footer location")
    organization_website: str = Field("www.thequarterdeck.pk", description="Footer website")
    organization_email: str = Field("admin@thequarterdeck.pk", description="Footer email")

    timezone: str | None = Field(
        None, description="IANA zone for receipt dates and numbers; server local time when unset"
    )

    font_path: str | None = Field(
        None, description="TrueType font for receipt text; Helvetica when unset"
    )
    bold_font_path: str | None = Field(
        None, description="TrueType font for headings and totals; font_path when unset"
    )

    compress_pages: bool = Field(True, description="Compress PDF page streams")
    render_timeout_seconds: float | None = Field(
        None, gt=0, description="Optional timeout applied by ReceiptService around rendering"
    )

    @field_validator("currency_code")
    @classmethod
    def normalize_currency_code(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip()
        try:
            get_timezone(v)
        except (LookupError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("font_path", "bold_font_path")
    @classmethod
    def validate_font_path(cls, v: str | None) -> str | None:
        if not v:
            return None
        if not Path(v).is_file():
            raise ValueError(f"Font file not found: {v}")
        return v

    @field_validator("number_prefix")
    @classmethod
    def validate_number_prefix(cls, v: str) -> str:
        v = v.strip().upper()
        if not v or not all(part.isalpha() for part in v.split("-")):
            raise ValueError("number_prefix must be letters separated by hyphens")
        return v


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field("quarterdeck", description="Application name")
    environment: Environment = Field(Environment.DEVELOPMENT, description="Deployment environment")
    debug: bool = Field(False, description="Debug mode")
    testing: bool = Field(False, description="Testing mode")

    observability: ObservabilitySettings = ObservabilitySettings()  # type: ignore[call-arg]
    receipts: ReceiptSettings = ReceiptSettings()  # type: ignore[call-arg]

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.testing or self.environment == Environment.TEST


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore
    return _settings


def reset_settings() -> None:
    """Reset settings (mainly for testing)."""
    global _settings
    _settings = None


# Convenience export
settings = get_settings()
