"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stockflow.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class AuthSettings(BaseSettings):
    """Bearer token guard for the HTTP surface."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    enabled: bool = True
    api_tokens: list[str] = []


class ReorderSettings(BaseSettings):
    """Automatic reorder policy."""

    model_config = SettingsConfigDict(env_prefix="REORDER_")

    lead_time_days: int = Field(default=3, ge=1)
    # Order up to threshold plus this share of the threshold
    buffer_ratio: Decimal = Decimal("0.2")
    # Orders smaller than this share of the threshold are not worth placing
    min_order_ratio: Decimal = Decimal("0.1")


class OrderSettings(BaseSettings):
    """Purchase order lifecycle configuration."""

    model_config = SettingsConfigDict(env_prefix="ORDERS_")

    default_lead_time_days: int = Field(default=3, ge=1)
    # Count PENDING order quantities against warehouse capacity
    reserve_pending_capacity: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stockflow Inventory Service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    reorder: ReorderSettings = Field(default_factory=ReorderSettings)
    orders: OrderSettings = Field(default_factory=OrderSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
