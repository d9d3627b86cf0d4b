"""
Configuration management for the storefront client
"""


import threading

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    api_base_url: str = Field(
        default="http://localhost:8080/api", description="Store backend base URL"
    )
    request_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Per-request timeout"
    )

    # Session
    session_expiry_leeway_seconds: float = Field(
        default=30.0,
        ge=0,
        description="Treat sessions expiring within this window as already expired",
    )

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Application environment")
    log_dir: str = Field(default="logs", description="Directory for log files")
    enable_json_logs: bool = Field(default=False, description="Write JSON log file")

    # Checkout
    currency: str = Field(default="INR", min_length=3, max_length=3, description="Currency code")
    default_country: str = Field(default="India", description="Pre-filled shipping country")

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("api_base_url must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings (useful for testing)"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
