"""
Hypixel Resolver Configuration

Configuration management with environment variable support.
Settings are validated and read once at client construction.
"""

from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    DEFAULT_CACHE_TIMES,
    HYPIXEL_API_URL,
    MAX_CACHE_TIME,
    MOJANG_PROFILE_URL,
)

CACHE_BACKENDS = ("memory", "redis", "file")


class Settings(BaseSettings):
    """Resolver settings with validation and secure defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # Remote service
    HYPIXEL_API_KEY: Optional[str] = Field(
        default=None, description="API key sent with every request"
    )
    HYPIXEL_API_URL: str = Field(
        default=HYPIXEL_API_URL, description="Base URL of the statistics API"
    )
    MOJANG_PROFILE_URL: str = Field(
        default=MOJANG_PROFILE_URL,
        description="Identity provider URL template with a {username} slot",
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0, gt=0, le=120, description="Transport timeout (no retries)"
    )

    # Cache store
    CACHE_BACKEND: str = Field(
        default="memory", description="Cache backend: memory, redis or file"
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    CACHE_KEY_PREFIX: str = Field(
        default="hypixel", min_length=1, description="Namespace for cache keys"
    )
    CACHE_DIRECTORY: str = Field(
        default=".hypixel-cache", description="Root directory for the file backend"
    )
    CACHE_TIME_OVERRIDES: Dict[str, int] = Field(
        default_factory=dict,
        description="Cache type name -> seconds, overriding the defaults",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_JSON: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("CACHE_BACKEND")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        """Validate cache backend name."""
        v = v.strip().lower()
        if v not in CACHE_BACKENDS:
            raise ValueError(f"CACHE_BACKEND must be one of {', '.join(CACHE_BACKENDS)}")
        return v

    @field_validator("CACHE_TIME_OVERRIDES")
    @classmethod
    def validate_cache_time_overrides(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Only known cache types with non-negative times are accepted."""
        normalized = {}
        for name, seconds in v.items():
            key = name.strip().lower()
            if key not in DEFAULT_CACHE_TIMES:
                raise ValueError(f"Unknown cache type in CACHE_TIME_OVERRIDES: {name}")
            if seconds < 0:
                raise ValueError(f"Cache time for {name} cannot be negative")
            if seconds > MAX_CACHE_TIME:
                raise ValueError(
                    f"Cache time for {name} too large (max is the MAX_CACHE_TIME sentinel)"
                )
            normalized[key] = seconds
        return normalized

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(allowed)}")
        return v.upper()

    def cache_times(self) -> Dict[str, int]:
        """Default cache times with configured overrides applied."""
        times = dict(DEFAULT_CACHE_TIMES)
        times.update(self.CACHE_TIME_OVERRIDES)
        return times


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
