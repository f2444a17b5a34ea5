"""
Unit tests for resolver settings.

Covers defaults, validation of backend and cache-time overrides, and
environment loading.
"""

import pytest
from pydantic import ValidationError

from hypixel_resolver.constants import DEFAULT_CACHE_TIMES, HYPIXEL_API_URL, MAX_CACHE_TIME
from hypixel_resolver.core.config import Settings, get_settings


class TestSettings:
    """Test Settings validation."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings(_env_file=None)

        assert settings.HYPIXEL_API_URL == HYPIXEL_API_URL
        assert settings.CACHE_BACKEND == "memory"
        assert settings.CACHE_KEY_PREFIX == "hypixel"
        assert settings.HTTP_TIMEOUT_SECONDS == 10.0
        assert settings.cache_times() == DEFAULT_CACHE_TIMES

    def test_cache_backend_normalized(self):
        """Test backend name is trimmed and lower-cased."""
        settings = Settings(_env_file=None, CACHE_BACKEND=" Redis ")
        assert settings.CACHE_BACKEND == "redis"

    def test_unknown_cache_backend_rejected(self):
        """Test unknown backend names fail validation."""
        with pytest.raises(ValidationError, match="CACHE_BACKEND"):
            Settings(_env_file=None, CACHE_BACKEND="sqlite")

    def test_cache_time_overrides_applied(self):
        """Test overrides replace defaults for named types only."""
        settings = Settings(_env_file=None, CACHE_TIME_OVERRIDES={"Player": 30})
        times = settings.cache_times()

        assert times["player"] == 30
        assert times["uuid"] == DEFAULT_CACHE_TIMES["uuid"]

    def test_unknown_cache_type_override_rejected(self):
        """Test overrides for unknown cache types fail validation."""
        with pytest.raises(ValidationError, match="Unknown cache type"):
            Settings(_env_file=None, CACHE_TIME_OVERRIDES={"skins": 30})

    def test_negative_cache_time_override_rejected(self):
        """Test negative overrides fail validation."""
        with pytest.raises(ValidationError, match="cannot be negative"):
            Settings(_env_file=None, CACHE_TIME_OVERRIDES={"player": -1})

    def test_cache_time_override_above_max_rejected(self):
        """Test overrides beyond the max sentinel fail validation, not at repository build."""
        with pytest.raises(ValidationError, match="too large"):
            Settings(_env_file=None, CACHE_TIME_OVERRIDES={"uuid": MAX_CACHE_TIME + 1})

    def test_cache_time_override_at_max_accepted(self):
        """Test the sentinel itself is a valid override."""
        settings = Settings(_env_file=None, CACHE_TIME_OVERRIDES={"uuid": MAX_CACHE_TIME})
        assert settings.cache_times()["uuid"] == MAX_CACHE_TIME

    def test_non_positive_timeout_rejected(self):
        """Test the transport timeout must be positive."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, HTTP_TIMEOUT_SECONDS=0)

    def test_log_level_upper_cased(self):
        """Test log level normalization and validation."""
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            Settings(_env_file=None, LOG_LEVEL="verbose")

    def test_reads_environment(self, monkeypatch):
        """Test values are loaded from environment variables."""
        monkeypatch.setenv("HYPIXEL_API_KEY", "8a5c2f6e-0f3d-4d7e-9b6a-1c2d3e4f5a6b")
        monkeypatch.setenv("CACHE_TIME_OVERRIDES", '{"uuid": 60}')

        settings = Settings(_env_file=None)

        assert settings.HYPIXEL_API_KEY == "8a5c2f6e-0f3d-4d7e-9b6a-1c2d3e4f5a6b"
        assert settings.cache_times()["uuid"] == 60

    def test_get_settings_is_cached(self):
        """Test settings are built once."""
        assert get_settings() is get_settings()
