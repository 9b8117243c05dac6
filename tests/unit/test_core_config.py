"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from conduit.core.config import Settings, get_settings
from conduit.core.enums import BackoffStrategy, Environment


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CONDUIT_ENVIRONMENT", raising=False)

        settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.request_timeout_seconds == 30.0
        assert settings.retry_count == 3
        assert settings.retry_backoff == BackoffStrategy.EXPONENTIAL
        assert settings.is_development

    def test_reads_prefixed_environment_variables(self, monkeypatch):
        monkeypatch.setenv("CONDUIT_ENVIRONMENT", "ci")
        monkeypatch.setenv("CONDUIT_REQUEST_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("CONDUIT_RETRY_BACKOFF", "linear")
        monkeypatch.setenv("CONDUIT_LOG_LEVEL", "debug")
        monkeypatch.setenv("CONDUIT_INVENTORY_SERVICE_URL", "http://inventory:8081/")

        settings = Settings()

        assert settings.is_testing
        assert settings.request_timeout_seconds == 2.5
        assert settings.retry_backoff == BackoffStrategy.LINEAR
        assert settings.log_level == "DEBUG"
        assert settings.inventory_service_url == "http://inventory:8081"

    @pytest.mark.parametrize(
        ("variable", "value"),
        [
            ("CONDUIT_REQUEST_TIMEOUT_SECONDS", "0"),
            ("CONDUIT_RETRY_COUNT", "-1"),
            ("CONDUIT_RETRY_JITTER", "1.5"),
            ("CONDUIT_LOG_LEVEL", "loud"),
            ("CONDUIT_CIRCUIT_BREAKER_FAILURE_THRESHOLD", "0"),
        ],
    )
    def test_rejects_out_of_range_values(self, monkeypatch, variable, value):
        monkeypatch.setenv(variable, value)

        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_production_flag(self, monkeypatch):
        monkeypatch.setenv("CONDUIT_ENVIRONMENT", "production")

        settings = Settings()

        assert settings.is_production
        assert not settings.is_testing
