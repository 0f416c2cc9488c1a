"""
Unit Tests for Settings

Tests environment loading and validation.
"""

import pytest
from pydantic import ValidationError

from haven.config.settings import CrisisSettings, DatabaseSettings, Settings


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self) -> None:
        """Test crisis defaults match the engine defaults."""
        settings = Settings()

        assert settings.crisis.intervention_threshold == 8
        assert settings.crisis.persistence_timeout_seconds == 5.0
        assert settings.crisis.notifier == "logging"
        assert not settings.is_production()

    def test_crisis_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test crisis settings load from HAVEN_CRISIS_ variables."""
        monkeypatch.setenv("HAVEN_CRISIS_INTERVENTION_THRESHOLD", "7")
        monkeypatch.setenv("HAVEN_CRISIS_NOTIFIER", "sentry")

        crisis = CrisisSettings()

        assert crisis.intervention_threshold == 7
        assert crisis.notifier == "sentry"

    def test_threshold_range(self) -> None:
        """Test the threshold must stay on the 0-10 scale."""
        with pytest.raises(ValidationError):
            CrisisSettings(intervention_threshold=11)

    def test_database_url_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a full URL overrides the assembled one."""
        monkeypatch.setenv("HAVEN_DB_URL", "sqlite+aiosqlite:///crisis.db")

        assert DatabaseSettings().async_url == "sqlite+aiosqlite:///crisis.db"

    def test_password_is_secret(self) -> None:
        """Test the password never appears in repr."""
        settings = DatabaseSettings(password="hunter2")

        assert "hunter2" not in repr(settings)
