"""Tests for settings loaded from the environment."""

import pytest

from payroll_advances.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate settings from the host environment and any .env file."""
    for name in ("STORAGE_BACKEND", "STORAGE_PATH", "DATABASE_URL", "HOST", "PORT", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("payroll_advances.config.load_dotenv", lambda: None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Test Settings.from_env."""

    def test_defaults(self):
        settings = Settings.from_env()

        assert settings.storage_backend == "file"
        assert settings.storage_path == "advance_ledger.json"
        assert settings.database_url == "sqlite:///advance_ledger.db"
        assert settings.port == 8000
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "Database")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.storage_backend == "database"
        assert settings.database_url == "sqlite:///other.db"
        assert settings.port == 9001
        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "redis")

        with pytest.raises(ValueError, match="Unknown storage backend"):
            Settings.from_env()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
