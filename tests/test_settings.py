"""
Unit Tests for Application Settings Configuration

Tests for:
- Default values
- Loading top-level and nested settings from environment variables
- Custom validators (database URL, log level)
- Settings caching and clearing
"""

import pytest
from pydantic import ValidationError

from permissioned_voting.config.settings import (
    DatabaseSettings,
    ElectionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from permissioned_voting.domain.shared.constants import ConfigKeys


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in (
        ConfigKeys.ENVIRONMENT,
        ConfigKeys.DEBUG,
        ConfigKeys.LOG_LEVEL,
        ConfigKeys.DATABASE_URL,
        ConfigKeys.ELECTION_SESSION_ID,
        ConfigKeys.ELECTION_ADMINISTRATOR,
    ):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# DatabaseSettings Tests
# =============================================================================


class TestDatabaseSettings:
    """Unit tests for DatabaseSettings configuration."""

    def test_create_with_defaults(self):
        db = DatabaseSettings()

        assert db.url == "sqlite:///data/voting.db"
        assert db.busy_timeout_ms == 5000
        assert db.connection_timeout_s == 10

    def test_custom_sqlite_url(self):
        assert DatabaseSettings(url="sqlite:///custom/path.db").url == "sqlite:///custom/path.db"

    def test_non_sqlite_url_rejected(self):
        with pytest.raises(ValidationError, match="Database URL must start with sqlite://"):
            DatabaseSettings(url="postgresql://localhost/db")

    def test_url_aliases(self):
        assert DatabaseSettings(database_url="sqlite:///a.db").url == "sqlite:///a.db"
        assert DatabaseSettings(db_url="sqlite:///b.db").url == "sqlite:///b.db"

    def test_busy_timeout_bounds(self):
        with pytest.raises(ValidationError, match="greater than or equal to 1000"):
            DatabaseSettings(busy_timeout_ms=999)
        with pytest.raises(ValidationError, match="less than or equal to 30000"):
            DatabaseSettings(busy_timeout_ms=30001)

    def test_connection_timeout_bounds(self):
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            DatabaseSettings(connection_timeout_s=0)
        with pytest.raises(ValidationError, match="less than or equal to 60"):
            DatabaseSettings(connection_timeout_s=61)

    def test_immutability(self):
        db = DatabaseSettings()

        with pytest.raises(ValidationError):
            db.url = "sqlite:///new.db"


# =============================================================================
# ElectionSettings Tests
# =============================================================================


class TestElectionSettings:
    """Unit tests for ElectionSettings configuration."""

    def test_defaults(self):
        election = ElectionSettings()

        assert election.session_id == "default"
        assert election.administrator == ""

    def test_aliases(self):
        election = ElectionSettings(session="board-2024", admin="chair")

        assert election.session_id == "board-2024"
        assert election.administrator == "chair"

    def test_invalid_session_name(self):
        with pytest.raises(ValidationError):
            ElectionSettings(session_id="not allowed!")


# =============================================================================
# Settings Tests
# =============================================================================


class TestSettings:
    """Unit tests for the main Settings container."""

    def test_create_with_all_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.election, ElectionSettings)

    def test_load_from_environment_variables(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        settings = Settings(_env_file=None)

        assert settings.environment == "production"
        assert settings.log_level == "WARNING"

    def test_load_nested_settings_from_env(self, monkeypatch):
        monkeypatch.setenv(ConfigKeys.DATABASE_URL, "sqlite:///env.db")
        monkeypatch.setenv(ConfigKeys.ELECTION_ADMINISTRATOR, "chair")

        settings = Settings(_env_file=None)

        assert settings.database.url == "sqlite:///env.db"
        assert settings.election.administrator == "chair"

    def test_environment_validation(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")

        with pytest.raises(ValidationError, match="Input should be"):
            Settings(_env_file=None)

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_log_level_invalid(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError, match="Invalid log level"):
            Settings(_env_file=None)

    def test_nested_validation_propagates(self, monkeypatch):
        monkeypatch.setenv(ConfigKeys.DATABASE_URL, "mysql://localhost/db")

        with pytest.raises(ValidationError, match="Database URL must start with"):
            Settings(_env_file=None)


# =============================================================================
# Settings Caching Tests
# =============================================================================


class TestSettingsCaching:
    """Unit tests for the settings cache."""

    def test_get_settings_returns_cached_instance(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")

        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        first = get_settings()

        clear_settings_cache()
        monkeypatch.setenv("ENVIRONMENT", "production")
        second = get_settings()

        assert first is not second
        assert first.environment == "test"
        assert second.environment == "production"
