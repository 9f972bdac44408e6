"""Tests for environment-driven settings and app wiring."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from studio.config import AppSettings, Settings, StorageSettings, get_settings, validate_all_settings
from studio.orchestrator import create_app_components, create_storage
from studio.services.storage import InMemoryStorage, LocalFileStorage


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run each test away from any local .env and with a fresh settings cache."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "STUDIO_STORAGE_BACKEND",
        "STUDIO_STORAGE_DATA_DIR",
        "STUDIO_STORAGE_CLIENTS_KEY",
        "LOG_LEVEL",
        "RECENT_EVENTS_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for settings defaults and overrides."""

    def test_defaults(self):
        """Test the out-of-the-box configuration."""
        storage = StorageSettings()
        assert storage.backend == "file"
        assert storage.data_dir == Path(".studio_data")
        assert (storage.transactions_key, storage.appointments_key, storage.clients_key) == (
            "transactions", "appointments", "clients",
        )
        assert AppSettings().log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        """Test STUDIO_STORAGE_* and app variables."""
        monkeypatch.setenv("STUDIO_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("STUDIO_STORAGE_CLIENTS_KEY", "studio_clients")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings()
        assert settings.storage.backend == "memory"
        assert settings.storage.clients_key == "studio_clients"
        assert settings.app.log_level == "DEBUG"

    def test_rejects_path_separator_in_key(self):
        """Test that keys cannot escape the data directory."""
        with pytest.raises(ValidationError):
            StorageSettings(clients_key="../clients")

    def test_validate_all_settings(self, monkeypatch):
        """Test the per-section health report."""
        assert validate_all_settings() == {"storage": True, "app": True}

        monkeypatch.setenv("STUDIO_STORAGE_BACKEND", "cloud")
        get_settings.cache_clear()
        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["app"] is True


class TestWiring:
    """Tests for building the app from settings."""

    def test_create_storage(self, tmp_path):
        """Test backend selection."""
        assert isinstance(create_storage(StorageSettings(backend="memory")), InMemoryStorage)
        assert isinstance(create_storage(StorageSettings(data_dir=tmp_path)), LocalFileStorage)

    def test_app_reloads_persisted_state(self, monkeypatch, tmp_path):
        """Test that a second app instance sees the first one's data."""
        monkeypatch.setenv("STUDIO_STORAGE_DATA_DIR", str(tmp_path / "data"))

        first = create_app_components(settings=Settings(), setup_logging=False)
        first.roster.add("Ana")

        second = create_app_components(settings=Settings(), setup_logging=False)
        assert [c.name for c in second.roster.clients] == ["Ana"]
        assert str((tmp_path / "data").resolve()) in second.storage_description()
