"""Tests for the key-value storage backends and the state store."""

import json
from datetime import date, time

import pytest

from studio.audit import AuditLogger
from studio.config import StorageSettings
from studio.models.audit import AuditEventType
from studio.models.records import Appointment, Client, Transaction
from studio.models.state import StudioState
from studio.services.storage import (
    InMemoryStorage,
    LocalFileStorage,
    StateStore,
    StorageReadError,
    StorageWriteError,
)


class FailingStorage(InMemoryStorage):
    """Storage whose writes always fail."""

    def set_item(self, key: str, value: str) -> None:
        raise StorageWriteError(f"quota exceeded for {key}")


class TestInMemoryStorage:
    """Tests for the dictionary-backed storage."""

    def test_missing_key_returns_none(self):
        """Test that unknown keys read as None."""
        assert InMemoryStorage().get_item("clients") is None

    def test_set_overwrites(self):
        """Test that set_item replaces the previous value."""
        storage = InMemoryStorage()
        storage.set_item("clients", "[1]")
        storage.set_item("clients", "[2]")
        assert storage.get_item("clients") == "[2]"
        assert storage.keys() == ["clients"]

    def test_remove_item(self):
        """Test removal of present and absent keys."""
        storage = InMemoryStorage({"clients": "[]"})
        assert storage.remove_item("clients") is True
        assert storage.remove_item("clients") is False


class TestLocalFileStorage:
    """Tests for the JSON file backend."""

    def test_missing_file_returns_none(self, tmp_path):
        """Test that a key never written reads as None."""
        assert LocalFileStorage(tmp_path).get_item("transactions") is None

    def test_set_creates_directory_and_file(self, tmp_path):
        """Test that the data directory is created on first write."""
        data_dir = tmp_path / "data"
        storage = LocalFileStorage(data_dir)
        storage.set_item("transactions", '[{"description": "Serviço"}]')

        assert (data_dir / "transactions.json").read_text(encoding="utf-8") == '[{"description": "Serviço"}]'
        assert storage.get_item("transactions") == '[{"description": "Serviço"}]'
        assert storage.keys() == ["transactions"]

    def test_unreadable_entry_raises_read_error(self, tmp_path):
        """Test that a directory in place of the file is a read error."""
        (tmp_path / "clients.json").mkdir()
        with pytest.raises(StorageReadError):
            LocalFileStorage(tmp_path).get_item("clients")

    def test_unwritable_directory_raises_write_error(self, tmp_path):
        """Test that a file in place of the data directory is a write error."""
        blocker = tmp_path / "data"
        blocker.write_text("not a directory")
        with pytest.raises(StorageWriteError):
            LocalFileStorage(blocker).set_item("clients", "[]")

    def test_remove_item(self, tmp_path):
        """Test removing files."""
        storage = LocalFileStorage(tmp_path)
        storage.set_item("clients", "[]")
        assert storage.remove_item("clients") is True
        assert storage.remove_item("clients") is False
        assert storage.keys() == []


class TestStateStore:
    """Tests for loading and saving the three collections."""

    def test_empty_storage_loads_empty_state(self):
        """Test that missing keys default to empty collections."""
        state = StateStore(InMemoryStorage()).load()
        assert state.transactions == []
        assert state.appointments == []
        assert state.clients == []

    def test_corrupt_collection_defaults_to_empty(self):
        """Test that one corrupt key does not affect the others."""
        client = Client(name="Ana")
        storage = InMemoryStorage({
            "transactions": "{not json",
            "clients": json.dumps([client.to_storage_dict()]),
        })
        audit_logger = AuditLogger()

        state = StateStore(storage, audit_logger=audit_logger).load()

        assert state.transactions == []
        assert [c.name for c in state.clients] == ["Ana"]
        failures = [
            e for e in audit_logger.recent_events()
            if e.event_type == AuditEventType.STORAGE_LOAD_FAILED
        ]
        assert len(failures) == 1
        assert failures[0].details["collection"] == "transactions"

    def test_invalid_record_defaults_to_empty(self):
        """Test that a schema violation counts as corruption."""
        storage = InMemoryStorage({"transactions": '[{"description": "x", "amount": -5}]'})
        state = StateStore(storage).load()
        assert state.transactions == []

    def test_save_writes_whole_collection_in_camel_case(self):
        """Test the persisted layout."""
        storage = InMemoryStorage()
        state = StudioState()
        state.appointments.append(Appointment(
            client_name="Ana",
            service="Manicure",
            date=date(2024, 6, 1),
            time=time(10, 0),
            price=50,
        ))

        assert StateStore(storage).save_appointments(state) is True

        stored = json.loads(storage.get_item("appointments"))
        assert stored[0]["clientName"] == "Ana"
        assert stored[0]["time"] == "10:00"
        assert stored[0]["price"] == 50
        assert storage.get_item("transactions") is None

    def test_saved_state_loads_back(self, tmp_path):
        """Test a save followed by a fresh load from the file backend."""
        storage = LocalFileStorage(tmp_path)
        state = StudioState()
        state.transactions.append(Transaction(
            description="Serviço: Manicure - Ana",
            amount=50,
            type="income",
            date=date(2024, 6, 1),
        ))
        StateStore(storage).save(state)

        loaded = StateStore(LocalFileStorage(tmp_path)).load()
        assert loaded.transactions == state.transactions

    def test_custom_keys(self):
        """Test that collection keys come from settings."""
        storage = InMemoryStorage()
        settings = StorageSettings(clients_key="studio_clients")
        state = StudioState(clients=[Client(name="Ana")])

        StateStore(storage, settings=settings).save_clients(state)

        assert storage.get_item("studio_clients") is not None
        assert storage.get_item("clients") is None

    def test_save_failure_is_logged_not_raised(self):
        """Test that a failed write leaves state alone and logs an error."""
        audit_logger = AuditLogger()
        store = StateStore(FailingStorage(), audit_logger=audit_logger)
        state = StudioState(clients=[Client(name="Ana")])

        assert store.save(state) is False

        assert len(state.clients) == 1
        failures = [
            e for e in audit_logger.recent_events()
            if e.event_type == AuditEventType.STORAGE_SAVE_FAILED
        ]
        assert {e.details["collection"] for e in failures} == {"transactions", "appointments", "clients"}
