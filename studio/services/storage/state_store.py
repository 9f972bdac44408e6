"""
State Store

Loads the three collections once at startup and writes a collection
back in full after every mutation.

Failure handling:
- A missing key loads as an empty collection.
- A corrupt or unreadable key loads as an empty collection and the
  failure is logged. It is never shown to the user.
- A failed save is logged. The in-memory state stays the source of
  truth for the rest of the session; nothing is retried.
"""

from typing import Optional

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from studio.audit import AuditLogger
from studio.config import StorageSettings
from studio.models.audit import AuditEventBuilder
from studio.models.records import Appointment, Client, Transaction
from studio.models.state import StudioState
from studio.services.storage.interface import KeyValueStorageInterface, StorageError


class StateStore:
    """Reads and writes StudioState collections through a key-value backend."""

    COLLECTIONS = ("transactions", "appointments", "clients")

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        settings: Optional[StorageSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        settings = settings or StorageSettings()
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._keys = {
            "transactions": settings.transactions_key,
            "appointments": settings.appointments_key,
            "clients": settings.clients_key,
        }
        self._adapters = {
            "transactions": TypeAdapter(list[Transaction]),
            "appointments": TypeAdapter(list[Appointment]),
            "clients": TypeAdapter(list[Client]),
        }

    @property
    def storage(self) -> KeyValueStorageInterface:
        return self._storage

    def key_for(self, collection: str) -> str:
        return self._keys[collection]

    def load(self) -> StudioState:
        """Load every collection; failures fall back to empty lists."""
        state = StudioState(
            transactions=self._load_collection("transactions"),
            appointments=self._load_collection("appointments"),
            clients=self._load_collection("clients"),
        )
        self._audit_logger.log(AuditEventBuilder.state_loaded({
            name: len(getattr(state, name)) for name in self.COLLECTIONS
        }))
        return state

    def _load_collection(self, collection: str) -> list:
        try:
            raw = self._storage.get_item(self._keys[collection])
            if raw is None:
                return []
            return self._adapters[collection].validate_json(raw)
        except (StorageError, ValidationError) as e:
            self._audit_logger.log_load_failed(collection, e)
            return []

    def save(self, state: StudioState, *collections: str) -> bool:
        """
        Write the named collections (all of them when none are named).

        Returns True if every write succeeded. Failures are logged, never raised.
        """
        ok = True
        for collection in collections or self.COLLECTIONS:
            ok = self._save_collection(collection, getattr(state, collection)) and ok
        return ok

    def save_transactions(self, state: StudioState) -> bool:
        return self.save(state, "transactions")

    def save_appointments(self, state: StudioState) -> bool:
        return self.save(state, "appointments")

    def save_clients(self, state: StudioState) -> bool:
        return self.save(state, "clients")

    def _save_collection(self, collection: str, records: list) -> bool:
        try:
            payload = self._adapters[collection].dump_json(records, by_alias=True)
            self._storage.set_item(self._keys[collection], payload.decode("utf-8"))
            return True
        except (StorageError, PydanticSerializationError) as e:
            self._audit_logger.log_save_failed(collection, e)
            return False
