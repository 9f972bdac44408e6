"""
Main Orchestrator for Studio Manager

This module ties the components together:
1. Settings → storage backend → state store
2. State store → StudioState (loaded once)
3. StudioState → ledger, roster, scheduler (sharing the same state)

DESIGN DECISION: There is exactly one StudioState per app instance.
Every operation mutates it in place and then saves explicitly; the
front end only reads from it.
"""

from typing import Optional

from studio.audit import AuditLogger, configure_logging
from studio.config import Settings, StorageSettings, get_settings
from studio.models.state import StudioState
from studio.operations import AppointmentScheduler, ClientRoster, TransactionLedger
from studio.services.storage import (
    InMemoryStorage,
    KeyValueStorageInterface,
    LocalFileStorage,
    StateStore,
)


class StudioApp:
    """
    The assembled application.

    Attributes:
        state: The in-memory collections
        ledger: Transaction operations
        roster: Client operations
        scheduler: Appointment operations (completes into ledger and roster)
        store: Persistence for the collections
        audit_logger: Activity log
    """

    def __init__(
        self,
        state: StudioState,
        store: StateStore,
        audit_logger: AuditLogger,
    ):
        self.state = state
        self.store = store
        self.audit_logger = audit_logger
        self.ledger = TransactionLedger(state, store, audit_logger)
        self.roster = ClientRoster(state, store, audit_logger)
        self.scheduler = AppointmentScheduler(
            state,
            store,
            ledger=self.ledger,
            roster=self.roster,
            audit_logger=audit_logger,
        )

    def storage_description(self) -> str:
        return self.store.storage.describe()


def create_storage(settings: StorageSettings) -> KeyValueStorageInterface:
    """Build the configured storage backend."""
    if settings.backend == "memory":
        return InMemoryStorage()
    return LocalFileStorage(settings.data_dir)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
    setup_logging: bool = True,
) -> StudioApp:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        storage: Storage backend override (tests pass InMemoryStorage).
        setup_logging: Whether to (re)configure structlog.

    Returns:
        A StudioApp with its state loaded from storage
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    if setup_logging:
        configure_logging(app_settings.log_level)

    audit_logger = AuditLogger(recent_limit=app_settings.recent_events_limit)
    store = StateStore(
        storage or create_storage(storage_settings),
        settings=storage_settings,
        audit_logger=audit_logger,
    )
    state = store.load()

    return StudioApp(state, store, audit_logger)
