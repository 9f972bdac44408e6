"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
Local JSON files back the real app; memory backs tests.
"""

from studio.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from studio.services.storage.local_file import LocalFileStorage
from studio.services.storage.memory import InMemoryStorage
from studio.services.storage.state_store import StateStore

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "LocalFileStorage",
    # Collections
    "StateStore",
]
