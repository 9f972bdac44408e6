"""Services package."""

from studio.services.storage import (
    InMemoryStorage,
    KeyValueStorageInterface,
    LocalFileStorage,
    StateStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "InMemoryStorage",
    "KeyValueStorageInterface",
    "LocalFileStorage",
    "StateStore",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
