"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for storage.
This allows us to:
1. Keep collections in local JSON files for the real app
2. Use in-memory storage for testing
3. Keep the record logic decoupled from where bytes end up

The interface is intentionally tiny: each collection is one key whose
value is the whole serialized collection, overwritten on every save.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for local key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored text, or None if the key was never written

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> bool:
        """
        Delete a key.

        Returns:
            True if the key existed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the keys currently stored."""
        pass

    def describe(self) -> str:
        """Short human-readable description of where data lives."""
        return type(self).__name__


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """A stored value could not be read."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written."""
    pass
