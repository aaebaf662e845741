"""
Abstract Storage Interface

DESIGN DECISION: The tracker persists into a plain key-value store with
named slots (one for expenses, one for budgets). This allows us to:
1. Keep data in local JSON files by default
2. Swap in Google Sheets without touching ledger logic
3. Use in-memory storage for testing

The interface is intentionally minimal: read a slot, overwrite a slot.
There are no partial writes and no transactions; every save rewrites the
full slot.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for slot storage.

    Values are opaque strings (JSON documents in practice). Any backend
    (files, Google Sheets, memory) must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a slot.

        Args:
            key: Slot name (e.g. 'expenses')

        Returns:
            The stored value, or None if the slot was never written

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Overwrite a slot with a new value.

        Args:
            key: Slot name
            value: The complete new value

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Storage location (file, worksheet, spreadsheet) not found."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass


class CorruptStateError(StorageError):
    """Stored state could not be decoded into a valid ledger."""
    pass
