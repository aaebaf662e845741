"""
Storage Services Package

Provides the key-value storage interface, its implementations (local JSON
files, Google Sheets, in-memory) and the repository that maps the ledger
onto storage slots.
"""

from expense_tracker.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsStore,
)
from expense_tracker.services.storage.interface import (
    ConnectionError,
    CorruptStateError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)
from expense_tracker.services.storage.local import InMemoryStore, JsonFileStore
from expense_tracker.services.storage.migration import migrate_legacy_records
from expense_tracker.services.storage.repository import (
    BUDGETS_SLOT,
    EXPENSES_SLOT,
    LedgerRepository,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "ConnectionError",
    "CorruptStateError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsStore",
    "InMemoryStore",
    "JsonFileStore",
    # Migration
    "migrate_legacy_records",
    # Repository
    "BUDGETS_SLOT",
    "EXPENSES_SLOT",
    "LedgerRepository",
]
