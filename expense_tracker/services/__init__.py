"""Services package."""

from expense_tracker.services.notifications import (
    LogNotifier,
    Notification,
    NotificationError,
    NotifierInterface,
)
from expense_tracker.services.storage import (
    ConnectionError,
    CorruptStateError,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    LedgerRepository,
    NotFoundError,
    StorageError,
)

__all__ = [
    # Notification services
    "LogNotifier",
    "Notification",
    "NotificationError",
    "NotifierInterface",
    # Storage services
    "ConnectionError",
    "CorruptStateError",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "LedgerRepository",
    "NotFoundError",
    "StorageError",
]
