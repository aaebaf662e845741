"""Notification services package."""

from expense_tracker.services.notifications.notifier import (
    REMINDER_TITLE,
    LogNotifier,
    Notification,
    NotificationError,
    NotifierInterface,
    build_due_reminder,
)

__all__ = [
    "REMINDER_TITLE",
    "LogNotifier",
    "Notification",
    "NotificationError",
    "NotifierInterface",
    "build_due_reminder",
]
