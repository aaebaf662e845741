"""
Reminder Notifications

DESIGN DECISION: Notifications are fire-and-forget. The recurrence engine
builds a Notification and hands it to a notifier; delivery, permissions and
presentation belong to the notifier. A failed delivery must never stop the
sweep that triggered it.
"""

from abc import ABC, abstractmethod

import structlog
from pydantic import BaseModel, Field

from expense_tracker.models.expense import Expense


REMINDER_TITLE = "Expense Reminder"


class Notification(BaseModel):
    """Payload delivered to the user."""

    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)


class NotificationError(Exception):
    """Raised by a notifier that could not deliver a notification."""
    pass


class NotifierInterface(ABC):
    """Anything that can deliver a Notification to the user."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """
        Deliver a notification.

        Raises:
            NotificationError: If delivery fails
        """
        pass


class LogNotifier(NotifierInterface):
    """Writes reminders to the structured log (headless/default delivery)."""

    def __init__(self):
        self._logger = structlog.get_logger("expense_tracker.notifications")

    def notify(self, notification: Notification) -> None:
        self._logger.info(
            "notification",
            title=notification.title,
            body=notification.body,
        )


def build_due_reminder(expense: Expense, currency_symbol: str = "$") -> Notification:
    """Reminder for a recurring expense that is due today."""
    return Notification(
        title=REMINDER_TITLE,
        body=f"{expense.name}: {currency_symbol}{expense.amount:.2f} is due today.",
    )
