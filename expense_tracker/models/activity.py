"""
Activity Models

Every ledger mutation and every automatic action (recurrence, migration)
is described by an ActivityEvent and written to the structured log.

DESIGN DECISION: Activity events go to the local log only. They are never
persisted next to the ledger, so there is no historical audit trail to
keep in sync with the expenses themselves.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of ledger activity we log."""
    # User actions
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REJECTED = "expense_rejected"
    EXPENSE_DELETED = "expense_deleted"
    BUDGET_SET = "budget_set"
    BUDGET_REJECTED = "budget_rejected"

    # Start-up
    STATE_LOADED = "state_loaded"
    LEGACY_MIGRATION_APPLIED = "legacy_migration_applied"
    RECURRENCE_GENERATED = "recurrence_generated"
    SWEEP_COMPLETED = "sweep_completed"
    SWEEP_SKIPPED = "sweep_skipped"

    # Failures
    NOTIFICATION_FAILED = "notification_failed"
    STORAGE_ERROR = "storage_error"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single logged ledger activity."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # Context - which expense or budget is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'ledger')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Expense id or budget category"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.expense_added(expense_id, name, amount)
        event = ActivityEventBuilder.sweep_completed(generated, today)
    """

    @staticmethod
    def expense_added(
        expense_id: int,
        name: str,
        amount: str,
        recurring: bool,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense added: {name} - {amount}",
            details={
                "name": name,
                "amount": amount,
                "recurring": recurring,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_rejected(issues: list[dict]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_type="expense",
            description=f"Expense rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(expense_id: int, found: bool) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_DELETED,
            severity=ActivitySeverity.INFO if found else ActivitySeverity.WARNING,
            entity_type="expense",
            entity_id=str(expense_id),
            description=(
                f"Expense {expense_id} deleted"
                if found
                else f"Expense {expense_id} not found, nothing deleted"
            ),
            details={"found": found},
            is_user_action=True,
        )

    @staticmethod
    def budget_set(category: str, amount: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=category,
            description=f"Budget set for {category}: {amount}",
            details={"amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def budget_rejected(category: Optional[str], issues: list[dict]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.BUDGET_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_type="budget",
            entity_id=category,
            description=f"Budget rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def state_loaded(expense_count: int, budget_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STATE_LOADED,
            entity_type="ledger",
            description=f"Loaded {expense_count} expenses and {budget_count} budgets",
            details={
                "expense_count": expense_count,
                "budget_count": budget_count,
            },
        )

    @staticmethod
    def legacy_migration_applied(migrated_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LEGACY_MIGRATION_APPLIED,
            severity=ActivitySeverity.WARNING,
            entity_type="ledger",
            description=f"Migrated {migrated_count} legacy expense records",
            details={"migrated_count": migrated_count},
        )

    @staticmethod
    def recurrence_generated(
        source_id: int,
        clone_id: int,
        due_date: str,
        next_date: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECURRENCE_GENERATED,
            entity_type="expense",
            entity_id=str(clone_id),
            description=f"Recurring expense {source_id} generated occurrence {clone_id}",
            details={
                "source_id": source_id,
                "due_date": due_date,
                "next_date": next_date,
            },
        )

    @staticmethod
    def sweep_completed(generated_count: int, today: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SWEEP_COMPLETED,
            entity_type="ledger",
            description=f"Recurrence sweep for {today} generated {generated_count} expenses",
            details={
                "generated_count": generated_count,
                "today": today,
            },
        )

    @staticmethod
    def sweep_skipped(reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SWEEP_SKIPPED,
            severity=ActivitySeverity.WARNING,
            entity_type="ledger",
            description=f"Recurrence sweep skipped: {reason}",
        )

    @staticmethod
    def notification_failed(title: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.NOTIFICATION_FAILED,
            severity=ActivitySeverity.ERROR,
            description=f"Notification could not be delivered: {title}",
            error_message=error_message,
        )

    @staticmethod
    def storage_error(operation: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_ERROR,
            severity=ActivitySeverity.ERROR,
            entity_type="ledger",
            description=f"Storage {operation} failed",
            error_message=error_message,
            details={"operation": operation},
        )
