"""
Activity Logger

DESIGN DECISION: Every ledger mutation and every automatic action is logged.
This provides:
1. Traceability of what the recurrence sweep generated
2. Debugging capability when stored state looks wrong
3. A record of rejected input

The activity logger:
- Writes structured JSON lines through structlog
- Is local only (nothing is persisted next to the ledger)
"""

import logging
import sys
from typing import Optional

import structlog

from expense_tracker.models.activity import ActivityEvent, ActivityEventBuilder
from expense_tracker.models.expense import Expense, ValidationResult


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route stdlib logging (and therefore structlog) to stderr at ``level``.

    structlog filters by the stdlib logger level, so without this only
    warnings and errors would ever be written.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self, logger_name: str = "expense_tracker.activity"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("activity_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("activity_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_expense_added(self, expense: Expense) -> None:
        self.log(ActivityEventBuilder.expense_added(
            expense_id=expense.id,
            name=expense.name,
            amount=str(expense.amount),
            recurring=expense.recurring,
        ))

    def log_expense_rejected(self, result: ValidationResult) -> None:
        issues = [
            {"field": i.field, "type": i.issue_type, "message": i.message}
            for i in result.issues
        ]
        self.log(ActivityEventBuilder.expense_rejected(issues))

    def log_expense_deleted(self, expense_id: int, found: bool) -> None:
        self.log(ActivityEventBuilder.expense_deleted(expense_id, found))

    def log_budget_set(self, category: str, amount: str) -> None:
        self.log(ActivityEventBuilder.budget_set(category, amount))

    def log_budget_rejected(
        self,
        category: Optional[str],
        result: ValidationResult,
    ) -> None:
        issues = [
            {"field": i.field, "type": i.issue_type, "message": i.message}
            for i in result.issues
        ]
        self.log(ActivityEventBuilder.budget_rejected(category, issues))

    def log_recurrence_generated(self, source: Expense, clone: Expense) -> None:
        self.log(ActivityEventBuilder.recurrence_generated(
            source_id=source.id,
            clone_id=clone.id,
            due_date=clone.expense_date.isoformat(),
            next_date=clone.next_date.isoformat() if clone.next_date else "",
        ))

    def log_error(self, operation: str, error_message: str) -> None:
        """Log a storage failure."""
        self.log(ActivityEventBuilder.storage_error(operation, error_message))
