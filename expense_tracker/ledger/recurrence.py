"""
Recurrence Engine

Materializes recurring expenses whose next occurrence has arrived.

GUARANTEES:
- Each due recurring expense produces exactly one standalone copy per sweep
- The copy is dated on the due date and carries the advanced schedule
- The source's schedule advances to the same date, so it is not due again
  until the next cycle
- Records appended during a sweep are never re-evaluated in that sweep

KNOWN LIMITATION: A sweep advances a schedule by one period only. If the
tracker was not opened for several periods, one occurrence is generated per
start-up rather than catching up on every missed period.
"""

from datetime import date
from typing import Optional, Sequence

from expense_tracker.activity import ActivityLogger
from expense_tracker.ledger.dates import next_occurrence
from expense_tracker.models.activity import ActivityEventBuilder
from expense_tracker.models.expense import Expense
from expense_tracker.services.notifications import (
    NotifierInterface,
    build_due_reminder,
)


def next_expense_id(ledger: Sequence[Expense]) -> int:
    """Next unused identifier: max existing id + 1, or 1 for an empty ledger."""
    return max((expense.id for expense in ledger), default=0) + 1


def is_due(expense: Expense, today: date) -> bool:
    """A recurring expense is due once its next date is today or earlier."""
    return (
        expense.recurring
        and expense.next_date is not None
        and expense.next_date <= today
    )


def run_recurrence_sweep(
    ledger: list[Expense],
    today: date,
    notifier: Optional[NotifierInterface] = None,
    activity_logger: Optional[ActivityLogger] = None,
    currency_symbol: str = "$",
) -> list[Expense]:
    """
    Run one sweep over ``ledger``, appending an occurrence for every due
    recurring expense.

    The ledger is mutated in place (clones appended, source schedules
    advanced). Persisting it afterwards is the caller's job.

    Args:
        ledger: The full ledger, in insertion order
        today: The current date
        notifier: Receives a reminder for expenses due exactly today
        activity_logger: Where generated occurrences are logged
        currency_symbol: Used in reminder text

    Returns:
        The occurrences appended by this sweep
    """
    activity = activity_logger or ActivityLogger()
    generated: list[Expense] = []

    # Snapshot so clones appended below are not swept again
    for source in list(ledger):
        if not is_due(source, today):
            continue

        due_date = source.next_date
        if due_date == today and notifier is not None:
            _send_reminder(notifier, source, activity, currency_symbol)

        advanced = next_occurrence(due_date, source.frequency)
        clone = source.model_copy(
            update={
                "id": next_expense_id(ledger),
                "expense_date": due_date,
                "next_date": advanced,
            },
            deep=True,
        )
        ledger.append(clone)
        source.next_date = advanced

        generated.append(clone)
        activity.log_recurrence_generated(source, clone)

    activity.log(ActivityEventBuilder.sweep_completed(
        generated_count=len(generated),
        today=today.isoformat(),
    ))
    return generated


def _send_reminder(
    notifier: NotifierInterface,
    expense: Expense,
    activity: ActivityLogger,
    currency_symbol: str,
) -> None:
    notification = build_due_reminder(expense, currency_symbol)
    try:
        notifier.notify(notification)
    except Exception as e:
        # Delivery is best-effort; the occurrence is still generated
        activity.log(ActivityEventBuilder.notification_failed(
            title=notification.title,
            error_message=str(e),
        ))
