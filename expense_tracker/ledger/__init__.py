"""Ledger engine: recurrence and budget aggregation."""

from expense_tracker.ledger.budget import (
    DEFAULT_DANGER_THRESHOLD,
    DEFAULT_WARNING_THRESHOLD,
    classify_percentage,
    compute_budget_status,
    monthly_category_totals,
)
from expense_tracker.ledger.dates import (
    in_month_of,
    month_label,
    month_name,
    next_occurrence,
    parse_month_label,
)
from expense_tracker.ledger.recurrence import (
    is_due,
    next_expense_id,
    run_recurrence_sweep,
)

__all__ = [
    "DEFAULT_DANGER_THRESHOLD",
    "DEFAULT_WARNING_THRESHOLD",
    "classify_percentage",
    "compute_budget_status",
    "in_month_of",
    "is_due",
    "month_label",
    "month_name",
    "monthly_category_totals",
    "next_expense_id",
    "next_occurrence",
    "parse_month_label",
    "run_recurrence_sweep",
]
