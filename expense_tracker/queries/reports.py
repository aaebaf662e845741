"""
Ledger Reports

DESIGN DECISION: Reports are DETERMINISTIC aggregations over the ledger.
They return plain mappings and lists; turning them into tables and charts
is the presentation layer's job.

Month labels ('Jan 2024') are shared by the chart grouping, the month
filter and the list of available months, so a label picked from one can
always be fed into the others.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Literal

from expense_tracker.ledger.dates import month_label, parse_month_label
from expense_tracker.models.expense import Expense


GroupBy = Literal["category", "payment", "date"]

ALL = "all"

CHART_TITLES = {
    "category": "Expenses by Category",
    "date": "Expenses by Month",
    "payment": "Expenses by Payment Method",
}


class ReportError(Exception):
    """Error while building a report."""
    pass


_GROUP_KEYS = {
    "category": lambda expense: expense.category,
    "payment": lambda expense: expense.payment_type,
    "date": lambda expense: month_label(expense.expense_date),
}


def _month_sort_key(label: str) -> tuple[int, int]:
    parsed = parse_month_label(label)
    if parsed is None:
        raise ReportError(f"Not a month label: {label!r}")
    return parsed


def group_expenses(ledger: Iterable[Expense], group_by: GroupBy) -> dict[str, Decimal]:
    """
    Total amount per group.

    ``category`` and ``payment`` groups keep first-seen order;
    ``date`` groups are months in chronological order.

    Raises:
        ReportError: For an unknown ``group_by``
    """
    key = _GROUP_KEYS.get(group_by)
    if key is None:
        raise ReportError(f"Unknown grouping: {group_by}")

    grouped: dict[str, Decimal] = defaultdict(Decimal)
    for expense in ledger:
        grouped[key(expense)] += expense.amount

    if group_by == "date":
        return {label: grouped[label] for label in sorted(grouped, key=_month_sort_key)}
    return dict(grouped)


def filter_expenses(
    ledger: Iterable[Expense],
    category: str = ALL,
    month: str = ALL,
) -> list[Expense]:
    """Expenses matching a category and a month label ('all' disables a filter)."""
    results = []
    for expense in ledger:
        if category != ALL and expense.category != category:
            continue
        if month != ALL and month_label(expense.expense_date) != month:
            continue
        results.append(expense)
    return results


def available_months(ledger: Iterable[Expense]) -> list[str]:
    """Unique month labels present in the ledger, oldest first."""
    labels = {month_label(expense.expense_date) for expense in ledger}
    return sorted(labels, key=_month_sort_key)


def chart_title(group_by: str) -> str:
    return CHART_TITLES.get(group_by, "Expense Chart")
