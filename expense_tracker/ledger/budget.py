"""
Budget Aggregator

Computes what was spent per category in the current calendar month and how
that compares with each configured ceiling.

The aggregator is read-only: it never mutates the ledger or the budgets.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Union

from expense_tracker.ledger.dates import in_month_of
from expense_tracker.models.budget import BudgetLevel, BudgetStatus
from expense_tracker.models.expense import Expense


DEFAULT_WARNING_THRESHOLD = Decimal("75")
DEFAULT_DANGER_THRESHOLD = Decimal("90")

HUNDRED = Decimal("100")
ZERO = Decimal("0")

Threshold = Union[Decimal, float, int]


def monthly_category_totals(
    ledger: Iterable[Expense],
    now: date,
) -> dict[str, Decimal]:
    """Sum of amounts per category for expenses in ``now``'s month and year."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in ledger:
        if in_month_of(expense.expense_date, now):
            totals[expense.category] += expense.amount
    return dict(totals)


def classify_percentage(
    percentage: Decimal,
    warning_threshold: Threshold = DEFAULT_WARNING_THRESHOLD,
    danger_threshold: Threshold = DEFAULT_DANGER_THRESHOLD,
) -> BudgetLevel:
    """Map a usage percentage onto a budget level (both bounds inclusive)."""
    if percentage >= _as_decimal(danger_threshold):
        return BudgetLevel.DANGER
    if percentage >= _as_decimal(warning_threshold):
        return BudgetLevel.WARNING
    return BudgetLevel.NORMAL


def compute_budget_status(
    ledger: Iterable[Expense],
    budgets: Mapping[str, Decimal],
    now: date,
    warning_threshold: Threshold = DEFAULT_WARNING_THRESHOLD,
    danger_threshold: Threshold = DEFAULT_DANGER_THRESHOLD,
) -> list[BudgetStatus]:
    """
    Per-category status for every configured ceiling, in budget order.

    Categories without a ceiling are summed but not reported. A ceiling of
    zero or less cannot be entered through the tracker; if one is found in
    stored state it reports as fully used rather than dividing by zero.
    """
    totals = monthly_category_totals(ledger, now)

    statuses = []
    for category, raw_ceiling in budgets.items():
        ceiling = _as_decimal(raw_ceiling)
        spent = totals.get(category, ZERO)

        if ceiling <= 0:
            percentage = HUNDRED
        else:
            percentage = min(HUNDRED, spent * HUNDRED / ceiling)

        statuses.append(BudgetStatus(
            category=category,
            ceiling=ceiling,
            spent=spent,
            remaining=ceiling - spent,
            percentage=percentage,
            level=classify_percentage(percentage, warning_threshold, danger_threshold),
        ))

    return statuses


def _as_decimal(value: Threshold) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
