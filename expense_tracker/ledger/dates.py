"""
Calendar helpers shared by the recurrence engine, the budget aggregator
and the reports.

DESIGN DECISION: A monthly step keeps the day number and lets it roll over
into the following month when the target month is shorter, so Jan 31
advances to Mar 2 (Mar 3 outside leap years). Stored schedules were
advanced this way from the start; clamping to the month end would shift
existing recurring expenses.
"""

from datetime import date, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from expense_tracker.models.expense import Frequency


MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def next_occurrence(current: date, frequency: Union[Frequency, str, None]) -> date:
    """
    Return the date a recurring expense is next due after ``current``.

    Unknown frequencies return ``current`` unchanged.
    """
    if frequency == Frequency.DAILY:
        return current + timedelta(days=1)
    if frequency == Frequency.WEEKLY:
        return current + timedelta(days=7)
    if frequency == Frequency.MONTHLY:
        first_of_next = current.replace(day=1) + relativedelta(months=1)
        return first_of_next + timedelta(days=current.day - 1)
    return current


def in_month_of(value: date, now: date) -> bool:
    """True when ``value`` falls in the same calendar month and year as ``now``."""
    return value.year == now.year and value.month == now.month


def month_label(value: date) -> str:
    """Short month label used for grouping and filtering, e.g. 'Jan 2024'."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def parse_month_label(label: str) -> Optional[tuple[int, int]]:
    """Turn 'Jan 2024' back into (2024, 1). Returns None for anything else."""
    parts = label.split()
    if len(parts) != 2 or parts[0] not in MONTH_ABBREVIATIONS:
        return None
    try:
        year = int(parts[1])
    except ValueError:
        return None
    return year, MONTH_ABBREVIATIONS.index(parts[0]) + 1


def month_name(month: int) -> str:
    """Full English month name for a 1-based month number."""
    return MONTH_NAMES[month - 1]
