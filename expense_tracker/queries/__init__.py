"""Ledger reports package."""

from expense_tracker.queries.reports import (
    ALL,
    GroupBy,
    ReportError,
    available_months,
    chart_title,
    filter_expenses,
    group_expenses,
)

__all__ = [
    "ALL",
    "GroupBy",
    "ReportError",
    "available_months",
    "chart_title",
    "filter_expenses",
    "group_expenses",
]
