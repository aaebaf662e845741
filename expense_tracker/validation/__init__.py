"""Input validation package."""

from expense_tracker.validation.validator import (
    BUDGET_FAILURE_MESSAGE,
    FAILURE_MESSAGE,
    MAX_NAME_LENGTH,
    ExpenseValidator,
    is_unselected,
)

__all__ = [
    "BUDGET_FAILURE_MESSAGE",
    "FAILURE_MESSAGE",
    "MAX_NAME_LENGTH",
    "ExpenseValidator",
    "is_unselected",
]
