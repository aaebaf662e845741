"""
Data Models Package

This package contains all Pydantic models used by the expense tracker.
All data flowing through the ledger must conform to these schemas.
"""

from expense_tracker.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from expense_tracker.models.budget import BudgetLevel, BudgetStatus
from expense_tracker.models.catalog import (
    CATEGORY_CATALOG,
    DEFAULT_CATEGORY,
    DEFAULT_SUBCATEGORY,
    PAYMENT_METHODS,
    PLACEHOLDER_OPTION,
    is_valid_category,
    is_valid_subcategory,
    subcategories_for,
)
from expense_tracker.models.expense import (
    Expense,
    ExpenseDraft,
    Frequency,
    LedgerState,
    Money,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Catalog
    "CATEGORY_CATALOG",
    "DEFAULT_CATEGORY",
    "DEFAULT_SUBCATEGORY",
    "PAYMENT_METHODS",
    "PLACEHOLDER_OPTION",
    "is_valid_category",
    "is_valid_subcategory",
    "subcategories_for",
    # Expense models
    "Expense",
    "ExpenseDraft",
    "Frequency",
    "LedgerState",
    "Money",
    "ValidationIssue",
    "ValidationResult",
    # Budget models
    "BudgetLevel",
    "BudgetStatus",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
