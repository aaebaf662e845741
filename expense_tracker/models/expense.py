"""
Core Data Models for the Expense Tracker

These models define the strict schemas for everything stored in the ledger.
They are designed to:
1. Enforce the ledger invariants at runtime
2. Provide clear validation error messages
3. Round-trip through the JSON key-value store unchanged

DESIGN DECISION: The JSON wire format keeps the key names the tracker has
always written (``paymentType``, ``nextDate``, ``date``) via aliases, so
existing stored ledgers load without a conversion step.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)

from expense_tracker.models.catalog import (
    is_valid_category,
    is_valid_subcategory,
)


# Amounts are Decimal in memory but stored as plain JSON numbers
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


# =============================================================================
# ENUMS
# =============================================================================

class Frequency(str, Enum):
    """How often a recurring expense repeats."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# =============================================================================
# LEDGER RECORD
# =============================================================================

class Expense(BaseModel):
    """
    A single expense in the ledger.

    Only fully valid expenses reach the ledger. Raw form input is
    represented by ExpenseDraft and goes through ExpenseValidator first.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    id: int = Field(
        ...,
        ge=1,
        description="Unique identifier, increasing with insertion order"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Catalog category"
    )
    subcategory: str = Field(
        ...,
        min_length=1,
        description="Subcategory from the category's list"
    )
    payment_type: str = Field(
        ...,
        min_length=1,
        alias="paymentType",
        description="Payment method"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the expense was for"
    )
    expense_date: date = Field(
        ...,
        alias="date",
        description="Calendar date of the expense"
    )
    amount: Annotated[Money, Field(gt=0, description="Amount spent")]

    # Recurrence
    recurring: bool = Field(
        default=False,
        description="Whether this expense generates future occurrences"
    )
    frequency: Optional[Frequency] = Field(
        default=None,
        description="Recurrence cadence (recurring expenses only)"
    )
    next_date: Optional[date] = Field(
        default=None,
        alias="nextDate",
        description="Date the next occurrence is due (recurring expenses only)"
    )

    @model_validator(mode='after')
    def validate_classification(self) -> 'Expense':
        """Category must be in the catalog and own the subcategory."""
        if not is_valid_category(self.category):
            raise ValueError(f"Unknown category: {self.category}")
        if not is_valid_subcategory(self.category, self.subcategory):
            raise ValueError(
                f"Subcategory '{self.subcategory}' does not belong to '{self.category}'"
            )
        return self

    @model_validator(mode='after')
    def validate_recurrence(self) -> 'Expense':
        """frequency and next_date are set if and only if recurring."""
        if self.recurring:
            if self.frequency is None or self.next_date is None:
                raise ValueError("Recurring expenses need a frequency and a next date")
        elif self.frequency is not None or self.next_date is not None:
            raise ValueError("Only recurring expenses can have a frequency or next date")
        return self

    def to_record(self) -> dict:
        """Serialize to the JSON-ready dict stored in the ``expenses`` slot."""
        return self.model_dump(mode="json", by_alias=True)


class LedgerState(BaseModel):
    """
    The complete mutable state of the tracker.

    Owned by the application context and passed explicitly into every
    operation. Both collections are written back in full after a mutation.
    """

    expenses: list[Expense] = Field(default_factory=list)
    budgets: dict[str, Money] = Field(
        default_factory=dict,
        description="Monthly ceiling per category"
    )


# =============================================================================
# INPUT MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    Raw values from the entry form.

    Everything is optional because the user may leave fields empty.
    Nothing is trusted until ExpenseValidator has accepted it.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    category: Optional[str] = None
    subcategory: Optional[str] = None
    payment_type: Optional[str] = None
    name: Optional[str] = None
    expense_date: Optional[date] = None
    # NaN and infinities are let through so the validator can report them
    amount: Optional[Annotated[Decimal, Field(allow_inf_nan=True)]] = None
    recurring: bool = False
    frequency: Optional[str] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'mismatch')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating user input before it may touch the ledger."""

    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def issue_fields(self) -> list[str]:
        """Names of the fields that had issues."""
        return [issue.field for issue in self.issues]
