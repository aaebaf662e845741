"""
Input Validation

Everything the user types is checked here before it may reach the ledger.

DESIGN DECISION: Validation never fixes input and never raises. It returns
every issue it found; the caller decides whether to proceed. Any error-level
issue means the mutating operation is a no-op.

The user sees a single failure message, while the individual issues are
kept for logging and for highlighting fields in the UI.
"""

from decimal import Decimal
from typing import Optional

from expense_tracker.models.catalog import (
    PLACEHOLDER_OPTION,
    is_valid_category,
    is_valid_subcategory,
)
from expense_tracker.models.expense import (
    ExpenseDraft,
    Frequency,
    ValidationIssue,
    ValidationResult,
)


FAILURE_MESSAGE = "Please fill in all fields correctly."
BUDGET_FAILURE_MESSAGE = "Please select a category and enter a valid budget amount."

# Matches the Expense model's name limit
MAX_NAME_LENGTH = 200


def is_unselected(value: Optional[str]) -> bool:
    """Dropdowns count as unselected when empty or still on the placeholder."""
    return value is None or not value.strip() or value == PLACEHOLDER_OPTION


class ExpenseValidator:
    """Validates expense drafts and budget entries."""

    def _check_selections(self, draft: ExpenseDraft) -> list[ValidationIssue]:
        issues = []

        if is_unselected(draft.category):
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
            ))
        elif not is_valid_category(draft.category):
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Unknown category: {draft.category}",
            ))

        if is_unselected(draft.subcategory):
            issues.append(ValidationIssue(
                field="subcategory",
                issue_type="missing",
                message="Subcategory is required",
            ))
        elif is_valid_category(draft.category) and not is_valid_subcategory(
            draft.category, draft.subcategory
        ):
            issues.append(ValidationIssue(
                field="subcategory",
                issue_type="mismatch",
                message=(
                    f"Subcategory '{draft.subcategory}' does not belong to "
                    f"'{draft.category}'"
                ),
            ))

        if is_unselected(draft.payment_type):
            issues.append(ValidationIssue(
                field="payment_type",
                issue_type="missing",
                message="Payment type is required",
            ))

        return issues

    def _check_values(self, draft: ExpenseDraft) -> list[ValidationIssue]:
        issues = []

        if not draft.name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Name is required",
            ))
        elif len(draft.name) > MAX_NAME_LENGTH:
            issues.append(ValidationIssue(
                field="name",
                issue_type="invalid_value",
                message=f"Name is too long (max {MAX_NAME_LENGTH} characters)",
            ))

        if draft.expense_date is None:
            issues.append(ValidationIssue(
                field="expense_date",
                issue_type="missing",
                message="Date is required",
            ))

        if draft.amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
            ))
        elif not draft.amount.is_finite() or draft.amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
            ))

        return issues

    def _check_recurrence(self, draft: ExpenseDraft) -> list[ValidationIssue]:
        if not draft.recurring:
            return []

        valid = {frequency.value for frequency in Frequency}
        if draft.frequency not in valid:
            return [ValidationIssue(
                field="frequency",
                issue_type="invalid_value",
                message=f"Recurring expenses need a frequency ({', '.join(sorted(valid))})",
            )]
        return []

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        """
        Validate an expense draft.

        Returns:
            ValidationResult with all issues found
        """
        issues = (
            self._check_selections(draft)
            + self._check_values(draft)
            + self._check_recurrence(draft)
        )
        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def validate_budget(
        self,
        category: Optional[str],
        amount: Optional[Decimal],
    ) -> ValidationResult:
        """Validate a budget ceiling entry."""
        issues = []

        if is_unselected(category) or not is_valid_category(category):
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing" if is_unselected(category) else "invalid_value",
                message="A valid category is required",
            ))

        if amount is None or not amount.is_finite() or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Budget amount must be greater than zero",
            ))

        return ValidationResult(is_valid=not issues, issues=issues)
