"""
Tests for input validation.
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models import ExpenseDraft
from expense_tracker.validation import (
    MAX_NAME_LENGTH,
    ExpenseValidator,
    is_unselected,
)


@pytest.fixture
def validator():
    return ExpenseValidator()


def make_draft(**overrides) -> ExpenseDraft:
    fields = dict(
        category="Transportation",
        subcategory="Gas",
        payment_type="Debit Card",
        name="Fill up",
        expense_date=date(2024, 4, 2),
        amount=Decimal("45.20"),
    )
    fields.update(overrides)
    return ExpenseDraft(**fields)


class TestIsUnselected:
    def test_placeholder_and_blank(self):
        assert is_unselected(None)
        assert is_unselected("")
        assert is_unselected("   ")
        assert is_unselected("chooseOne")
        assert not is_unselected("Cash")


class TestExpenseValidator:
    """Tests for ExpenseValidator.validate."""

    def test_valid_draft(self, validator):
        result = validator.validate(make_draft())
        assert result.is_valid is True
        assert result.issues == []

    def test_valid_recurring_draft(self, validator):
        result = validator.validate(make_draft(recurring=True, frequency="daily"))
        assert result.is_valid is True

    def test_missing_category(self, validator):
        result = validator.validate(make_draft(category="chooseOne"))
        assert result.is_valid is False
        assert "category" in result.issue_fields

    def test_unknown_category(self, validator):
        result = validator.validate(make_draft(category="Pets", subcategory="Food"))
        assert result.is_valid is False
        assert result.issues[0].issue_type == "invalid_value"

    def test_missing_subcategory(self, validator):
        result = validator.validate(make_draft(subcategory=None))
        assert result.issue_fields == ["subcategory"]

    def test_subcategory_from_other_category(self, validator):
        """Test a subcategory must belong to the selected category."""
        result = validator.validate(make_draft(subcategory="Groceries"))
        assert result.is_valid is False
        assert result.issues[0].issue_type == "mismatch"

    def test_missing_payment_type(self, validator):
        result = validator.validate(make_draft(payment_type=""))
        assert result.issue_fields == ["payment_type"]

    def test_blank_name(self, validator):
        """Test a whitespace-only name counts as missing."""
        result = validator.validate(make_draft(name="   "))
        assert result.issue_fields == ["name"]

    def test_name_too_long(self, validator):
        result = validator.validate(make_draft(name="x" * (MAX_NAME_LENGTH + 1)))
        assert result.issue_fields == ["name"]
        assert result.issues[0].issue_type == "invalid_value"

    def test_missing_date(self, validator):
        result = validator.validate(make_draft(expense_date=None))
        assert result.issue_fields == ["expense_date"]

    def test_missing_amount(self, validator):
        result = validator.validate(make_draft(amount=None))
        assert result.issue_fields == ["amount"]

    @pytest.mark.parametrize("amount", ["0", "-1", "NaN", "Infinity"])
    def test_invalid_amount(self, validator, amount):
        result = validator.validate(make_draft(amount=Decimal(amount)))
        assert result.is_valid is False
        assert result.issue_fields == ["amount"]

    def test_recurring_without_frequency(self, validator):
        result = validator.validate(make_draft(recurring=True))
        assert result.issue_fields == ["frequency"]

    def test_recurring_with_unknown_frequency(self, validator):
        result = validator.validate(make_draft(recurring=True, frequency="yearly"))
        assert result.issue_fields == ["frequency"]

    def test_frequency_ignored_when_not_recurring(self, validator):
        result = validator.validate(make_draft(recurring=False, frequency="yearly"))
        assert result.is_valid is True

    def test_collects_every_issue(self, validator):
        result = validator.validate(ExpenseDraft())
        assert result.is_valid is False
        assert set(result.issue_fields) == {
            "category", "subcategory", "payment_type", "name", "expense_date", "amount",
        }


class TestBudgetValidation:
    """Tests for ExpenseValidator.validate_budget."""

    def test_valid_budget(self, validator):
        assert validator.validate_budget("Travel", Decimal("500")).is_valid

    def test_missing_category(self, validator):
        result = validator.validate_budget("chooseOne", Decimal("500"))
        assert result.issue_fields == ["category"]
        assert result.issues[0].issue_type == "missing"

    def test_unknown_category(self, validator):
        result = validator.validate_budget("Pets", Decimal("500"))
        assert result.issues[0].issue_type == "invalid_value"

    @pytest.mark.parametrize("amount", [None, Decimal("0"), Decimal("-20"), Decimal("NaN")])
    def test_invalid_amount(self, validator, amount):
        result = validator.validate_budget("Travel", amount)
        assert result.is_valid is False
        assert result.issue_fields == ["amount"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
