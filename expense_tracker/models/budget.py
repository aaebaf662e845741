"""
Budget Models

Plain result records produced by the budget aggregator for presentation.
The aggregator never formats anything; these are all the UI gets.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class BudgetLevel(str, Enum):
    """
    How close a category is to its monthly ceiling.

    DANGER also means an alert should be shown to the user.
    """
    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"


class BudgetStatus(BaseModel):
    """Spend against one category's ceiling for one calendar month."""

    category: str
    ceiling: Decimal = Field(
        ...,
        description="Configured monthly ceiling"
    )
    spent: Decimal = Field(
        ...,
        ge=0,
        description="Total spent in the month"
    )
    remaining: Decimal = Field(
        ...,
        description="ceiling - spent (negative when over budget)"
    )
    percentage: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="Share of the ceiling used, clamped to 100"
    )
    level: BudgetLevel

    @property
    def alert(self) -> bool:
        """True when the user should be alerted about this category."""
        return self.level == BudgetLevel.DANGER
