"""
Category Catalog

The closed vocabulary for expense categories and subcategories.

DESIGN DECISION: The catalog is static, process-wide, read-only configuration.
It is exposed as a MappingProxyType of tuples so nothing can append a
subcategory at runtime and quietly widen what the validator accepts.
"""

from types import MappingProxyType
from typing import Mapping, Optional


CATEGORY_CATALOG: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Food & Dining": (
        "Groceries",
        "Restaurants",
        "Coffee Shops",
        "Food Delivery",
        "Snacks",
    ),
    "Transportation": (
        "Public Transit",
        "Taxi/Rideshare",
        "Gas",
        "Parking",
        "Car Maintenance",
        "Car Insurance",
    ),
    "Housing": (
        "Rent/Mortgage",
        "Utilities",
        "Internet",
        "Maintenance",
        "Furniture",
        "Household Supplies",
    ),
    "Entertainment": (
        "Movies",
        "Music",
        "Games",
        "Concerts",
        "Subscriptions",
        "Hobbies",
    ),
    "Shopping": (
        "Clothing",
        "Electronics",
        "Books",
        "Personal Care",
        "Gifts",
    ),
    "Health": (
        "Medical",
        "Pharmacy",
        "Fitness",
        "Health Insurance",
    ),
    "Travel": (
        "Flights",
        "Hotels",
        "Vacation",
        "Travel Insurance",
    ),
    "Education": (
        "Tuition",
        "Books",
        "Courses",
        "School Supplies",
    ),
    "Personal": (
        "Self-care",
        "Haircut",
        "Spa",
        "Other Personal",
    ),
    "Bills & Utilities": (
        "Phone",
        "Electricity",
        "Water",
        "Gas",
        "Internet",
        "Streaming Services",
    ),
    "Other": (
        "Miscellaneous",
    ),
})

# Fallback classification for records written before categories existed
DEFAULT_CATEGORY = "Other"
DEFAULT_SUBCATEGORY = "Miscellaneous"

PAYMENT_METHODS: tuple[str, ...] = (
    "Cash",
    "Credit Card",
    "Debit Card",
    "Bank Transfer",
    "Mobile Payment",
    "Other",
)

# Value the entry form submits when a dropdown was left untouched
PLACEHOLDER_OPTION = "chooseOne"


def is_valid_category(category: Optional[str]) -> bool:
    """Check whether a category name is part of the catalog."""
    return category is not None and category in CATEGORY_CATALOG


def subcategories_for(category: Optional[str]) -> tuple[str, ...]:
    """Return the allowed subcategories for a category (empty if unknown)."""
    if not is_valid_category(category):
        return ()
    return CATEGORY_CATALOG[category]


def is_valid_subcategory(category: Optional[str], subcategory: Optional[str]) -> bool:
    """Check that a subcategory belongs to the given category's list."""
    return subcategory is not None and subcategory in subcategories_for(category)
