"""
Legacy Record Migration

Early versions of the tracker stored expenses without a category. Those
records are upgraded once, at load time, before any other logic sees them.

DESIGN DECISION: Migration works on the raw decoded JSON, not on models.
Legacy records would fail model validation, so they have to be fixed first.
"""

from typing import Any

from expense_tracker.models.catalog import DEFAULT_CATEGORY, DEFAULT_SUBCATEGORY


DEFAULT_PAYMENT_TYPE = "Other"


def is_legacy_record(record: dict[str, Any]) -> bool:
    """A record without a category field predates the category catalog."""
    return "category" not in record


def migrate_record(record: dict[str, Any]) -> dict[str, Any]:
    """
    Upgrade one legacy record.

    The old ``type`` field becomes the payment type. Legacy records never
    had recurrence, so they come out non-recurring.
    """
    return {
        "id": record.get("id"),
        "category": DEFAULT_CATEGORY,
        "subcategory": DEFAULT_SUBCATEGORY,
        "paymentType": record.get("type") or DEFAULT_PAYMENT_TYPE,
        "name": record.get("name"),
        "date": record.get("date"),
        "amount": record.get("amount"),
        "recurring": False,
        "frequency": None,
        "nextDate": None,
    }


def migrate_legacy_records(
    records: list[dict[str, Any]],
) -> tuple[list[dict[str, Any]], int]:
    """
    Upgrade every legacy record in ``records``.

    Returns:
        (records, migrated_count). Current records are passed through as is.
    """
    migrated = []
    count = 0
    for record in records:
        if is_legacy_record(record):
            migrated.append(migrate_record(record))
            count += 1
        else:
            migrated.append(record)
    return migrated, count
