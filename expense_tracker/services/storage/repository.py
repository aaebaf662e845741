"""
Ledger Repository

Reads and writes the tracker state through a KeyValueStore.

Two slots are used:
- ``expenses``: JSON array of expense records
- ``budgets``: JSON object mapping category -> ceiling

DESIGN DECISION: Saves always rewrite both slots in full. The ledger is
small (a few thousand records at most) and a full rewrite means there is
never a half-applied update to reason about.
"""

import json
from typing import Any

from pydantic import ValidationError

from expense_tracker.models.expense import LedgerState
from expense_tracker.services.storage.interface import (
    CorruptStateError,
    KeyValueStore,
)
from expense_tracker.services.storage.migration import migrate_legacy_records


EXPENSES_SLOT = "expenses"
BUDGETS_SLOT = "budgets"


class LedgerRepository:
    """Loads and saves LedgerState from a key-value store."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def _decode(self, key: str, expected: type) -> Any:
        """Decode a slot, treating a missing or null slot as empty."""
        raw = self._store.get(key)
        if raw is None or not raw.strip():
            return expected()

        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"Slot '{key}' is not valid JSON: {e}")

        if value is None:
            return expected()
        if not isinstance(value, expected):
            raise CorruptStateError(
                f"Slot '{key}' should hold a JSON {expected.__name__}, "
                f"found {type(value).__name__}"
            )
        return value

    def load(self) -> tuple[LedgerState, int]:
        """
        Load the full state, upgrading legacy records first.

        When legacy records were found, the migrated state is written back
        immediately so the upgrade happens only once.

        Returns:
            (state, migrated_count)

        Raises:
            CorruptStateError: If a slot can't be decoded or a record is invalid
            StorageError: If the backend fails
        """
        raw_expenses = self._decode(EXPENSES_SLOT, list)
        raw_budgets = self._decode(BUDGETS_SLOT, dict)

        if not all(isinstance(record, dict) for record in raw_expenses):
            raise CorruptStateError(f"Slot '{EXPENSES_SLOT}' contains non-object records")

        records, migrated_count = migrate_legacy_records(raw_expenses)

        try:
            state = LedgerState.model_validate({
                "expenses": records,
                "budgets": raw_budgets,
            })
        except ValidationError as e:
            raise CorruptStateError(f"Stored ledger failed validation: {e}")

        if migrated_count:
            self.save(state)

        return state, migrated_count

    def save(self, state: LedgerState) -> None:
        """Rewrite both slots from ``state``."""
        dumped = state.model_dump(mode="json", by_alias=True)
        self._store.set(EXPENSES_SLOT, json.dumps(dumped["expenses"]))
        self._store.set(BUDGETS_SLOT, json.dumps(dumped["budgets"]))
