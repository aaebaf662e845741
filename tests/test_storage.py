"""
Tests for the storage layer: key-value stores, legacy migration and the
ledger repository.

Google Sheets is never contacted; the client is mocked.
"""

import json
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from expense_tracker.models import Expense, Frequency, LedgerState
from expense_tracker.services.storage import (
    BUDGETS_SLOT,
    EXPENSES_SLOT,
    CorruptStateError,
    GoogleSheetsStore,
    InMemoryStore,
    JsonFileStore,
    LedgerRepository,
    StorageError,
    migrate_legacy_records,
)
from expense_tracker.services.storage.google_sheets import MAX_CELL_CHARS


def make_state() -> LedgerState:
    return LedgerState(
        expenses=[
            Expense(
                id=1,
                category="Food & Dining",
                subcategory="Groceries",
                payment_type="Cash",
                name="Weekly shop",
                expense_date=date(2024, 1, 6),
                amount=Decimal("50.0"),
            ),
            Expense(
                id=2,
                category="Entertainment",
                subcategory="Subscriptions",
                payment_type="Credit Card",
                name="Streaming",
                expense_date=date(2024, 1, 15),
                amount=Decimal("12.5"),
                recurring=True,
                frequency=Frequency.MONTHLY,
                next_date=date(2024, 2, 15),
            ),
        ],
        budgets={"Food & Dining": Decimal("400")},
    )


class TestInMemoryStore:
    def test_missing_key(self):
        assert InMemoryStore().get("expenses") is None

    def test_set_and_get(self):
        store = InMemoryStore()
        store.set("expenses", "[]")
        assert store.get("expenses") == "[]"

    def test_initial_values_are_copied(self):
        initial = {"budgets": "{}"}
        store = InMemoryStore(initial)
        store.set("budgets", '{"Travel": 10}')
        assert initial == {"budgets": "{}"}


class TestJsonFileStore:
    """Tests for the file-backed store."""

    def test_missing_slot(self, tmp_path):
        assert JsonFileStore(tmp_path).get("expenses") is None

    def test_write_then_read(self, tmp_path):
        store = JsonFileStore(tmp_path / "data")
        store.set("expenses", '[{"id": 1}]')

        assert (tmp_path / "data" / "expenses.json").read_text(encoding="utf-8") == '[{"id": 1}]'
        assert store.get("expenses") == '[{"id": 1}]'

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.set("budgets", "{}")
        store.set("budgets", '{"Travel": 5}')

        assert store.get("budgets") == '{"Travel": 5}'
        assert sorted(p.name for p in tmp_path.iterdir()) == ["budgets.json"]

    def test_failed_replace_removes_temp_file(self, tmp_path, monkeypatch):
        """Test a failed write keeps the old value and leaves no temp file."""
        store = JsonFileStore(tmp_path)
        store.set("budgets", "{}")

        def fail_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr("expense_tracker.services.storage.local.os.replace", fail_replace)

        with pytest.raises(StorageError):
            store.set("budgets", '{"Travel": 5}')

        assert store.get("budgets") == "{}"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["budgets.json"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    def test_rejects_bad_slot_names(self, tmp_path, key):
        with pytest.raises(StorageError):
            JsonFileStore(tmp_path).set(key, "x")


class TestGoogleSheetsStore:
    """Tests for GoogleSheetsStore with a mocked client."""

    @pytest.fixture
    def sheet(self):
        return MagicMock()

    @pytest.fixture
    def store(self, sheet):
        client = MagicMock()
        client.get_storage_sheet.return_value = sheet
        return GoogleSheetsStore(client=client)

    def test_get_existing_key(self, store, sheet):
        sheet.get_all_values.return_value = [
            ["key", "value"],
            ["expenses", "[]"],
            ["budgets", '{"Travel": 100}'],
        ]
        assert store.get("budgets") == '{"Travel": 100}'

    def test_get_missing_key(self, store, sheet):
        sheet.get_all_values.return_value = [["key", "value"]]
        assert store.get("expenses") is None

    def test_set_updates_existing_row(self, store, sheet):
        sheet.get_all_values.return_value = [
            ["key", "value"],
            ["expenses", "[]"],
        ]
        store.set("expenses", '[{"id": 1}]')

        sheet.update_cell.assert_called_once_with(2, 2, '[{"id": 1}]')
        sheet.append_row.assert_not_called()

    def test_set_appends_new_row(self, store, sheet):
        sheet.get_all_values.return_value = [
            ["key", "value"],
            ["expenses", "[]"],
        ]
        store.set("budgets", "{}")

        sheet.append_row.assert_called_once_with(["budgets", "{}"], value_input_option="RAW")
        sheet.update_cell.assert_not_called()

    def test_oversized_value_rejected(self, store, sheet):
        """Test values over the cell limit are rejected, not truncated."""
        with pytest.raises(StorageError):
            store.set("expenses", "x" * (MAX_CELL_CHARS + 1))
        sheet.update_cell.assert_not_called()
        sheet.append_row.assert_not_called()


class TestLegacyMigration:
    """Tests for migrate_legacy_records."""

    def test_legacy_record_upgraded(self):
        records, count = migrate_legacy_records([
            {"id": 1, "name": "Lunch", "date": "2023-05-01", "amount": 12, "type": "Cash"},
        ])

        assert count == 1
        assert records == [{
            "id": 1,
            "category": "Other",
            "subcategory": "Miscellaneous",
            "paymentType": "Cash",
            "name": "Lunch",
            "date": "2023-05-01",
            "amount": 12,
            "recurring": False,
            "frequency": None,
            "nextDate": None,
        }]

    def test_legacy_record_without_type(self):
        records, _ = migrate_legacy_records([
            {"id": 1, "name": "Lunch", "date": "2023-05-01", "amount": 12},
        ])
        assert records[0]["paymentType"] == "Other"

    def test_current_records_untouched(self):
        current = make_state().expenses[0].to_record()
        records, count = migrate_legacy_records([current])
        assert count == 0
        assert records == [current]

    def test_mixed_records(self):
        legacy = {"id": 2, "name": "Bus", "date": "2023-05-02", "amount": 3}
        current = make_state().expenses[0].to_record()
        records, count = migrate_legacy_records([current, legacy])
        assert count == 1
        assert records[0] is current
        assert records[1]["category"] == "Other"


class TestLedgerRepository:
    """Tests for loading and saving tracker state."""

    def test_load_empty_store(self):
        state, migrated = LedgerRepository(InMemoryStore()).load()
        assert state.expenses == []
        assert state.budgets == {}
        assert migrated == 0

    def test_null_and_blank_slots_are_empty(self):
        store = InMemoryStore({EXPENSES_SLOT: "null", BUDGETS_SLOT: "  "})
        state, _ = LedgerRepository(store).load()
        assert state.expenses == []
        assert state.budgets == {}

    def test_save_then_load(self):
        store = InMemoryStore()
        repository = LedgerRepository(store)
        original = make_state()

        repository.save(original)
        loaded, migrated = repository.load()

        assert migrated == 0
        assert loaded.model_dump() == original.model_dump()

    def test_saved_json_format(self):
        store = InMemoryStore()
        LedgerRepository(store).save(make_state())

        expenses = json.loads(store.get(EXPENSES_SLOT))
        budgets = json.loads(store.get(BUDGETS_SLOT))

        assert expenses[1]["paymentType"] == "Credit Card"
        assert expenses[1]["nextDate"] == "2024-02-15"
        assert expenses[1]["frequency"] == "monthly"
        assert expenses[1]["amount"] == 12.5
        assert budgets == {"Food & Dining": 400.0}

    def test_works_with_file_store(self, tmp_path):
        repository = LedgerRepository(JsonFileStore(tmp_path))
        repository.save(make_state())

        loaded, _ = LedgerRepository(JsonFileStore(tmp_path)).load()
        assert loaded.model_dump() == make_state().model_dump()

    def test_legacy_records_migrated_and_persisted(self):
        """Test legacy data is upgraded once and written back."""
        store = InMemoryStore({
            EXPENSES_SLOT: json.dumps([
                {"id": 1, "name": "Lunch", "date": "2023-05-01", "amount": 12, "type": "Cash"},
                {"id": 2, "name": "Taxi", "date": "2023-05-02", "amount": 20},
            ]),
        })
        repository = LedgerRepository(store)

        state, migrated = repository.load()

        assert migrated == 2
        assert [e.category for e in state.expenses] == ["Other", "Other"]
        assert state.expenses[1].payment_type == "Other"
        assert all(not e.recurring for e in state.expenses)

        stored = json.loads(store.get(EXPENSES_SLOT))
        assert stored[0]["category"] == "Other"

        _, migrated_again = repository.load()
        assert migrated_again == 0

    def test_invalid_json_is_corrupt(self):
        store = InMemoryStore({EXPENSES_SLOT: "[{not json"})
        with pytest.raises(CorruptStateError):
            LedgerRepository(store).load()

    def test_wrong_slot_type_is_corrupt(self):
        store = InMemoryStore({BUDGETS_SLOT: "[]"})
        with pytest.raises(CorruptStateError):
            LedgerRepository(store).load()

    def test_non_object_record_is_corrupt(self):
        store = InMemoryStore({EXPENSES_SLOT: "[1, 2]"})
        with pytest.raises(CorruptStateError):
            LedgerRepository(store).load()

    def test_invalid_record_is_corrupt(self):
        record = make_state().expenses[0].to_record()
        record["amount"] = -4
        store = InMemoryStore({EXPENSES_SLOT: json.dumps([record])})
        with pytest.raises(CorruptStateError):
            LedgerRepository(store).load()

    def test_corrupt_state_is_a_storage_error(self):
        assert issubclass(CorruptStateError, StorageError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
