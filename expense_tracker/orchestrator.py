"""
Main Orchestrator for the Expense Tracker

This module ties together all the components and owns the tracker state.
It defines the flows for:
1. Start-up (load -> migrate -> recurrence sweep -> persist)
2. Adding and deleting expenses
3. Setting budgets and reading the budget overview
4. Report data for tables and charts

DESIGN DECISION: All mutable state lives on one ExpenseTracker instance
(the application context). Nothing is kept in module globals. Every
mutation is built on a copy of the state, saved in full, and only then
becomes the current state, so a failed save leaves the tracker unchanged.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog
from pydantic import ValidationError

from expense_tracker.activity import ActivityLogger, configure_logging
from expense_tracker.config import Settings, get_settings
from expense_tracker.ledger import (
    DEFAULT_DANGER_THRESHOLD,
    DEFAULT_WARNING_THRESHOLD,
    compute_budget_status,
    next_expense_id,
    next_occurrence,
    run_recurrence_sweep,
)
from expense_tracker.models.activity import ActivityEventBuilder
from expense_tracker.models.budget import BudgetStatus
from expense_tracker.models.expense import (
    Expense,
    ExpenseDraft,
    LedgerState,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.queries import (
    ALL,
    GroupBy,
    available_months,
    filter_expenses,
    group_expenses,
)
from expense_tracker.services.notifications import LogNotifier, NotifierInterface
from expense_tracker.services.storage import (
    GoogleSheetsStore,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    LedgerRepository,
    StorageError,
)
from expense_tracker.validation import ExpenseValidator


class ExpenseTracker:
    """
    The application context.

    Flow:
    1. start() loads state, applies the legacy migration and runs the
       recurrence sweep exactly once
    2. User actions mutate the ledger through add/delete/set_budget
    3. Readers (UI, charts, budget overview) query the current state

    Invalid user input never raises; it returns a ValidationResult and
    leaves the ledger untouched.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        notifier: Optional[NotifierInterface] = None,
        validator: Optional[ExpenseValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
        currency_symbol: str = "$",
        warning_threshold: Decimal = DEFAULT_WARNING_THRESHOLD,
        danger_threshold: Decimal = DEFAULT_DANGER_THRESHOLD,
    ):
        self._repository = repository
        self._notifier = notifier
        self._validator = validator or ExpenseValidator()
        self._activity = activity_logger or ActivityLogger()
        self._currency_symbol = currency_symbol
        self._warning_threshold = warning_threshold
        self._danger_threshold = danger_threshold

        self._state = LedgerState()
        self._loaded = False
        self._swept = False

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def expenses(self) -> list[Expense]:
        """The ledger in insertion order (a copy; mutate via the tracker)."""
        return list(self._state.expenses)

    @property
    def budgets(self) -> dict[str, Decimal]:
        return dict(self._state.budgets)

    @property
    def currency_symbol(self) -> str:
        return self._currency_symbol

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        for expense in self._state.expenses:
            if expense.id == expense_id:
                return expense
        return None

    # -------------------------------------------------------------------------
    # Start-up
    # -------------------------------------------------------------------------

    def load(self) -> int:
        """
        Load state from storage (legacy records are migrated on the way).

        Returns:
            Number of legacy records migrated
        """
        try:
            state, migrated_count = self._repository.load()
        except StorageError as e:
            self._activity.log_error("load", str(e))
            raise

        self._state = state
        self._loaded = True

        if migrated_count:
            self._activity.log(
                ActivityEventBuilder.legacy_migration_applied(migrated_count)
            )
        self._activity.log(ActivityEventBuilder.state_loaded(
            expense_count=len(state.expenses),
            budget_count=len(state.budgets),
        ))
        return migrated_count

    def run_recurrence(self, today: date) -> list[Expense]:
        """
        Run the recurrence sweep and persist the result.

        Only the first call per tracker does anything; the sweep is a
        start-up step, not a timer.
        """
        if self._swept:
            self._activity.log(
                ActivityEventBuilder.sweep_skipped("already ran for this session")
            )
            return []

        candidate = self._state.model_copy(deep=True)
        generated = run_recurrence_sweep(
            candidate.expenses,
            today,
            notifier=self._notifier,
            activity_logger=self._activity,
            currency_symbol=self._currency_symbol,
        )
        self._commit(candidate)
        self._swept = True
        return generated

    def start(self, today: Optional[date] = None) -> list[Expense]:
        """Load (if needed) and run the start-up recurrence sweep."""
        if not self._loaded:
            self.load()
        return self.run_recurrence(today or date.today())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_expense(
        self,
        draft: ExpenseDraft,
    ) -> tuple[Optional[Expense], ValidationResult]:
        """
        Validate and append a new expense.

        Returns:
            (expense, validation_result). expense is None when rejected.
        """
        result = self._validator.validate(draft)
        if not result.is_valid:
            self._activity.log_expense_rejected(result)
            return None, result

        next_date = None
        if draft.recurring:
            next_date = next_occurrence(draft.expense_date, draft.frequency)

        try:
            expense = Expense(
                id=next_expense_id(self._state.expenses),
                category=draft.category,
                subcategory=draft.subcategory,
                payment_type=draft.payment_type,
                name=draft.name,
                expense_date=draft.expense_date,
                amount=draft.amount,
                recurring=draft.recurring,
                frequency=draft.frequency if draft.recurring else None,
                next_date=next_date,
            )
        except ValidationError as e:
            result = ValidationResult(
                is_valid=False,
                issues=[
                    ValidationIssue(
                        field=".".join(str(part) for part in error["loc"]) or "expense",
                        issue_type="invalid_value",
                        message=error["msg"],
                    )
                    for error in e.errors()
                ],
            )
            self._activity.log_expense_rejected(result)
            return None, result

        self._commit(self._state.model_copy(
            update={"expenses": self._state.expenses + [expense]},
        ))
        self._activity.log_expense_added(expense)
        return expense, result

    def delete_expense(self, expense_id: int) -> bool:
        """
        Remove an expense by id.

        Returns:
            True if an expense was removed
        """
        remaining = [e for e in self._state.expenses if e.id != expense_id]
        found = len(remaining) != len(self._state.expenses)

        if found:
            self._commit(self._state.model_copy(update={"expenses": remaining}))

        self._activity.log_expense_deleted(expense_id, found)
        return found

    def set_budget(self, category: Optional[str], amount: Optional[Decimal]) -> ValidationResult:
        """Set (or overwrite) a category's monthly ceiling."""
        result = self._validator.validate_budget(category, amount)
        if not result.is_valid:
            self._activity.log_budget_rejected(category, result)
            return result

        self._commit(self._state.model_copy(
            update={"budgets": {**self._state.budgets, category: amount}},
        ))
        self._activity.log_budget_set(category, str(amount))
        return result

    def _commit(self, candidate: LedgerState) -> None:
        """Save ``candidate`` and only then make it the current state."""
        try:
            self._repository.save(candidate)
        except StorageError as e:
            self._activity.log_error("save", str(e))
            raise
        self._state = candidate

    # -------------------------------------------------------------------------
    # Readers
    # -------------------------------------------------------------------------

    def budget_overview(self, now: Optional[date] = None) -> list[BudgetStatus]:
        """Budget status for every configured category in ``now``'s month."""
        return compute_budget_status(
            self._state.expenses,
            self._state.budgets,
            now or date.today(),
            warning_threshold=self._warning_threshold,
            danger_threshold=self._danger_threshold,
        )

    def chart_data(self, group_by: GroupBy = "category") -> dict[str, Decimal]:
        return group_expenses(self._state.expenses, group_by)

    def filtered_expenses(self, category: str = ALL, month: str = ALL) -> list[Expense]:
        return filter_expenses(self._state.expenses, category=category, month=month)

    def months(self) -> list[str]:
        return available_months(self._state.expenses)


def create_store(settings: Settings) -> KeyValueStore:
    """
    Build the configured key-value store.

    Falls back to local JSON files when Google Sheets is selected but
    can't be initialised, so the tracker still starts.
    """
    storage = settings.storage

    if storage.backend == "memory":
        return InMemoryStore()

    if storage.backend == "sheets":
        try:
            return GoogleSheetsStore()
        except Exception as e:
            structlog.get_logger("expense_tracker").warning(
                "storage_fallback",
                backend="sheets",
                error=str(e),
                data_dir=storage.data_dir,
            )

    return JsonFileStore(storage.data_path)


def create_expense_tracker(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    notifier: Optional[NotifierInterface] = None,
) -> ExpenseTracker:
    """
    Factory function to create a configured, not yet started, tracker.

    Args:
        settings: Application settings (defaults to get_settings())
        store: Explicit storage backend; overrides the configured one
        notifier: Reminder delivery; defaults to the structured log
    """
    settings = settings or get_settings()
    app = settings.app
    budget = settings.budget

    configure_logging(app.log_level)

    return ExpenseTracker(
        repository=LedgerRepository(store or create_store(settings)),
        notifier=notifier or LogNotifier(),
        currency_symbol=app.currency_symbol,
        warning_threshold=Decimal(str(budget.warning_threshold)),
        danger_threshold=Decimal(str(budget.danger_threshold)),
    )
