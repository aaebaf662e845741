"""
Streamlit Frontend for the Expense Tracker

The user interface for recording expenses, reviewing them, charting where
the money goes and keeping an eye on monthly budgets.

DESIGN PRINCIPLES:
1. The UI only renders; all rules live in expense_tracker
2. One tracker per server process (the recurrence sweep runs once).
   Every browser session shares it, so mutations are serialized on a
   cached lock and start-up reminders go to whichever session drains
   them first
3. Clear, single-message feedback for rejected input
"""

import threading
from datetime import date
from decimal import Decimal

import pandas as pd
import plotly.express as px
import streamlit as st

from expense_tracker.ledger import month_name
from expense_tracker.models import (
    CATEGORY_CATALOG,
    PAYMENT_METHODS,
    BudgetLevel,
    ExpenseDraft,
    Frequency,
    subcategories_for,
)
from expense_tracker.orchestrator import ExpenseTracker, create_expense_tracker
from expense_tracker.queries import ALL, chart_title
from expense_tracker.services.notifications import Notification, NotifierInterface
from expense_tracker.validation import BUDGET_FAILURE_MESSAGE, FAILURE_MESSAGE


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)


class SessionNotifier(NotifierInterface):
    """Collects reminders so the UI can show them as toasts."""

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        with self._lock:
            self._pending.append(notification)

    def drain(self) -> list[Notification]:
        """Take every reminder collected so far."""
        with self._lock:
            pending, self._pending = self._pending, []
        return pending


@st.cache_resource
def get_tracker() -> tuple[ExpenseTracker, SessionNotifier]:
    """Create and start the tracker (cached, so the sweep runs once)."""
    notifier = SessionNotifier()
    tracker = create_expense_tracker(notifier=notifier)
    tracker.start()
    return tracker, notifier


@st.cache_resource
def get_tracker_lock() -> threading.Lock:
    """Serializes mutations of the shared tracker across sessions."""
    return threading.Lock()


def money(tracker: ExpenseTracker, amount: Decimal) -> str:
    return f"{tracker.currency_symbol}{amount:,.2f}"


def main():
    """Main application entry point."""
    try:
        tracker, notifier = get_tracker()
    except Exception as e:
        st.error(f"Failed to load your expenses: {e}")
        st.stop()

    for reminder in notifier.drain():
        st.toast(f"**{reminder.title}**: {reminder.body}", icon="⏰")

    st.sidebar.title("💸 Expense Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["➕ Add Expense", "📋 Expenses", "📊 Charts", "🎯 Budgets", "⚙️ Settings"],
        index=0,
    )

    if page == "➕ Add Expense":
        render_add_page(tracker)
    elif page == "📋 Expenses":
        render_expenses_page(tracker)
    elif page == "📊 Charts":
        render_charts_page(tracker)
    elif page == "🎯 Budgets":
        render_budgets_page(tracker)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_add_page(tracker: ExpenseTracker):
    """Render the expense entry form."""
    st.title("➕ Add Expense")

    col1, col2 = st.columns(2)

    with col1:
        category = st.selectbox(
            "Category *",
            options=[None] + list(CATEGORY_CATALOG),
            format_func=lambda x: "Choose one..." if x is None else x,
        )
        subcategory = st.selectbox(
            "Subcategory *",
            options=[None] + list(subcategories_for(category)),
            format_func=lambda x: "Choose one..." if x is None else x,
        )
        payment_type = st.selectbox(
            "Payment Type *",
            options=[None] + list(PAYMENT_METHODS),
            format_func=lambda x: "Choose one..." if x is None else x,
        )

    with col2:
        name = st.text_input("Name *", placeholder="e.g., Weekly groceries")
        expense_date = st.date_input("Date *", value=date.today())
        amount = st.number_input(
            f"Amount ({tracker.currency_symbol}) *",
            min_value=0.0,
            step=0.01,
            format="%.2f",
        )

    recurring = st.checkbox("Recurring expense")
    frequency = None
    if recurring:
        frequency = st.selectbox(
            "Repeats",
            options=[f.value for f in Frequency],
            format_func=str.title,
        )

    if st.button("Add Expense", type="primary"):
        with get_tracker_lock():
            expense, result = tracker.add_expense(ExpenseDraft(
                category=category,
                subcategory=subcategory,
                payment_type=payment_type,
                name=name,
                expense_date=expense_date,
                amount=Decimal(str(amount)),
                recurring=recurring,
                frequency=frequency,
            ))
        if expense is None:
            st.error(FAILURE_MESSAGE)
        else:
            st.success(f"Added {expense.name}: {money(tracker, expense.amount)}")


def render_expenses_page(tracker: ExpenseTracker):
    """Render the expense table with filters and delete actions."""
    st.title("📋 Expenses")

    col1, col2 = st.columns(2)
    with col1:
        category_filter = st.selectbox(
            "Filter by Category",
            options=[ALL] + list(CATEGORY_CATALOG),
            format_func=lambda x: "All Categories" if x == ALL else x,
        )
    with col2:
        month_filter = st.selectbox(
            "Filter by Month",
            options=[ALL] + tracker.months(),
            format_func=lambda x: "All Months" if x == ALL else x,
        )

    expenses = tracker.filtered_expenses(category=category_filter, month=month_filter)

    st.markdown("---")

    if not expenses:
        st.info("No expenses found")
        return

    for expense in expenses:
        cols = st.columns([2, 2, 2, 3, 2, 2, 1])
        cols[0].write(expense.category)
        cols[1].write(expense.subcategory)
        cols[2].write(expense.payment_type)
        cols[3].write(expense.name + (" 🔁" if expense.recurring else ""))
        cols[4].write(expense.expense_date.isoformat())
        cols[5].write(money(tracker, expense.amount))
        if cols[6].button("Delete", key=f"delete-{expense.id}"):
            with get_tracker_lock():
                tracker.delete_expense(expense.id)
            st.rerun()


def render_charts_page(tracker: ExpenseTracker):
    """Render aggregate charts."""
    st.title("📊 Charts")

    group_by = st.radio(
        "Group by",
        options=["category", "date", "payment"],
        format_func=lambda x: {"category": "Category", "date": "Month", "payment": "Payment Method"}[x],
        horizontal=True,
    )

    totals = tracker.chart_data(group_by)
    if not totals:
        st.info("Add some expenses to see charts.")
        return

    df = pd.DataFrame({
        "Label": list(totals.keys()),
        "Amount": [float(v) for v in totals.values()],
    })

    if group_by == "date":
        fig = px.bar(df, x="Label", y="Amount", title=chart_title(group_by))
    else:
        fig = px.pie(df, names="Label", values="Amount", title=chart_title(group_by))
    st.plotly_chart(fig, use_container_width=True)


def render_budgets_page(tracker: ExpenseTracker):
    """Render budget entry and this month's overview."""
    st.title("🎯 Budgets")

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        category = st.selectbox("Category", options=list(CATEGORY_CATALOG))
    with col2:
        amount = st.number_input(
            f"Monthly budget ({tracker.currency_symbol})",
            min_value=0.0,
            step=10.0,
            format="%.2f",
        )
    with col3:
        st.write("")
        if st.button("Set Budget", type="primary"):
            with get_tracker_lock():
                result = tracker.set_budget(category, Decimal(str(amount)))
            if result.is_valid:
                st.success(f"Budget set for {category}: {money(tracker, Decimal(str(amount)))}")
            else:
                st.error(BUDGET_FAILURE_MESSAGE)

    st.markdown("---")

    today = date.today()
    statuses = tracker.budget_overview(today)
    if not statuses:
        st.info("No budgets set. Set a budget for a category to see your spending progress.")
        return

    st.subheader(f"{month_name(today.month)} {today.year}")
    for status in statuses:
        st.markdown(f"**{status.category}**")
        c1, c2, c3 = st.columns(3)
        c1.metric("Budget", money(tracker, status.ceiling))
        c2.metric("Spent", money(tracker, status.spent))
        c3.metric("Remaining", money(tracker, status.remaining))
        st.progress(float(status.percentage) / 100, text=f"{status.percentage:.0f}%")

        if status.alert:
            st.error(f"Alert: You've used {status.percentage:.0f}% of your {status.category} budget!")
        elif status.level == BudgetLevel.WARNING:
            st.warning(f"{status.percentage:.0f}% of your {status.category} budget used")


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    from expense_tracker.config import get_settings, validate_all_settings

    st.markdown("### Configuration Status")
    status = validate_all_settings()
    for key in ("storage", "google_sheets", "budget", "app"):
        if key not in status:
            continue
        if status[key]:
            st.success(f"✅ {key.replace('_', ' ').title()} - OK")
        else:
            st.error(f"❌ {key.replace('_', ' ').title()} - {status.get(f'{key}_error')}")

    if status.get("storage"):
        storage = get_settings().storage
        st.markdown(f"**Storage backend:** `{storage.backend}`")
        if storage.backend == "file":
            st.markdown(f"**Data directory:** `{storage.data_dir}`")

    st.markdown("---")
    st.markdown(
        "To configure the application, create a `.env` file "
        "(see `EXPENSE_STORAGE_*`, `GOOGLE_SHEETS_*` and `BUDGET_*` variables)."
    )


if __name__ == "__main__":
    main()
