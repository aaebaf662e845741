"""
Expense Tracker - Source Package

A personal expense tracker: categorised expenses, recurring expenses that
generate themselves, and monthly budgets per category with alerts.

DESIGN PRINCIPLES:
1. One ledger, owned by one application context
2. Invalid input never reaches the ledger
3. Every mutation is saved in full
4. Recurring expenses advance one period per start-up, never more
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
