"""
Expense Tracker - Source Package

A minimal personal expense tracker: one API endpoint that records and
lists expenses, and one page with an entry form, a daily-totals chart
and the most recent expenses.

DESIGN PRINCIPLES:
1. Validate at the edge, store only normalized records
2. Fail early, fail visibly
3. No silent corrections
4. Every write is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
