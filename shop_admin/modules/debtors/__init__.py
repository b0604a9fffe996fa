"""
Debtors module package exports.

- DebtorsController: credit sales, debt payments, borrow-again and history.
- DebtorsView, DebtorHistoryDialog: UI parts.
"""

from .controller import DebtorsController
from .view import DebtorsView
from .history import DebtorHistoryDialog

__all__ = [
    "DebtorsController",
    "DebtorsView",
    "DebtorHistoryDialog",
]
