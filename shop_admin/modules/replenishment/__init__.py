"""
Replenishment module package exports.

- ReplenishmentController: batch list, expiry status and add-batch flow.
- ReplenishmentView, BatchForm, BatchesTableModel: UI parts.
"""

from .controller import ReplenishmentController
from .view import ReplenishmentView
from .form import BatchForm
from .model import BatchesTableModel

__all__ = [
    "ReplenishmentController",
    "ReplenishmentView",
    "BatchForm",
    "BatchesTableModel",
]
