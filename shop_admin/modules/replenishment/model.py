from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QBrush, QColor

from ...api.schemas import ReplenishmentBatch
from ...utils.calculations import batch_expiry, batch_margin, fmt_margin
from ...utils.helpers import fmt_date, fmt_mk

_EXPIRED = QColor("#b10000")
_SOON = QColor("#b36b00")
_OK = QColor("#1d6b34")


class BatchesTableModel(QAbstractTableModel):
    HEADERS = [
        "Product",
        "Quantity",
        "Cost Price",
        "Selling Price",
        "Total Cost",
        "Total Value",
        "Expires",
        "Status",
        "Margin",
    ]

    def __init__(
        self,
        rows: list[ReplenishmentBatch] | None = None,
        clock: Callable[[], Optional[datetime]] = lambda: None,
    ):
        super().__init__()
        self._rows = rows or []
        self._clock = clock

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        b = self._rows[index.row()]
        c = index.column()
        expiry = batch_expiry(b.expiry_date, self._clock())
        if role == Qt.DisplayRole:
            return [
                b.product,
                str(b.quantity_remaining),
                fmt_mk(b.cost_price),
                fmt_mk(b.selling_price),
                fmt_mk(b.quantity_remaining * b.cost_price),
                fmt_mk(b.quantity_remaining * b.selling_price),
                fmt_date(b.expiry_date) or "—",
                expiry.label,
                fmt_margin(batch_margin(b.cost_price, b.selling_price)),
            ][c]
        if role == Qt.ForegroundRole and c == 7 and b.expiry_date is not None:
            if expiry.is_expired:
                return QBrush(_EXPIRED)
            return QBrush(_SOON if expiry.expiring_soon else _OK)
        if role == Qt.TextAlignmentRole and c in (1, 2, 3, 4, 5, 8):
            return int(Qt.AlignRight | Qt.AlignVCenter)
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def replace(self, rows: list[ReplenishmentBatch]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()
