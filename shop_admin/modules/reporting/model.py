# shop_admin/modules/reporting/model.py
from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QBrush, QColor

from ...api.schemas import ReportLine
from ...utils.helpers import fmt_mk, fmt_qty


class ProductReportTableModel(QAbstractTableModel):
    HEADERS = (
        "Product",
        "Sold",
        "Remaining",
        "Revenue",
        "Cost",
        "Actual Profit",
        "Expected Profit",
        "Total Potential",
    )

    def __init__(self, rows: Optional[List[ReportLine]] = None, parent=None) -> None:
        super().__init__(parent)
        self._rows: List[ReportLine] = rows or []

    def set_rows(self, rows: List[ReportLine]) -> None:
        self.beginResetModel()
        self._rows = rows or []
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()) -> int:  # type: ignore[override]
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:  # type: ignore[override]
        return 0 if parent.isValid() else len(self.HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):  # type: ignore[override]
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return self.HEADERS[section]
        return str(section + 1)

    def data(self, index: QModelIndex, role=Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid():
            return None
        r, c = index.row(), index.column()
        ln = self._rows[r]

        if role == Qt.DisplayRole:
            if c == 0:
                return ln.product
            if c == 1:
                return fmt_qty(ln.sold_qty)
            if c == 2:
                return fmt_qty(ln.remaining_qty)
            money = {
                3: ln.revenue,
                4: ln.cost,
                5: ln.actual_profit,
                6: ln.expected_profit,
                7: ln.total_potential_profit,
            }
            return fmt_mk(money[c])

        if role == Qt.TextAlignmentRole and c > 0:
            return int(Qt.AlignRight | Qt.AlignVCenter)

        # profit columns: green when >= 0, red otherwise
        if role == Qt.ForegroundRole and c in (5, 6, 7):
            value = (ln.actual_profit, ln.expected_profit, ln.total_potential_profit)[c - 5]
            return QBrush(QColor("#1d6b34" if value >= 0 else "#b10000"))
        return None
