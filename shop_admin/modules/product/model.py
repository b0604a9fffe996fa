from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex, QSortFilterProxyModel
from PySide6.QtGui import QBrush, QColor

from ...api.schemas import Product
from ...constants import LOW_STOCK_THRESHOLD
from ...utils.helpers import fmt_mk


def is_low_stock(p: Product) -> bool:
    return p.quantity <= LOW_STOCK_THRESHOLD


class ProductsTableModel(QAbstractTableModel):
    HEADERS = [
        "Name",
        "Quantity",
        "Cost Price",
        "Selling Price",
        "Total Cost",
        "Expected Revenue",
        "Expected Profit",
    ]

    def __init__(self, rows: list[Product] | None = None):
        super().__init__()
        self._rows = rows or []

    # Qt model basics
    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        p = self._rows[index.row()]
        c = index.column()
        if role == Qt.DisplayRole:
            total_cost = p.quantity * p.cost_price
            revenue = p.quantity * p.selling_price
            return [
                p.name,
                str(p.quantity),
                fmt_mk(p.cost_price),
                fmt_mk(p.selling_price),
                fmt_mk(total_cost),
                fmt_mk(revenue),
                fmt_mk(revenue - total_cost),
            ][c]
        if role == Qt.TextAlignmentRole and c > 0:
            return int(Qt.AlignRight | Qt.AlignVCenter)
        if role == Qt.ForegroundRole and c == 1 and is_low_stock(p):
            return QBrush(QColor("#b10000"))
        if role == Qt.ToolTipRole and is_low_stock(p):
            return "Low stock"
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def replace(self, rows: list[Product]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()

    def row_as_text(self, row: int) -> str:
        return self._rows[row].name


class ProductFilterProxy(QSortFilterProxyModel):
    def filterAcceptsRow(self, source_row, source_parent):
        if not self.filterRegularExpression().pattern():
            return True
        model = self.sourceModel()
        try:
            text = model.row_as_text(source_row)
        except AttributeError:
            return True
        return self.filterRegularExpression().match(text).hasMatch()
