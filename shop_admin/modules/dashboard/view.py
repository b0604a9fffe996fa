from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QStandardItemModel, QStandardItem
from PySide6.QtWidgets import (
    QAbstractItemView,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from ...api.schemas import ProductBar, StockSlice, TrendPoint
from ...utils.helpers import fmt_mk, fmt_qty
from ...widgets.page_view import PageView
from ...widgets.table_view import TableView


class DashboardView(PageView):
    """
    Pure-UI dashboard surface. The controller drives it through the setters:
        set_kpi_value(key, text)
        set_trend(points)
        set_stock(slices)
        set_products(bars)
    """

    KPIS = [
        ("total_products", "Total Products", "items in the catalogue"),
        ("total_sales", "Total Sales", "units sold"),
        ("total_revenue", "Total Revenue", "all time"),
        ("total_profit", "Total Profit", "all time"),
        ("total_replenishment", "Replenishment", "batches received"),
    ]

    def __init__(self, parent=None) -> None:
        super().__init__("Dashboard", "GOWELO SHOP at a glance", parent)
        self._kpi_cards: Dict[str, KPICard] = {}

        self.btn_refresh = QPushButton("Refresh")
        self.header.addWidget(self.btn_refresh)

        # ===== KPI cards =====
        grid = QGridLayout()
        grid.setHorizontalSpacing(10)
        for i, (key, title, caption) in enumerate(self.KPIS):
            card = KPICard(title, caption)
            self._kpi_cards[key] = card
            grid.addWidget(card, 0, i)
        self.body.addLayout(grid)

        # ===== Tables =====
        self.tbl_trend = TableView()
        self.model_trend = QStandardItemModel(0, 4)
        self.model_trend.setHorizontalHeaderLabels(["Date", "Sales", "Revenue", "Profit"])
        self._prep_simple_table(self.tbl_trend, self.model_trend)

        self.tbl_stock = TableView()
        self.model_stock = QStandardItemModel(0, 2)
        self.model_stock.setHorizontalHeaderLabels(["Product", "Stock"])
        self._prep_simple_table(self.tbl_stock, self.model_stock)

        self.tbl_products = TableView()
        self.model_products = QStandardItemModel(0, 3)
        self.model_products.setHorizontalHeaderLabels(["Product", "In Stock", "Sold"])
        self._prep_simple_table(self.tbl_products, self.model_products)

        tables = QHBoxLayout()
        tables.addWidget(_Card(self.tbl_trend, "Sales Trend (Last 7 Days)"), 2)
        tables.addWidget(_Card(self.tbl_stock, "Stock Distribution"), 1)
        tables.addWidget(_Card(self.tbl_products, "Products: Sold vs Stock"), 1)
        self.body.addLayout(tables, 1)

    # ---------------- setters ----------------
    def kpi_value(self, key: str) -> str:
        return self._kpi_cards[key].lbl_value.text()

    def set_kpi_value(self, key: str, text: str) -> None:
        card = self._kpi_cards.get(key)
        if card:
            card.set_value(text)

    def set_trend(self, points: List[TrendPoint]) -> None:
        self.model_trend.removeRows(0, self.model_trend.rowCount())
        for p in points:
            self.model_trend.appendRow([
                QStandardItem(p.date),
                QStandardItem(fmt_qty(p.sales)),
                QStandardItem(fmt_mk(p.revenue)),
                QStandardItem(fmt_mk(p.profit)),
            ])
        self.tbl_trend.resizeColumnsToContents()

    def set_stock(self, slices: List[StockSlice]) -> None:
        self.model_stock.removeRows(0, self.model_stock.rowCount())
        for s in slices:
            self.model_stock.appendRow([QStandardItem(s.name), QStandardItem(fmt_qty(s.value))])

    def set_products(self, bars: List[ProductBar]) -> None:
        self.model_products.removeRows(0, self.model_products.rowCount())
        for b in bars:
            self.model_products.appendRow([
                QStandardItem(b.name),
                QStandardItem(fmt_qty(b.total_qty)),
                QStandardItem(fmt_qty(b.sold_qty)),
            ])

    def _prep_simple_table(self, tv: QTableView, model: QStandardItemModel) -> None:
        tv.setModel(model)
        tv.setSortingEnabled(False)
        tv.setSelectionMode(QAbstractItemView.NoSelection)
        tv.verticalHeader().setVisible(False)
        tv.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)


# ======================= Visual building blocks =======================

class KPICard(QFrame):
    def __init__(self, title: str, caption: str) -> None:
        super().__init__()
        self.setObjectName("kpi_card")
        self.setStyleSheet("""
            QFrame#kpi_card {
                border: 1px solid #e1e1e1;
                border-radius: 10px;
                background: #fff;
            }
        """)

        v = QVBoxLayout(self)
        v.setContentsMargins(12, 10, 12, 12)
        v.setSpacing(2)

        self.lbl_title = QLabel(title)
        f = self.lbl_title.font()
        f.setBold(True)
        self.lbl_title.setFont(f)

        self.lbl_value = QLabel("—")
        self.lbl_value.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        fv = QFont(self.lbl_value.font())
        fv.setPointSize(fv.pointSize() + 6)
        fv.setBold(True)
        self.lbl_value.setFont(fv)

        self.lbl_caption = QLabel(caption)
        self.lbl_caption.setStyleSheet("color:#777;")

        v.addWidget(self.lbl_title)
        v.addWidget(self.lbl_value)
        v.addWidget(self.lbl_caption)

    def set_value(self, text: str) -> None:
        self.lbl_value.setText(text)


class _Card(QWidget):
    """Wrap any widget in a titled card frame."""
    def __init__(self, inner: QWidget, title: str) -> None:
        super().__init__()
        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)
        frame = QFrame()
        frame.setFrameShape(QFrame.StyledPanel)
        frame.setStyleSheet("QFrame { border:1px solid #dcdcdc; border-radius:8px; }")
        fl = QVBoxLayout(frame)
        fl.setContentsMargins(12, 10, 12, 12)
        fl.setSpacing(6)
        fl.addWidget(QLabel(f"<b>{title}</b>"))
        fl.addWidget(inner)
        v.addWidget(frame)
