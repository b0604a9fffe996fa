from PySide6.QtWidgets import QHBoxLayout, QPushButton, QLineEdit, QLabel, QGridLayout, QGroupBox

from ...widgets.page_view import PageView
from ...widgets.table_view import TableView


class ProductView(PageView):
    def __init__(self, parent=None):
        super().__init__("Products", "Manage your product inventory", parent)

        self.btn_add = QPushButton("Add Product")
        self.header.addWidget(self.btn_add)

        # Search
        row = QHBoxLayout()
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search products by name…")
        row.addWidget(QLabel("Search:"))
        row.addWidget(self.search, 2)
        row.addStretch(1)
        self.body.addLayout(row)

        self.table = TableView()
        self.body.addWidget(self.table, 1)

        # Inventory summary
        box = QGroupBox("Inventory Summary")
        grid = QGridLayout(box)
        self.lbl_total_cost = QLabel("—")
        self.lbl_expected_revenue = QLabel("—")
        self.lbl_expected_profit = QLabel("—")
        self.lbl_low_stock = QLabel("—")
        grid.addWidget(QLabel("Total Inventory Cost:"), 0, 0)
        grid.addWidget(self.lbl_total_cost, 0, 1)
        grid.addWidget(QLabel("Expected Revenue:"), 0, 2)
        grid.addWidget(self.lbl_expected_revenue, 0, 3)
        grid.addWidget(QLabel("Expected Profit:"), 1, 0)
        grid.addWidget(self.lbl_expected_profit, 1, 1)
        grid.addWidget(QLabel("Low stock items:"), 1, 2)
        grid.addWidget(self.lbl_low_stock, 1, 3)
        self.body.addWidget(box)
