from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
)

from ...constants import QUICK_QUANTITIES
from ...widgets.page_view import PageView


class SalesView(PageView):
    def __init__(self, parent=None):
        super().__init__("Make a Sale", "Quickly sell products from GOWELO SHOP inventory", parent)

        # --- Sale form ---
        box = QGroupBox("New Sale")
        form = QFormLayout(box)

        self.cmb_product = QComboBox()
        form.addRow("Product*", self.cmb_product)
        self.lbl_stock = QLabel("")
        self.lbl_stock.setStyleSheet("color:#666;")
        form.addRow("", self.lbl_stock)

        qty_row = QHBoxLayout()
        self.edt_quantity = QLineEdit()
        self.edt_quantity.setPlaceholderText("Enter quantity")
        qty_row.addWidget(self.edt_quantity, 1)
        self.quick_buttons: dict[int, QPushButton] = {}
        for n in QUICK_QUANTITIES:
            btn = QPushButton(str(n))
            btn.setFixedWidth(40)
            self.quick_buttons[n] = btn
            qty_row.addWidget(btn)
        form.addRow("Quantity*", qty_row)

        self.cmb_customer = QComboBox()
        form.addRow("Customer (optional)", self.cmb_customer)
        self.edt_credit = QLineEdit()
        self.edt_credit.setPlaceholderText("Amount left on credit")
        form.addRow("Credit Amount", self.edt_credit)

        self.btn_sell = self.add_submit_button(QPushButton("Complete Sale"))
        form.addRow(self.btn_sell)
        self.body.addWidget(box)

        # --- Live preview ---
        preview = QGroupBox("Sale Summary")
        grid = QGridLayout(preview)
        self.lbl_revenue = QLabel("—")
        self.lbl_cost = QLabel("—")
        self.lbl_profit = QLabel("—")
        self.lbl_margin = QLabel("—")
        self.lbl_remaining_debt = QLabel("—")
        rows = [
            ("Total Revenue:", self.lbl_revenue),
            ("Total Cost:", self.lbl_cost),
            ("Profit:", self.lbl_profit),
            ("Profit Margin:", self.lbl_margin),
            ("Customer balance after sale:", self.lbl_remaining_debt),
        ]
        for i, (caption, lbl) in enumerate(rows):
            grid.addWidget(QLabel(caption), i, 0)
            grid.addWidget(lbl, i, 1)
        self.body.addWidget(preview)
        self.body.addStretch(1)
