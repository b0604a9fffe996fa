from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
)

from ...widgets.page_view import PageView


class DebtorsView(PageView):
    COLUMNS = ["Customer", "Balance", "Pay", "Borrow Again", "View Details"]

    def __init__(self, parent=None):
        super().__init__("Debtors", "Track customers who owe the shop", parent)

        # --- New credit sale ---
        box = QGroupBox("Add Debtor (Credit Sale)")
        grid = QGridLayout(box)
        self.edt_name = QLineEdit()
        self.edt_name.setPlaceholderText("Customer name")
        self.cmb_product = QComboBox()
        self.edt_quantity = QLineEdit("1")
        self.edt_quantity.setPlaceholderText("Quantity")
        self.edt_amount_paid = QLineEdit("0")
        self.edt_amount_paid.setPlaceholderText("Amount paid now")
        self.lbl_total = QLabel("—")
        self.lbl_remaining = QLabel("—")
        self.btn_credit_sale = self.add_submit_button(QPushButton("Add Debtor"))

        grid.addWidget(QLabel("Customer"), 0, 0)
        grid.addWidget(self.edt_name, 0, 1)
        grid.addWidget(QLabel("Product"), 0, 2)
        grid.addWidget(self.cmb_product, 0, 3)
        grid.addWidget(QLabel("Quantity"), 1, 0)
        grid.addWidget(self.edt_quantity, 1, 1)
        grid.addWidget(QLabel("Amount Paid"), 1, 2)
        grid.addWidget(self.edt_amount_paid, 1, 3)
        grid.addWidget(QLabel("Total:"), 2, 0)
        grid.addWidget(self.lbl_total, 2, 1)
        grid.addWidget(QLabel("Remaining debt:"), 2, 2)
        grid.addWidget(self.lbl_remaining, 2, 3)
        grid.addWidget(self.btn_credit_sale, 3, 3)
        self.body.addWidget(box)

        # --- Debtors table ---
        self.table = QTableWidget(0, len(self.COLUMNS))
        self.table.setHorizontalHeaderLabels(self.COLUMNS)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionMode(QAbstractItemView.NoSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.body.addWidget(self.table, 1)

        row = QHBoxLayout()
        row.addStretch(1)
        row.addWidget(QLabel("Total outstanding:"))
        self.lbl_total_outstanding = QLabel("—")
        self.lbl_total_outstanding.setStyleSheet("font-weight:600;")
        row.addWidget(self.lbl_total_outstanding)
        self.body.addLayout(row)
