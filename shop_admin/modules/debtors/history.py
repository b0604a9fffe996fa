from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from ...api.schemas import DebtorHistory
from ...utils.helpers import fmt_date, fmt_mk, parse_iso_datetime


class DebtorHistoryDialog(QDialog):
    """Read-only view of one customer's balance and borrow records."""

    def __init__(self, history: DebtorHistory, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Debtor Details")
        self.resize(480, 360)
        lay = QVBoxLayout(self)

        cust = history.customer
        self.lbl_name = QLabel(f"Name: {cust.name if cust else 'Unknown'}")
        self.lbl_balance = QLabel(f"Balance: {fmt_mk(cust.balance if cust else 0)}")
        lay.addWidget(self.lbl_name)
        lay.addWidget(self.lbl_balance)

        lay.addWidget(QLabel("Borrow History"))
        self.table = QTableWidget(len(history.borrow_history), 3)
        self.table.setHorizontalHeaderLabels(["Product", "Quantity", "Date"])
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setStretchLastSection(True)
        for r, rec in enumerate(history.borrow_history):
            when = parse_iso_datetime(rec.date)
            self.table.setItem(r, 0, QTableWidgetItem(rec.product_name))
            self.table.setItem(r, 1, QTableWidgetItem(str(rec.quantity)))
            self.table.setItem(r, 2, QTableWidgetItem(fmt_date(when) if when else rec.date))
        lay.addWidget(self.table, 1)

        btns = QDialogButtonBox(QDialogButtonBox.Close)
        btns.rejected.connect(self.reject)
        lay.addWidget(btns)
