from __future__ import annotations

from datetime import date
from typing import Optional

from PySide6.QtCore import QDate, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QVBoxLayout,
)

from ...api.schemas import Product
from ...utils.form_rules import validate_batch
from ...utils.validators import optional_float, optional_int
from ...widgets.status_banner import StatusBanner


class BatchForm(QDialog):
    """Add-batch dialog. The expiry date is optional. Closed by finish() once the batch is saved."""

    submitted = Signal(dict)

    def __init__(self, products: list[Product], parent=None):
        super().__init__(parent)
        self.setWindowTitle("Add Replenishment Batch")
        self.setModal(True)
        root = QVBoxLayout(self)

        self.banner = StatusBanner()
        root.addWidget(self.banner)

        form = QFormLayout()
        self.cmb_product = QComboBox()
        self.cmb_product.addItem("Select a product", None)
        for p in products:
            self.cmb_product.addItem(p.name, p.id)
        self.quantity = QLineEdit()
        self.cost_price = QLineEdit()
        self.selling_price = QLineEdit()
        self.chk_expiry = QCheckBox("Has expiry date")
        self.expiry = QDateEdit(QDate.currentDate())
        self.expiry.setCalendarPopup(True)
        self.expiry.setEnabled(False)
        self.chk_expiry.toggled.connect(self.expiry.setEnabled)

        form.addRow("Product*", self.cmb_product)
        form.addRow("Quantity*", self.quantity)
        form.addRow("Cost Price (MK)*", self.cost_price)
        form.addRow("Selling Price (MK)*", self.selling_price)
        form.addRow(self.chk_expiry)
        form.addRow("Expiry Date", self.expiry)
        root.addLayout(form)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)
        root.addWidget(btns)

    def expiry_date(self) -> Optional[date]:
        if not self.chk_expiry.isChecked():
            return None
        return self.expiry.date().toPython()

    def values(self) -> dict:
        return {
            "product_id": self.cmb_product.currentData(),
            "quantity": optional_int(self.quantity.text()),
            "cost_price": optional_float(self.cost_price.text()),
            "selling_price": optional_float(self.selling_price.text()),
            "expiry_date": self.expiry_date(),
        }

    def accept(self):
        values = self.values()
        rule_input = {k: v for k, v in values.items() if k != "expiry_date"}
        result = validate_batch(**rule_input)
        if not result:
            self.banner.show_error(result.reason)
            return
        self.banner.clear_message()
        self.submitted.emit(values)

    def finish(self):
        super().accept()
