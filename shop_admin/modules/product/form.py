from PySide6.QtCore import Signal
from PySide6.QtWidgets import QDialog, QFormLayout, QLineEdit, QDialogButtonBox, QVBoxLayout

from ...utils.form_rules import validate_product
from ...utils.validators import optional_float
from ...widgets.status_banner import StatusBanner


class ProductForm(QDialog):
    """
    Add-product dialog. Stays open until the product rule accepts the input
    and the server has created the product; `submitted` carries the values.
    """

    submitted = Signal(dict)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Add New Product")
        self.setModal(True)
        root = QVBoxLayout(self)

        self.banner = StatusBanner()
        root.addWidget(self.banner)

        form = QFormLayout()
        self.name = QLineEdit()
        self.name.setPlaceholderText("e.g., Coca Cola 500ml")
        self.quantity = QLineEdit()
        self.quantity.setPlaceholderText("0")
        self.cost_price = QLineEdit()
        self.cost_price.setPlaceholderText("0.00")
        self.selling_price = QLineEdit()
        self.selling_price.setPlaceholderText("0.00")
        form.addRow("Product Name*", self.name)
        form.addRow("Quantity*", self.quantity)
        form.addRow("Cost Price (MK)*", self.cost_price)
        form.addRow("Selling Price (MK)*", self.selling_price)
        root.addLayout(form)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.button(QDialogButtonBox.Ok).setText("Add Product")
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

    def values(self) -> dict:
        return {
            "name": self.name.text().strip(),
            "quantity": optional_float(self.quantity.text()),
            "cost_price": optional_float(self.cost_price.text()),
            "selling_price": optional_float(self.selling_price.text()),
        }

    def accept(self):
        values = self.values()
        result = validate_product(**values)
        if not result:
            self.banner.show_error(result.reason)
            return
        self.banner.clear_message()
        self.submitted.emit(values)

    def finish(self):
        super().accept()
