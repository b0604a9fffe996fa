from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QRegularExpression

from ..base_module import PageController
from .view import ProductView
from .form import ProductForm
from .model import ProductsTableModel, ProductFilterProxy, is_low_stock
from ...api.repositories.products_repo import ProductsRepo
from ...api.schemas import Product
from ...utils.calculations import inventory_totals
from ...utils.form_rules import validate_product
from ...utils.helpers import fmt_mk
from ...utils.tasks import TaskRunner

_log = logging.getLogger(__name__)


class ProductController(PageController):
    load_failure_message = "Failed to load products"

    def __init__(self, repo: ProductsRepo, runner: TaskRunner | None = None):
        super().__init__(runner)
        self.repo = repo
        self.products: list[Product] = []
        self.attach_view(ProductView())

        self.base_model = ProductsTableModel([])
        self.proxy = ProductFilterProxy(self.view)
        self.proxy.setSourceModel(self.base_model)
        self.proxy.setFilterCaseSensitivity(Qt.CaseInsensitive)
        self.view.table.setModel(self.proxy)

        self._connect_signals()

    def _connect_signals(self):
        self.view.btn_add.clicked.connect(self._add)
        self.view.search.textChanged.connect(self._apply_filter)

    def _apply_filter(self, text: str):
        self.proxy.setFilterRegularExpression(
            QRegularExpression(QRegularExpression.escape(text), QRegularExpression.CaseInsensitiveOption)
        )

    # ---------------------------- data ----------------------------

    def reference_fetchers(self):
        return {"products": self.repo.list_products}

    def apply_reference_data(self, data):
        self.products = data["products"]
        self.base_model.replace(self.products)
        self.view.table.resizeColumnsToContents()
        self._render_totals()

    def _render_totals(self):
        totals = inventory_totals(self.products)
        self.view.lbl_total_cost.setText(fmt_mk(totals.total_cost))
        self.view.lbl_expected_revenue.setText(fmt_mk(totals.expected_revenue))
        self.view.lbl_expected_profit.setText(fmt_mk(totals.expected_profit))
        self.view.lbl_low_stock.setText(str(sum(1 for p in self.products if is_low_stock(p))))

    # ---------------------------- actions ----------------------------

    def _add(self):
        dlg = ProductForm(self.view)
        dlg.submitted.connect(lambda values: self.create_product(**values, form=dlg))
        dlg.exec()

    def create_product(
        self,
        name: Optional[str],
        quantity: Optional[float],
        cost_price: Optional[float],
        selling_price: Optional[float],
        form: Optional[ProductForm] = None,
    ) -> bool:
        """With `form`, the dialog closes on success and shows a rejection itself."""
        result = validate_product(
            name=name, quantity=quantity, cost_price=cost_price, selling_price=selling_price
        )
        return self.submit(
            result,
            lambda: self.repo.create(name or "", quantity, cost_price, selling_price),
            success=f"Product '{(name or '').strip()}' added.",
            failure="Failed to add product",
            on_success=(lambda _: form.finish()) if form is not None else None,
            on_failure=form.banner.show_error if form is not None else None,
        )
