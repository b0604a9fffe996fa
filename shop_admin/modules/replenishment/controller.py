from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..base_module import PageController
from .form import BatchForm
from .model import BatchesTableModel
from .view import ReplenishmentView
from ...api.repositories.products_repo import ProductsRepo
from ...api.repositories.replenishment_repo import ReplenishmentRepo
from ...api.schemas import Product, ReplenishmentBatch
from ...utils.calculations import batch_totals, fmt_margin
from ...utils.form_rules import validate_batch
from ...utils.helpers import fmt_mk
from ...utils.tasks import TaskRunner

_log = logging.getLogger(__name__)


class ReplenishmentController(PageController):
    load_failure_message = "Failed to load replenishment batches"

    def __init__(
        self,
        repo: ReplenishmentRepo,
        products: ProductsRepo,
        runner: TaskRunner | None = None,
        *,
        clock: Callable[[], Optional[datetime]] = lambda: None,
    ):
        super().__init__(runner)
        self.repo = repo
        self.products_repo = products
        self.batches: list[ReplenishmentBatch] = []
        self.products: list[Product] = []
        self.attach_view(ReplenishmentView())
        self.model = BatchesTableModel([], clock=clock)
        self.view.table.setModel(self.model)
        self.view.btn_add.clicked.connect(self._add)

    # ---------------------------- data ----------------------------

    def reference_fetchers(self):
        return {
            "batches": self.repo.list_batches,
            "products": self.products_repo.list_products,
        }

    def apply_reference_data(self, data):
        self.batches = data["batches"]
        self.products = data["products"]
        self.model.replace(self.batches)
        self.view.table.resizeColumnsToContents()
        totals = batch_totals(self.batches)
        self.view.lbl_batches.setText(str(totals.batch_count))
        self.view.lbl_units.setText(str(totals.units_remaining))
        self.view.lbl_value.setText(fmt_mk(totals.stock_value))
        self.view.lbl_avg_margin.setText(fmt_margin(totals.average_margin))

    # ---------------------------- actions ----------------------------

    def _add(self):
        dlg = BatchForm(self.products, self.view)
        dlg.submitted.connect(lambda values: self.add_batch(**values, form=dlg))
        dlg.exec()

    def add_batch(
        self,
        product_id: Optional[str],
        quantity: Optional[int],
        cost_price: Optional[float],
        selling_price: Optional[float],
        expiry_date: Optional[date] = None,
        form: Optional[BatchForm] = None,
    ) -> bool:
        result = validate_batch(
            product_id=product_id,
            quantity=quantity,
            cost_price=cost_price,
            selling_price=selling_price,
        )
        return self.submit(
            result,
            lambda: self.repo.create(product_id, quantity, cost_price, selling_price, expiry_date),
            success="Batch added",
            failure="Failed to add batch",
            on_success=(lambda _: form.finish()) if form is not None else None,
            on_failure=form.banner.show_error if form is not None else None,
        )
