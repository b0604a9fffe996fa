from __future__ import annotations

import logging
from typing import Optional

from ..base_module import PageController
from .view import SalesView
from ...api.repositories.customers_repo import CustomersRepo
from ...api.repositories.products_repo import ProductsRepo
from ...api.repositories.sales_repo import SalesRepo
from ...api.schemas import Customer, Product
from ...utils.calculations import remaining_debt, sale_details
from ...utils.form_rules import validate_sale
from ...utils.helpers import fmt_mk
from ...utils.tasks import TaskRunner
from ...utils.validators import optional_float, optional_int

_log = logging.getLogger(__name__)

DEFAULT_SALE_MESSAGE = "Product sold successfully!"


class SalesController(PageController):
    """
    Point-of-sale page.

    Reference data: products and customers, fetched together. Editing any
    input only recomputes the preview; the sale is posted on Complete Sale.
    """

    load_failure_message = "Failed to load products"

    def __init__(
        self,
        products: ProductsRepo,
        customers: CustomersRepo,
        sales: SalesRepo,
        runner: TaskRunner | None = None,
    ):
        super().__init__(runner)
        self.products_repo = products
        self.customers_repo = customers
        self.sales_repo = sales
        self.products: list[Product] = []
        self.customers: list[Customer] = []
        self.attach_view(SalesView())
        self._connect_signals()
        self.update_preview()

    def _connect_signals(self):
        v = self.view
        v.cmb_product.currentIndexChanged.connect(self.update_preview)
        v.cmb_customer.currentIndexChanged.connect(self.update_preview)
        v.edt_quantity.textChanged.connect(self.update_preview)
        v.edt_credit.textChanged.connect(self.update_preview)
        for n, btn in v.quick_buttons.items():
            btn.clicked.connect(lambda _=False, n=n: self.set_quick_quantity(n))
        v.btn_sell.clicked.connect(self.complete_sale)

    # ---------------------------- data ----------------------------

    def reference_fetchers(self):
        return {
            "products": self.products_repo.list_products,
            "customers": self.customers_repo.list_customers,
        }

    def apply_reference_data(self, data):
        self.products = data["products"]
        self.customers = data["customers"]
        self._fill_combos()
        self.update_preview()

    def _fill_combos(self):
        v = self.view
        keep_product = v.cmb_product.currentData()
        keep_customer = v.cmb_customer.currentData()

        v.cmb_product.blockSignals(True)
        v.cmb_product.clear()
        v.cmb_product.addItem("Select a product…", None)
        for p in self.products:
            v.cmb_product.addItem(f"{p.name} ({fmt_mk(p.selling_price)})", p.id)
        idx = v.cmb_product.findData(keep_product) if keep_product else 0
        v.cmb_product.setCurrentIndex(max(idx, 0))
        v.cmb_product.blockSignals(False)

        v.cmb_customer.blockSignals(True)
        v.cmb_customer.clear()
        v.cmb_customer.addItem("Walk-in customer", None)
        for c in self.customers:
            v.cmb_customer.addItem(f"{c.name} (balance {fmt_mk(c.balance)})", c.id)
        idx = v.cmb_customer.findData(keep_customer) if keep_customer else 0
        v.cmb_customer.setCurrentIndex(max(idx, 0))
        v.cmb_customer.blockSignals(False)

    # ---------------------------- inputs ----------------------------

    def selected_product(self) -> Optional[Product]:
        pid = self.view.cmb_product.currentData()
        return next((p for p in self.products if p.id == pid), None) if pid else None

    def selected_customer(self) -> Optional[Customer]:
        cid = self.view.cmb_customer.currentData()
        return next((c for c in self.customers if c.id == cid), None) if cid else None

    def quantity(self) -> Optional[int]:
        return optional_int(self.view.edt_quantity.text())

    def credit_amount(self) -> Optional[float]:
        """Only meaningful with a customer; blank means not set."""
        if self.selected_customer() is None:
            return None
        return optional_float(self.view.edt_credit.text())

    def set_quick_quantity(self, n: int):
        self.view.edt_quantity.setText(str(n))

    # ---------------------------- preview ----------------------------

    def update_preview(self, *_):
        v = self.view
        product = self.selected_product()
        customer = self.selected_customer()
        v.edt_credit.setEnabled(customer is not None)
        v.lbl_stock.setText(f"{product.quantity} units available" if product else "")

        details = sale_details(product, self.quantity())
        revenue = details.revenue if details else 0.0
        if details is None:
            for lbl in (v.lbl_revenue, v.lbl_cost, v.lbl_profit, v.lbl_margin):
                lbl.setText("—")
        else:
            v.lbl_revenue.setText(fmt_mk(details.revenue))
            v.lbl_cost.setText(fmt_mk(details.cost))
            v.lbl_profit.setText(fmt_mk(details.profit))
            v.lbl_margin.setText(f"{details.margin}%")
        if customer is None:
            v.lbl_remaining_debt.setText("—")
        else:
            v.lbl_remaining_debt.setText(
                fmt_mk(remaining_debt(customer, self.credit_amount(), revenue))
            )

    # ---------------------------- submit ----------------------------

    def complete_sale(self) -> bool:
        product = self.selected_product()
        customer = self.selected_customer()
        quantity = self.quantity()
        credit = self.credit_amount()
        details = sale_details(product, quantity)
        result = validate_sale(
            product=product,
            quantity=quantity,
            customer=customer,
            credit_amount=credit,
            revenue=details.revenue if details else 0.0,
        )
        return self.submit(
            result,
            lambda: self.sales_repo.record_sale(
                product.id,
                quantity,
                customer_id=customer.id if customer else None,
                credit_amount=credit,
            ),
            success=lambda msg: msg or DEFAULT_SALE_MESSAGE,
            failure="Failed to sell product",
            on_success=lambda _msg: self.reset_form(),
        )

    def reset_form(self):
        v = self.view
        v.cmb_product.setCurrentIndex(0)
        v.cmb_customer.setCurrentIndex(0)
        v.edt_quantity.clear()
        v.edt_credit.clear()
        self.update_preview()
