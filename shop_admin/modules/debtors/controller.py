from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QComboBox, QLineEdit, QPushButton, QTableWidgetItem, QWidget, QHBoxLayout

from ..base_module import PageController, PageState, error_message
from .history import DebtorHistoryDialog
from .view import DebtorsView
from ...api.repositories.customers_repo import CustomersRepo
from ...api.repositories.products_repo import ProductsRepo
from ...api.schemas import Customer, DebtorHistory, Product
from ...utils.calculations import credit_sale_remaining, credit_sale_total
from ...utils.form_rules import validate_borrow, validate_credit_sale, validate_debt_payment
from ...utils.helpers import fmt_mk
from ...utils.row_inputs import RowInputs
from ...utils.tasks import TaskResult, TaskRunner
from ...utils.validators import optional_float, optional_int

_log = logging.getLogger(__name__)


class DebtorsController(PageController):
    """
    Debt ledger page.

    Reference data: products and debtors. Per-row payment and borrow-again
    inputs live in `self.rows` (keyed by customer id); the table widgets
    only write into it.
    """

    load_failure_message = "Failed to load debtors"

    def __init__(
        self,
        customers: CustomersRepo,
        products: ProductsRepo,
        runner: TaskRunner | None = None,
    ):
        super().__init__(runner)
        self.customers_repo = customers
        self.products_repo = products
        self.products: list[Product] = []
        self.debtors: list[Customer] = []
        self.rows = RowInputs()
        self.history_dialog: DebtorHistoryDialog | None = None
        self.attach_view(DebtorsView())
        self._connect_signals()
        self.update_preview()

    def _connect_signals(self):
        v = self.view
        v.edt_quantity.textChanged.connect(self.update_preview)
        v.edt_amount_paid.textChanged.connect(self.update_preview)
        v.cmb_product.currentIndexChanged.connect(self.update_preview)
        v.btn_credit_sale.clicked.connect(self.add_credit_sale)

    # ---------------------------- data ----------------------------

    def reference_fetchers(self):
        return {
            "products": self.products_repo.list_products,
            "debtors": self.customers_repo.list_debtors,
        }

    def apply_reference_data(self, data):
        self.products = data["products"]
        self.debtors = data["debtors"]
        self.rows.retain(d.id for d in self.debtors)
        self._fill_products(self.view.cmb_product)
        self._render_table()
        self.update_preview()

    def total_outstanding(self) -> float:
        return sum(d.balance for d in self.debtors)

    def _fill_products(self, cmb: QComboBox, selected: Optional[str] = None):
        keep = selected if selected is not None else cmb.currentData()
        cmb.blockSignals(True)
        cmb.clear()
        cmb.addItem("Select product", None)
        for p in self.products:
            cmb.addItem(f"{p.name} ({fmt_mk(p.selling_price)})", p.id)
        idx = cmb.findData(keep) if keep else 0
        cmb.setCurrentIndex(max(idx, 0))
        cmb.blockSignals(False)

    def _render_table(self):
        t = self.view.table
        t.setRowCount(len(self.debtors))
        for r, d in enumerate(self.debtors):
            row = self.rows.get(d.id)
            t.setItem(r, 0, QTableWidgetItem(d.name))
            t.setItem(r, 1, QTableWidgetItem(fmt_mk(d.balance)))

            edt_pay = QLineEdit("" if row.payment is None else f"{row.payment:g}")
            edt_pay.setPlaceholderText("Amount")
            edt_pay.textChanged.connect(
                lambda text, cid=d.id: self.rows.update(cid, payment=optional_float(text))
            )
            btn_pay = QPushButton("Pay")
            btn_pay.clicked.connect(lambda _=False, cid=d.id: self.pay_debt(cid))
            t.setCellWidget(r, 2, self._cell(edt_pay, btn_pay))

            cmb = QComboBox()
            self._fill_products(cmb, row.borrow_product_id or "")
            cmb.currentIndexChanged.connect(
                lambda _i, cid=d.id, c=cmb: self.rows.update(cid, borrow_product_id=c.currentData())
            )
            edt_qty = QLineEdit("" if row.borrow_quantity is None else str(row.borrow_quantity))
            edt_qty.setPlaceholderText("Qty")
            edt_qty.setFixedWidth(50)
            edt_qty.textChanged.connect(
                lambda text, cid=d.id: self.rows.update(cid, borrow_quantity=optional_int(text))
            )
            btn_borrow = QPushButton("Borrow")
            btn_borrow.clicked.connect(lambda _=False, cid=d.id: self.borrow(cid))
            t.setCellWidget(r, 3, self._cell(cmb, edt_qty, btn_borrow))

            btn_view = QPushButton("View")
            btn_view.clicked.connect(lambda _=False, cid=d.id: self.view_history(cid))
            t.setCellWidget(r, 4, self._cell(btn_view))
        t.resizeRowsToContents()
        self.view.lbl_total_outstanding.setText(fmt_mk(self.total_outstanding()))

    @staticmethod
    def _cell(*widgets) -> QWidget:
        host = QWidget()
        lay = QHBoxLayout(host)
        lay.setContentsMargins(2, 0, 2, 0)
        for w in widgets:
            lay.addWidget(w)
        return host

    def _debtor(self, customer_id: str) -> Optional[Customer]:
        return next((d for d in self.debtors if d.id == customer_id), None)

    def _product(self, product_id: Optional[str]) -> Optional[Product]:
        if not product_id:
            return None
        return next((p for p in self.products if p.id == product_id), None)

    # ---------------------------- credit sale ----------------------------

    def selected_product(self) -> Optional[Product]:
        return self._product(self.view.cmb_product.currentData())

    def update_preview(self, *_):
        total = credit_sale_total(self.selected_product(), optional_int(self.view.edt_quantity.text()))
        paid = optional_float(self.view.edt_amount_paid.text())
        self.view.lbl_total.setText(fmt_mk(total))
        self.view.lbl_remaining.setText(fmt_mk(credit_sale_remaining(total, paid)))

    def add_credit_sale(self) -> bool:
        v = self.view
        name = v.edt_name.text()
        product = self.selected_product()
        quantity = optional_int(v.edt_quantity.text())
        paid = optional_float(v.edt_amount_paid.text()) or 0.0
        result = validate_credit_sale(
            name=name,
            product=product,
            quantity=quantity,
            amount_paid=paid,
            total_amount=credit_sale_total(product, quantity),
        )
        return self.submit(
            result,
            lambda: self.customers_repo.credit_sale(name, product.id, quantity, paid),
            success="Debtor added successfully",
            failure="Failed to add debtor",
            on_success=lambda _: self.reset_credit_form(),
        )

    def reset_credit_form(self):
        v = self.view
        v.edt_name.clear()
        v.cmb_product.setCurrentIndex(0)
        v.edt_quantity.setText("1")
        v.edt_amount_paid.setText("0")
        self.update_preview()

    # ---------------------------- row actions ----------------------------

    def pay_debt(self, customer_id: str) -> bool:
        debtor = self._debtor(customer_id)
        amount = self.rows.get(customer_id).payment
        result = validate_debt_payment(amount=amount, balance=debtor.balance if debtor else 0.0)
        return self.submit(
            result,
            lambda: self.customers_repo.pay_debt(customer_id, amount),
            success="Payment recorded",
            failure="Payment failed",
            on_success=lambda _: self.rows.update(customer_id, payment=None),
        )

    def borrow(self, customer_id: str) -> bool:
        row = self.rows.get(customer_id)
        product = self._product(row.borrow_product_id)
        result = validate_borrow(product=product, quantity=row.borrow_quantity)
        return self.submit(
            result,
            lambda: self.customers_repo.borrow(customer_id, product.id, row.borrow_quantity),
            success="Debt increased",
            failure="Borrow failed",
            on_success=lambda _: self.rows.reset(customer_id),
        )

    # ---------------------------- history ----------------------------

    def view_history(self, customer_id: str) -> None:
        if self.state is not PageState.READY:
            return
        gen = self._generation
        self.runner.submit(
            lambda: self.customers_repo.history(customer_id),
            lambda res: self._on_history(gen, res),
        )

    def _on_history(self, gen: int, res: TaskResult) -> None:
        if self._is_stale(gen):
            return
        if not res.ok:
            _log.warning("Fetching debtor history failed", exc_info=res.error)
            self.show_error(error_message(res.error, "Failed to fetch debtor details"))
            self._check_auth(res.error)
            return
        self.show_history(res.value)

    def show_history(self, history: DebtorHistory) -> None:
        self.history_dialog = DebtorHistoryDialog(history, self.view)
        self.history_dialog.open()
