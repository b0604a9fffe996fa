# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - pytest-qt owns QApplication (use qapp/qtbot fixtures)
# - Offscreen platform so the suite runs headless
# - No network: controllers get fake repositories and an inline TaskRunner
# - Session store tests use a throwaway SQLite file under tmp_path
# ---------------------------------------------------------------------

from __future__ import annotations

import os
import re
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("SHOP_ADMIN_DATA_DIR", tempfile.mkdtemp(prefix="shop_admin_tests_"))

import pytest
from PySide6 import QtCore

from shop_admin.api.client import ApiError
from shop_admin.api.schemas import Customer, Product
from shop_admin.utils.tasks import TaskRunner


# ---------- Qt: let pytest-qt own the app ----------
@pytest.fixture(scope="session")
def app(qapp):  # alias to match code that expects an `app` fixture
    return qapp


# ---------- Silence benign Qt warnings ----------
_BENIGN_QT_PATTERNS = [
    r"^QObject::connect: .* already connected",
    r"^QBasicTimer::stop: Failed\. Platform timer not running\.",
    r"propagateSizeHints",
]


@pytest.fixture(autouse=True, scope="session")
def _silence_benign_qt():
    """Filter common harmless Qt messages during tests."""
    original = QtCore.qInstallMessageHandler(None)
    rx = [re.compile(p) for p in _BENIGN_QT_PATTERNS]

    def handler(msg_type, context, message):
        text = str(message)
        for r in rx:
            if r.search(text):
                return
        QtCore.qInstallMessageHandler(None)
        try:
            QtCore.qDebug(message)
        finally:
            QtCore.qInstallMessageHandler(handler)

    QtCore.qInstallMessageHandler(handler)
    try:
        yield
    finally:
        QtCore.qInstallMessageHandler(original)


# ---------- Runner ----------
@pytest.fixture()
def runner(qapp):
    """Executes work synchronously so controller flows are deterministic."""
    return TaskRunner(inline=True)


# ---------- Sample records ----------
@pytest.fixture()
def products() -> list[Product]:
    return [
        Product(id="p1", name="Coca Cola 500ml", quantity=20, cost_price=600.0, selling_price=800.0),
        Product(id="p2", name="Bread", quantity=3, cost_price=1000.0, selling_price=1300.0),
    ]


@pytest.fixture()
def customers() -> list[Customer]:
    return [
        Customer(id="c1", name="Alice", balance=5000.0),
        Customer(id="c2", name="Bob", balance=0.0),
    ]


# ---------- Fakes ----------
class Recorder:
    """
    Base for fake repositories: records calls and can be told to fail.

    `fail[name] = exc` makes method `name` raise `exc`.
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self.fail: dict[str, BaseException] = {}

    def _hit(self, name: str, *args):
        self.calls.append((name, *args))
        exc = self.fail.get(name)
        if exc is not None:
            raise exc

    def called(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


class FakeProductsRepo(Recorder):
    def __init__(self, rows):
        super().__init__()
        self.rows = list(rows)

    def list_products(self):
        self._hit("list_products")
        return list(self.rows)

    def create(self, name, quantity, cost_price, selling_price):
        self._hit("create", name, quantity, cost_price, selling_price)


class FakeCustomersRepo(Recorder):
    def __init__(self, rows, history=None):
        super().__init__()
        self.rows = list(rows)
        self.history_value = history

    def list_customers(self):
        self._hit("list_customers")
        return list(self.rows)

    def list_debtors(self):
        self._hit("list_debtors")
        return [c for c in self.rows if c.balance > 0]

    def history(self, customer_id):
        self._hit("history", customer_id)
        return self.history_value

    def credit_sale(self, name, product_id, quantity, amount_paid):
        self._hit("credit_sale", name, product_id, quantity, amount_paid)

    def pay_debt(self, customer_id, amount):
        self._hit("pay_debt", customer_id, amount)

    def borrow(self, customer_id, product_id, quantity):
        self._hit("borrow", customer_id, product_id, quantity)


class FakeSalesRepo(Recorder):
    def __init__(self, message=None):
        super().__init__()
        self.message = message

    def record_sale(self, product_id, quantity, customer_id=None, credit_amount=None):
        self._hit("record_sale", product_id, quantity, customer_id, credit_amount)
        return self.message


@pytest.fixture()
def products_repo(products):
    return FakeProductsRepo(products)


@pytest.fixture()
def customers_repo(customers):
    return FakeCustomersRepo(customers)


@pytest.fixture()
def sales_repo():
    return FakeSalesRepo()


@pytest.fixture()
def api_error():
    def make(message="Server said no", status=400):
        return ApiError(message, status=status)
    return make


class FakeReplenishmentRepo(Recorder):
    def __init__(self, rows=()):
        super().__init__()
        self.rows = list(rows)

    def list_batches(self):
        self._hit("list_batches")
        return list(self.rows)

    def create(self, product_id, quantity, cost_price, selling_price, expiry_date=None):
        self._hit("create", product_id, quantity, cost_price, selling_price, expiry_date)


class FakeReportingRepo(Recorder):
    def __init__(self, lines=()):
        super().__init__()
        self.lines = list(lines)

    def product_report(self):
        self._hit("product_report")
        return list(self.lines)

    def export_excel(self):
        self._hit("export_excel")
        return b"PK\x03\x04xlsx"

    def export_pdf(self):
        self._hit("export_pdf")
        return b"%PDF-1.4"


class FakeDashboardRepo(Recorder):
    def __init__(self, summary=None, line=(), pie=(), bars=()):
        super().__init__()
        self.summary_value = summary
        self.line = list(line)
        self.pie = list(pie)
        self.bars = list(bars)

    def summary(self):
        self._hit("summary")
        return self.summary_value

    def sales_trend(self):
        self._hit("sales_trend")
        return list(self.line)

    def stock_distribution(self):
        self._hit("stock_distribution")
        return list(self.pie)

    def product_bars(self):
        self._hit("product_bars")
        return list(self.bars)


class FakeAuthRepo(Recorder):
    def __init__(self, result=None, reset_message="Reset instructions sent."):
        super().__init__()
        self.result = result
        self.reset_message = reset_message

    def login(self, email, password):
        self._hit("login", email, password)
        return self.result

    def register(self, name, email, password):
        self._hit("register", name, email, password)

    def forgot_password(self, email):
        self._hit("forgot_password", email)
        return self.reset_message


@pytest.fixture()
def replenishment_repo():
    return FakeReplenishmentRepo()


@pytest.fixture()
def reporting_repo():
    return FakeReportingRepo()


@pytest.fixture()
def dashboard_repo():
    return FakeDashboardRepo()


@pytest.fixture()
def auth_repo():
    return FakeAuthRepo()
