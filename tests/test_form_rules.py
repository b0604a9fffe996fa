# tests/test_form_rules.py
import pytest

from shop_admin.api.schemas import Customer, Product
from shop_admin.utils.form_rules import (
    ValidationResult,
    validate_batch,
    validate_borrow,
    validate_credit_sale,
    validate_debt_payment,
    validate_forgot_password,
    validate_product,
    validate_register,
    validate_sale,
    validate_sign_in,
)

SODA = Product(id="p1", name="Soda", quantity=20, cost_price=600.0, selling_price=800.0)
ALICE = Customer(id="c1", name="Alice", balance=5000.0)


def reason(result: ValidationResult):
    assert not result.ok
    return result.reason


def test_validation_result_truthiness():
    assert ValidationResult.accept()
    assert not ValidationResult.reject("no")


# ---------------------------- credit sale ----------------------------

@pytest.mark.parametrize(
    "kwargs, expected",
    [
        (dict(name="  ", product=SODA, quantity=1, amount_paid=0, total_amount=800), "Customer name required"),
        (dict(name="Ann", product=None, quantity=1, amount_paid=0, total_amount=0), "Select product"),
        (dict(name="Ann", product=SODA, quantity=0, amount_paid=0, total_amount=0), "Invalid quantity"),
        (dict(name="Ann", product=SODA, quantity=1, amount_paid=-1, total_amount=800), "Amount paid cannot be negative"),
        (dict(name="Ann", product=SODA, quantity=1, amount_paid=900, total_amount=800), "Cannot pay more than total"),
    ],
)
def test_credit_sale_rejections(kwargs, expected):
    assert reason(validate_credit_sale(**kwargs)) == expected


def test_credit_sale_first_failure_wins():
    r = validate_credit_sale(name="", product=None, quantity=0, amount_paid=-5, total_amount=0)
    assert reason(r) == "Customer name required"


def test_credit_sale_accepts_full_payment_and_blank_payment():
    assert validate_credit_sale(name="Ann", product=SODA, quantity=1, amount_paid=800, total_amount=800)
    assert validate_credit_sale(name="Ann", product=SODA, quantity=1, amount_paid=None, total_amount=800)


# ---------------------------- debt payment / borrow ----------------------------

def test_debt_payment_rules():
    assert reason(validate_debt_payment(amount=None, balance=100)) == "Invalid amount"
    assert reason(validate_debt_payment(amount=0, balance=100)) == "Invalid amount"
    assert reason(validate_debt_payment(amount=101, balance=100)) == "Cannot pay more than balance"
    assert validate_debt_payment(amount=100, balance=100)


def test_borrow_rules():
    assert reason(validate_borrow(product=None, quantity=2)) == "Select product"
    assert reason(validate_borrow(product=SODA, quantity=None)) == "Invalid quantity"
    assert validate_borrow(product=SODA, quantity=2)


# ---------------------------- products / batches ----------------------------

def test_product_rules():
    assert reason(validate_product(name="", quantity=1, cost_price=1, selling_price=1)) == "Product name is required."
    assert (
        reason(validate_product(name="Soda", quantity=None, cost_price=1, selling_price=1))
        == "All fields are required and must be positive numbers."
    )
    assert (
        reason(validate_product(name="Soda", quantity=1, cost_price=0, selling_price=1))
        == "All fields must be positive numbers."
    )
    assert validate_product(name="Soda", quantity=1, cost_price=1, selling_price=2)


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        (dict(product_id=None, quantity=1, cost_price=1, selling_price=1), "Select a product"),
        (dict(product_id="p1", quantity=0, cost_price=1, selling_price=1), "Quantity must be a positive number"),
        (dict(product_id="p1", quantity=1, cost_price=None, selling_price=1), "Cost price must be a positive number"),
        (dict(product_id="p1", quantity=1, cost_price=1, selling_price=-2), "Selling price must be a positive number"),
    ],
)
def test_batch_rejections(kwargs, expected):
    assert reason(validate_batch(**kwargs)) == expected


# ---------------------------- sale ----------------------------

def test_sale_requires_product_and_quantity():
    assert reason(validate_sale(product=None, quantity=1)) == "Please select a product"
    assert reason(validate_sale(product=SODA, quantity=None)) == "Please enter a valid quantity"


def test_sale_checks_stock_snapshot():
    assert reason(validate_sale(product=SODA, quantity=21)) == "Only 20 units available in stock!"
    assert validate_sale(product=SODA, quantity=20)


def test_sale_credit_checks_only_with_customer():
    # credit ignored without a customer
    assert validate_sale(product=SODA, quantity=1, credit_amount=-5, revenue=800)
    assert (
        reason(validate_sale(product=SODA, quantity=1, customer=ALICE, credit_amount=-5, revenue=800))
        == "Credit amount cannot be negative"
    )
    assert (
        reason(validate_sale(product=SODA, quantity=1, customer=ALICE, credit_amount=900, revenue=800))
        == "Credit amount cannot exceed the sale total"
    )
    assert validate_sale(product=SODA, quantity=1, customer=ALICE, credit_amount=None, revenue=800)


# ---------------------------- auth ----------------------------

def test_auth_rules():
    assert reason(validate_sign_in(email="a@b.c", password="")) == "Please enter both email and password."
    assert validate_sign_in(email="a@b.c", password="pw")
    assert reason(validate_register(name="", email="a@b.c", password="x")) == "Name is required."
    assert reason(validate_register(name="A", email=" ", password="x")) == "Email is required."
    assert reason(validate_register(name="A", email="a@b.c", password="")) == "Password is required."
    assert reason(validate_forgot_password(email="")) == "Email is required."
    assert validate_forgot_password(email="a@b.c")
