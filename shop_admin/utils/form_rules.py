# utils/form_rules.py
"""
Input-acceptance rules for the transactional forms.

Each rule takes already-parsed values (None for blank/unparsable input) and
returns a ValidationResult. Checks run in a fixed order and the first failing
check decides the reason shown to the user. Rules never raise and never touch
the network; the backend remains the authority on stock and balances.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..api.schemas import Customer, Product
from .validators import non_empty


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(True, None)

    @classmethod
    def reject(cls, reason: str) -> "ValidationResult":
        return cls(False, reason)

    def __bool__(self) -> bool:
        return self.ok


_OK = ValidationResult.accept()


def _positive(x: Optional[float]) -> bool:
    return x is not None and x > 0


# ---------------------------- Debtors ----------------------------

def validate_credit_sale(
    *,
    name: Optional[str],
    product: Optional[Product],
    quantity: Optional[int],
    amount_paid: Optional[float],
    total_amount: float,
) -> ValidationResult:
    """New debtor via credit sale: name, product, quantity, then amount paid <= total."""
    if not non_empty(name):
        return ValidationResult.reject("Customer name required")
    if product is None:
        return ValidationResult.reject("Select product")
    if not _positive(quantity):
        return ValidationResult.reject("Invalid quantity")
    paid = amount_paid or 0.0
    if paid < 0:
        return ValidationResult.reject("Amount paid cannot be negative")
    if paid > total_amount:
        return ValidationResult.reject("Cannot pay more than total")
    return _OK


def validate_debt_payment(*, amount: Optional[float], balance: float) -> ValidationResult:
    if not _positive(amount):
        return ValidationResult.reject("Invalid amount")
    if amount > balance:  # type: ignore[operator]
        return ValidationResult.reject("Cannot pay more than balance")
    return _OK


def validate_borrow(*, product: Optional[Product], quantity: Optional[int]) -> ValidationResult:
    if product is None:
        return ValidationResult.reject("Select product")
    if not _positive(quantity):
        return ValidationResult.reject("Invalid quantity")
    return _OK


# ---------------------------- Products ----------------------------

def validate_product(
    *,
    name: Optional[str],
    quantity: Optional[float],
    cost_price: Optional[float],
    selling_price: Optional[float],
) -> ValidationResult:
    if not non_empty(name):
        return ValidationResult.reject("Product name is required.")
    numbers = (quantity, cost_price, selling_price)
    if any(v is None for v in numbers):
        return ValidationResult.reject("All fields are required and must be positive numbers.")
    if not all(_positive(v) for v in numbers):
        return ValidationResult.reject("All fields must be positive numbers.")
    return _OK


# ---------------------------- Replenishment ----------------------------

def validate_batch(
    *,
    product_id: Optional[str],
    quantity: Optional[int],
    cost_price: Optional[float],
    selling_price: Optional[float],
) -> ValidationResult:
    """Expiry date is optional and not checked."""
    if not non_empty(product_id):
        return ValidationResult.reject("Select a product")
    if not _positive(quantity):
        return ValidationResult.reject("Quantity must be a positive number")
    if not _positive(cost_price):
        return ValidationResult.reject("Cost price must be a positive number")
    if not _positive(selling_price):
        return ValidationResult.reject("Selling price must be a positive number")
    return _OK


# ---------------------------- Sales ----------------------------

def validate_sale(
    *,
    product: Optional[Product],
    quantity: Optional[int],
    customer: Optional[Customer] = None,
    credit_amount: Optional[float] = None,
    revenue: float = 0.0,
) -> ValidationResult:
    """
    Product, quantity, on-hand stock (best effort against the last fetched
    snapshot), then the credit amount when both a customer and a credit
    amount are set.
    """
    if product is None:
        return ValidationResult.reject("Please select a product")
    if not _positive(quantity):
        return ValidationResult.reject("Please enter a valid quantity")
    if quantity > product.quantity:  # type: ignore[operator]
        return ValidationResult.reject(f"Only {product.quantity} units available in stock!")
    if customer is not None and credit_amount is not None:
        if credit_amount < 0:
            return ValidationResult.reject("Credit amount cannot be negative")
        if credit_amount > revenue:
            return ValidationResult.reject("Credit amount cannot exceed the sale total")
    return _OK


# ---------------------------- Auth ----------------------------

def validate_sign_in(*, email: Optional[str], password: Optional[str]) -> ValidationResult:
    if not non_empty(email) or not password:
        return ValidationResult.reject("Please enter both email and password.")
    return _OK


def validate_register(
    *, name: Optional[str], email: Optional[str], password: Optional[str]
) -> ValidationResult:
    if not non_empty(name):
        return ValidationResult.reject("Name is required.")
    if not non_empty(email):
        return ValidationResult.reject("Email is required.")
    if not password:
        return ValidationResult.reject("Password is required.")
    return _OK


def validate_forgot_password(*, email: Optional[str]) -> ValidationResult:
    if not non_empty(email):
        return ValidationResult.reject("Email is required.")
    return _OK
