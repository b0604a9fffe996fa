# shop_admin/api/schemas.py
"""
Typed response records for the shop backend.

Every record is built through ``from_api()`` which applies the
default-substitution rules in one place: missing or unparsable numbers
become 0, missing strings become "", unparsable dates become None.
Downstream calculators and forms can then rely on field presence.

List payloads go through ``parse_list()``: anything that is not a list
becomes [], and rows that are not mappings are skipped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, TypeVar

from ..utils.helpers import parse_iso_datetime

_log = logging.getLogger(__name__)

T = TypeVar("T")


# ------------------------------ coercion ------------------------------

def _num(m: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    raw = m.get(key)
    if raw is None or isinstance(raw, bool):
        return default
    try:
        val = float(raw)
    except (TypeError, ValueError):
        return default
    if val != val:  # NaN
        return default
    return val


def _int(m: Mapping[str, Any], key: str, default: int = 0) -> int:
    val = _num(m, key, float(default))
    try:
        return int(val)
    except (OverflowError, ValueError):
        return default


def _str(m: Mapping[str, Any], key: str, default: str = "") -> str:
    raw = m.get(key)
    if raw is None:
        return default
    return str(raw)


def _id(m: Mapping[str, Any]) -> str:
    raw = m.get("_id", m.get("id"))
    return "" if raw is None else str(raw)


def parse_list(payload: Any, factory: Callable[[Mapping[str, Any]], T]) -> list[T]:
    if not isinstance(payload, list):
        if payload is not None:
            _log.warning("Expected a list payload, got %s; using empty list", type(payload).__name__)
        return []
    out: list[T] = []
    for row in payload:
        if not isinstance(row, Mapping):
            _log.debug("Skipping malformed row %r", row)
            continue
        out.append(factory(row))
    return out


def as_mapping(payload: Any) -> Mapping[str, Any]:
    return payload if isinstance(payload, Mapping) else {}


# ------------------------------ records ------------------------------

@dataclass(frozen=True)
class Product:
    id: str
    name: str
    quantity: int = 0
    cost_price: float = 0.0
    selling_price: float = 0.0

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "Product":
        return cls(
            id=_id(m),
            name=_str(m, "name"),
            quantity=_int(m, "quantity"),
            cost_price=_num(m, "costPrice"),
            selling_price=_num(m, "sellingPrice"),
        )


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    balance: float = 0.0

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "Customer":
        return cls(id=_id(m), name=_str(m, "name"), balance=_num(m, "balance"))


@dataclass(frozen=True)
class BorrowRecord:
    product_name: str
    quantity: int = 0
    date: str = ""

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "BorrowRecord":
        return cls(
            product_name=_str(m, "productName"),
            quantity=_int(m, "quantity"),
            date=_str(m, "date"),
        )


@dataclass(frozen=True)
class DebtorHistory:
    customer: Optional[Customer] = None
    borrow_history: list[BorrowRecord] = field(default_factory=list)

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "DebtorHistory":
        cust = m.get("customer")
        return cls(
            customer=Customer.from_api(cust) if isinstance(cust, Mapping) else None,
            borrow_history=parse_list(m.get("borrowHistory"), BorrowRecord.from_api),
        )


@dataclass(frozen=True)
class ReplenishmentBatch:
    id: str
    product: str
    product_id: str = ""
    quantity_remaining: int = 0
    cost_price: float = 0.0
    selling_price: float = 0.0
    expiry_date: Optional[datetime] = None

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "ReplenishmentBatch":
        product = m.get("product")
        # Some endpoints populate the product document instead of its name
        if isinstance(product, Mapping):
            product_name = _str(product, "name")
            product_id = _id(product)
        else:
            product_name = "" if product is None else str(product)
            product_id = _str(m, "productId")
        return cls(
            id=_id(m),
            product=product_name,
            product_id=product_id,
            quantity_remaining=_int(m, "quantityRemaining"),
            cost_price=_num(m, "costPrice"),
            selling_price=_num(m, "sellingPrice"),
            expiry_date=parse_iso_datetime(m.get("expiryDate")),
        )


@dataclass(frozen=True)
class ReportLine:
    product: str
    sold_qty: float = 0.0
    remaining_qty: float = 0.0
    revenue: float = 0.0
    cost: float = 0.0
    actual_profit: float = 0.0
    expected_profit: float = 0.0
    total_potential_profit: float = 0.0

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "ReportLine":
        return cls(
            product=_str(m, "product"),
            sold_qty=_num(m, "soldQty"),
            remaining_qty=_num(m, "remainingQty"),
            revenue=_num(m, "revenue"),
            cost=_num(m, "cost"),
            actual_profit=_num(m, "actualProfit"),
            expected_profit=_num(m, "expectedProfit"),
            total_potential_profit=_num(m, "totalPotentialProfit"),
        )


@dataclass(frozen=True)
class DashboardSummary:
    total_products: int = 0
    total_sales: float = 0.0
    total_revenue: float = 0.0
    total_profit: float = 0.0
    total_replenishment: float = 0.0

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "DashboardSummary":
        return cls(
            total_products=_int(m, "totalProducts"),
            total_sales=_num(m, "totalSales"),
            total_revenue=_num(m, "totalRevenue"),
            total_profit=_num(m, "totalProfit"),
            total_replenishment=_num(m, "totalReplenishment"),
        )


@dataclass(frozen=True)
class TrendPoint:
    date: str
    sales: float = 0.0
    revenue: float = 0.0
    profit: float = 0.0

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "TrendPoint":
        return cls(
            date=_str(m, "_id", _str(m, "date")),
            sales=_num(m, "sold"),
            revenue=_num(m, "revenue"),
            profit=_num(m, "profit"),
        )


@dataclass(frozen=True)
class StockSlice:
    name: str
    value: float = 1.0

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "StockSlice":
        # Zero-stock slices would vanish from the chart; floor at 1
        return cls(
            name=_str(m, "name") or "Unknown",
            value=max(_num(m, "quantity"), 1.0),
        )


@dataclass(frozen=True)
class ProductBar:
    name: str
    total_qty: float = 0.0
    sold_qty: float = 0.0

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "ProductBar":
        return cls(
            name=_str(m, "name"),
            total_qty=_num(m, "quantity"),
            sold_qty=_num(m, "sold"),
        )


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, m: Mapping[str, Any]) -> "AuthResult":
        user = m.get("user")
        return cls(token=_str(m, "token"), user=dict(user) if isinstance(user, Mapping) else {})
