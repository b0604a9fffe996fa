"""
utils/calculations.py

Pure helpers for the preview figures shown next to the transactional forms
(sales, debtors, replenishment) and for the report/dashboard roll-ups.

Do not import repositories or touch the network here.
Only compute numbers; formatting belongs in the UI (margins excepted, which
are rendered to one decimal place as part of their contract).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Mapping, Optional, Sequence, Union

from ..api.schemas import Customer, Product, ReplenishmentBatch, ReportLine, TrendPoint
from ..constants import EXPIRY_WARNING_DAYS

__all__ = [
    "SaleDetails",
    "sale_details",
    "remaining_debt",
    "credit_sale_total",
    "credit_sale_remaining",
    "BatchExpiry",
    "batch_expiry",
    "batch_margin",
    "fmt_margin",
    "BatchTotals",
    "batch_totals",
    "ReportTotals",
    "report_totals",
    "InventoryTotals",
    "inventory_totals",
    "last_n_days",
    "fill_missing_days",
]

MS_PER_DAY = 86_400_000


def clamp_non_negative(x: float) -> float:
    """Return x if x > 0, else 0.0."""
    return x if x > 0.0 else 0.0


def _round1(x: float) -> str:
    return f"{x:.1f}"


# -----------------------------
# Sales
# -----------------------------

@dataclass(frozen=True)
class SaleDetails:
    revenue: float
    cost: float
    profit: float
    margin: str  # percent of revenue, one decimal place


def sale_details(product: Optional[Product], quantity: Optional[float]) -> Optional[SaleDetails]:
    """
    revenue = sellingPrice * q, cost = costPrice * q, profit = revenue - cost,
    margin = profit / revenue * 100 (0 when revenue is 0).

    Returns None when there is no product or the quantity is absent/non-positive.
    """
    if product is None or quantity is None or quantity <= 0:
        return None
    revenue = product.selling_price * quantity
    cost = product.cost_price * quantity
    profit = revenue - cost
    margin = profit / revenue * 100 if revenue > 0 else 0.0
    return SaleDetails(revenue=revenue, cost=cost, profit=profit, margin=_round1(margin))


def remaining_debt(
    customer: Optional[Customer],
    credit_amount: Optional[float],
    revenue: float,
) -> float:
    """
    Projected balance for the customer attached to a sale.

    - no customer: 0
    - customer without a credit amount: the current balance
    - customer with a credit amount: balance + credit - revenue
    Always floored at 0.
    """
    if customer is None:
        return 0.0
    if credit_amount is None:
        return clamp_non_negative(customer.balance)
    return clamp_non_negative(customer.balance + credit_amount - revenue)


# -----------------------------
# Debtors (credit sale to a new customer)
# -----------------------------

def credit_sale_total(product: Optional[Product], quantity: Optional[float]) -> float:
    if product is None or quantity is None or quantity <= 0:
        return 0.0
    return product.selling_price * quantity


def credit_sale_remaining(total_amount: float, amount_paid: Optional[float]) -> float:
    """remaining = max(total - paid, 0)."""
    return clamp_non_negative(total_amount - (amount_paid or 0.0))


# -----------------------------
# Replenishment batches
# -----------------------------

@dataclass(frozen=True)
class BatchExpiry:
    is_expired: bool
    days_until_expiry: Optional[int]
    label: str
    expiring_soon: bool = False


def batch_expiry(expiry_date: Optional[datetime], now: Optional[datetime] = None) -> BatchExpiry:
    """
    isExpired = expiry < now; daysUntilExpiry = ceil((expiry - now) / 1 day).
    A batch without an expiry date is labelled "No expiry" and never expires.
    """
    if expiry_date is None:
        return BatchExpiry(is_expired=False, days_until_expiry=None, label="No expiry")
    now = now or datetime.now(timezone.utc)
    if expiry_date.tzinfo is None:
        expiry_date = expiry_date.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    delta_ms = (expiry_date - now) / timedelta(milliseconds=1)
    days = math.ceil(delta_ms / MS_PER_DAY)
    if expiry_date < now:
        return BatchExpiry(is_expired=True, days_until_expiry=days, label="Expired")
    return BatchExpiry(
        is_expired=False,
        days_until_expiry=days,
        label=f"{days} days",
        expiring_soon=days <= EXPIRY_WARNING_DAYS,
    )


def batch_margin(cost_price: float, selling_price: float) -> Optional[float]:
    """
    (selling - cost) / cost * 100, or None when cost is 0 (margin on zero
    cost is undefined and rendered as "N/A").
    """
    if not cost_price:
        return None
    return (selling_price - cost_price) / cost_price * 100


def fmt_margin(margin: Optional[float]) -> str:
    return "N/A" if margin is None else f"{_round1(margin)}%"


@dataclass(frozen=True)
class BatchTotals:
    batch_count: int
    units_remaining: int
    stock_value: float
    average_margin: Optional[float]


def batch_totals(batches: Sequence[ReplenishmentBatch]) -> BatchTotals:
    margins = [
        m for m in (batch_margin(b.cost_price, b.selling_price) for b in batches) if m is not None
    ]
    return BatchTotals(
        batch_count=len(batches),
        units_remaining=sum(b.quantity_remaining for b in batches),
        stock_value=sum(b.quantity_remaining * b.selling_price for b in batches),
        average_margin=(sum(margins) / len(margins)) if margins else None,
    )


# -----------------------------
# Reports / products roll-ups
# -----------------------------

@dataclass(frozen=True)
class ReportTotals:
    total_revenue: float = 0.0
    total_cost: float = 0.0
    total_actual_profit: float = 0.0
    total_expected_profit: float = 0.0
    total_potential_profit: float = 0.0
    total_sold: float = 0.0
    total_remaining: float = 0.0
    profit_margin_percent: float = 0.0


def report_totals(lines: Iterable[ReportLine]) -> ReportTotals:
    rev = cost = actual = expected = potential = sold = remaining = 0.0
    for ln in lines:
        rev += ln.revenue
        cost += ln.cost
        actual += ln.actual_profit
        expected += ln.expected_profit
        potential += ln.total_potential_profit
        sold += ln.sold_qty
        remaining += ln.remaining_qty
    return ReportTotals(
        total_revenue=rev,
        total_cost=cost,
        total_actual_profit=actual,
        total_expected_profit=expected,
        total_potential_profit=potential,
        total_sold=sold,
        total_remaining=remaining,
        profit_margin_percent=(actual / rev * 100) if rev > 0 else 0.0,
    )


@dataclass(frozen=True)
class InventoryTotals:
    total_cost: float
    expected_revenue: float
    expected_profit: float


def inventory_totals(products: Iterable[Product]) -> InventoryTotals:
    total_cost = 0.0
    expected_revenue = 0.0
    for p in products:
        total_cost += p.quantity * p.cost_price
        expected_revenue += p.quantity * p.selling_price
    return InventoryTotals(
        total_cost=total_cost,
        expected_revenue=expected_revenue,
        expected_profit=expected_revenue - total_cost,
    )


# -----------------------------
# Dashboard time series
# -----------------------------

def last_n_days(n: int, today: Optional[date] = None) -> list[str]:
    """ISO day keys for the trailing window ending today, oldest first."""
    today = today or date.today()
    return [(today - timedelta(days=offset)).isoformat() for offset in range(n - 1, -1, -1)]


def _as_point(item) -> Optional[TrendPoint]:
    if isinstance(item, TrendPoint):
        return item
    if not isinstance(item, Mapping):
        return None
    if "sales" in item or "date" in item:
        # already in display shape: {date, sales, revenue, profit}
        def num(k):
            try:
                return float(item.get(k) or 0.0)
            except (TypeError, ValueError):
                return 0.0
        return TrendPoint(date=str(item.get("date") or ""), sales=num("sales"),
                          revenue=num("revenue"), profit=num("profit"))
    return TrendPoint.from_api(item)


def fill_missing_days(
    series: Iterable[Union[TrendPoint, Mapping]],
    days: Sequence[str],
) -> list[TrendPoint]:
    """
    Dense series covering exactly `days`, in that order. Days missing from
    `series` get a zero record. Entries whose date is not in `days` are ignored;
    when a day appears more than once the last entry wins.
    """
    by_day: dict[str, TrendPoint] = {}
    for item in series:
        point = _as_point(item)
        if point is None:
            continue
        # Backend keys may carry a time component; match on the calendar day
        by_day[point.date[:10]] = point
    out: list[TrendPoint] = []
    for day in days:
        p = by_day.get(day)
        out.append(
            TrendPoint(date=day, sales=p.sales, revenue=p.revenue, profit=p.profit)
            if p is not None
            else TrendPoint(date=day, sales=0.0, revenue=0.0, profit=0.0)
        )
    return out
