# tests/test_calculations.py
from datetime import date, datetime, timezone

import pytest

from shop_admin.api.schemas import Customer, Product, ReplenishmentBatch, ReportLine, TrendPoint
from shop_admin.utils.calculations import (
    batch_expiry,
    batch_margin,
    batch_totals,
    credit_sale_remaining,
    credit_sale_total,
    fill_missing_days,
    fmt_margin,
    inventory_totals,
    last_n_days,
    remaining_debt,
    report_totals,
    sale_details,
)

SODA = Product(id="p1", name="Soda", quantity=20, cost_price=600.0, selling_price=800.0)
NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------- sales ----------------------------

def test_sale_details_revenue_cost_profit_and_margin():
    d = sale_details(SODA, 2)
    assert d.revenue == 1600.0
    assert d.cost == 1200.0
    assert d.profit == 400.0
    assert d.margin == "25.0"


def test_sale_details_three_units_at_forty_percent():
    d = sale_details(Product(id="p9", name="Juice", cost_price=600.0, selling_price=1000.0), 3)
    assert (d.revenue, d.cost, d.profit) == (3000.0, 1800.0, 1200.0)
    assert d.margin == "40.0"


@pytest.mark.parametrize("qty", [None, 0, -3])
def test_sale_details_absent_without_positive_quantity(qty):
    assert sale_details(SODA, qty) is None


def test_sale_details_absent_without_product():
    assert sale_details(None, 3) is None


def test_sale_details_zero_selling_price_gives_zero_margin():
    free = Product(id="x", name="Free sample", quantity=5, cost_price=10.0, selling_price=0.0)
    assert sale_details(free, 1).margin == "0.0"


def test_remaining_debt_rules():
    alice = Customer(id="c1", name="Alice", balance=5000.0)
    assert remaining_debt(None, 1000.0, 1600.0) == 0.0
    assert remaining_debt(alice, None, 1600.0) == 5000.0
    assert remaining_debt(alice, 1000.0, 1600.0) == 4400.0


def test_remaining_debt_never_negative():
    bob = Customer(id="c2", name="Bob", balance=0.0)
    assert remaining_debt(bob, 0.0, 1600.0) == 0.0


# ---------------------------- debtors ----------------------------

def test_credit_sale_total_and_remaining():
    total = credit_sale_total(SODA, 3)
    assert total == 2400.0
    assert credit_sale_remaining(total, 400.0) == 2000.0
    assert credit_sale_remaining(total, None) == 2400.0
    assert credit_sale_remaining(total, 5000.0) == 0.0


def test_credit_sale_total_is_zero_without_product():
    assert credit_sale_total(None, 3) == 0.0


# ---------------------------- batches ----------------------------

def test_batch_without_expiry_never_expires():
    e = batch_expiry(None, NOW)
    assert not e.is_expired
    assert e.days_until_expiry is None
    assert e.label == "No expiry"


def test_batch_expiry_rounds_partial_days_up():
    e = batch_expiry(datetime(2026, 1, 4, tzinfo=timezone.utc), NOW)
    assert not e.is_expired
    assert e.days_until_expiry == 3
    assert e.label == "3 days"
    assert e.expiring_soon


def test_batch_expiry_far_away_is_not_soon():
    e = batch_expiry(datetime(2026, 1, 10, tzinfo=timezone.utc), NOW)
    assert e.days_until_expiry == 9
    assert not e.expiring_soon


def test_batch_expiry_seven_days_is_soon():
    e = batch_expiry(datetime(2026, 1, 8, 12, 0, tzinfo=timezone.utc), NOW)
    assert e.days_until_expiry == 7
    assert e.expiring_soon


def test_batch_in_the_past_is_expired():
    e = batch_expiry(datetime(2025, 12, 31, tzinfo=timezone.utc), NOW)
    assert e.is_expired
    assert e.label == "Expired"


def test_naive_expiry_is_treated_as_utc():
    e = batch_expiry(datetime(2026, 1, 4), NOW)
    assert e.days_until_expiry == 3


def test_batch_margin_and_zero_cost():
    assert batch_margin(100.0, 140.0) == pytest.approx(40.0)
    assert batch_margin(0.0, 50.0) is None
    assert fmt_margin(batch_margin(100.0, 140.0)) == "40.0%"
    assert fmt_margin(None) == "N/A"


def test_batch_totals_skip_undefined_margins():
    batches = [
        ReplenishmentBatch(id="b1", product="Soda", quantity_remaining=10, cost_price=100.0, selling_price=140.0),
        ReplenishmentBatch(id="b2", product="Gift", quantity_remaining=2, cost_price=0.0, selling_price=50.0),
    ]
    t = batch_totals(batches)
    assert t.batch_count == 2
    assert t.units_remaining == 12
    assert t.stock_value == 1500.0
    assert t.average_margin == pytest.approx(40.0)


def test_batch_totals_empty():
    t = batch_totals([])
    assert t.batch_count == 0
    assert t.stock_value == 0
    assert t.average_margin is None


# ---------------------------- roll-ups ----------------------------

def test_report_totals_sums_and_margin():
    lines = [
        ReportLine(product="A", sold_qty=5, remaining_qty=10, revenue=1000, cost=600,
                   actual_profit=400, expected_profit=800, total_potential_profit=1200),
        ReportLine(product="B", sold_qty=1, remaining_qty=0, revenue=1000, cost=900,
                   actual_profit=100, expected_profit=0, total_potential_profit=100),
    ]
    t = report_totals(lines)
    assert t.total_revenue == 2000
    assert t.total_cost == 1500
    assert t.total_actual_profit == 500
    assert t.total_expected_profit == 800
    assert t.total_potential_profit == 1300
    assert t.total_sold == 6
    assert t.total_remaining == 10
    assert t.profit_margin_percent == pytest.approx(25.0)


def test_report_totals_two_lines():
    t = report_totals([
        ReportLine(product="A", revenue=100, cost=40),
        ReportLine(product="B", revenue=50, cost=10),
    ])
    assert t.total_revenue == 150
    assert t.total_cost == 50


def test_report_totals_without_revenue_has_zero_margin():
    assert report_totals([]).profit_margin_percent == 0.0


def test_inventory_totals(products):
    t = inventory_totals(products)
    assert t.total_cost == 15000.0
    assert t.expected_revenue == 19900.0
    assert t.expected_profit == 4900.0


# ---------------------------- trend ----------------------------

def test_last_n_days_oldest_first():
    assert last_n_days(3, date(2026, 1, 5)) == ["2026-01-03", "2026-01-04", "2026-01-05"]


def test_last_n_days_crosses_month_boundary():
    assert last_n_days(2, date(2026, 3, 1)) == ["2026-02-28", "2026-03-01"]


def test_fill_missing_days_pads_with_zero_records():
    days = last_n_days(3, date(2026, 1, 5))
    out = fill_missing_days([{"_id": "2026-01-04", "sold": 3, "revenue": 300, "profit": 50}], days)
    assert [p.date for p in out] == days
    assert out[0] == TrendPoint(date="2026-01-03")
    assert out[1] == TrendPoint(date="2026-01-04", sales=3, revenue=300, profit=50)
    assert out[2].sales == 0


def test_fill_missing_days_ignores_days_outside_window_and_keeps_last():
    days = ["2026-01-05"]
    series = [
        TrendPoint(date="2025-12-01", sales=99),
        {"date": "2026-01-05T10:00:00Z", "sales": 1, "revenue": 10, "profit": 2},
        {"date": "2026-01-05", "sales": 4, "revenue": 40, "profit": 8},
        "garbage",
    ]
    out = fill_missing_days(series, days)
    assert out == [TrendPoint(date="2026-01-05", sales=4, revenue=40, profit=8)]


def test_fill_missing_days_follows_window_order_for_unordered_series():
    days = last_n_days(5, date(2026, 1, 5))
    series = [
        {"_id": "2026-01-05", "sold": 5, "revenue": 500, "profit": 100},
        {"_id": "2026-01-03", "sold": 3, "revenue": 300, "profit": 60},
        {"_id": "2026-01-04", "sold": 4, "revenue": 400, "profit": 80},
    ]
    out = fill_missing_days(series, days)
    assert [p.date for p in out] == days
    assert [p.sales for p in out] == [0, 0, 3, 4, 5]
    assert [p.revenue for p in out] == [0, 0, 300, 400, 500]
