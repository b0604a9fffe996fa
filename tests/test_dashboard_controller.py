# tests/test_dashboard_controller.py
from datetime import date

import pytest

from shop_admin.api.schemas import DashboardSummary, ProductBar, StockSlice, TrendPoint
from shop_admin.modules.base_module import PageState
from shop_admin.modules.dashboard.controller import DashboardController


@pytest.fixture()
def ctl(dashboard_repo, runner):
    dashboard_repo.summary_value = DashboardSummary(
        total_products=12, total_sales=340, total_revenue=125000,
        total_profit=31000, total_replenishment=9,
    )
    dashboard_repo.line = [
        TrendPoint(date="2026-01-08", sales=5, revenue=4000, profit=1000),
        TrendPoint(date="2026-01-10", sales=2, revenue=1600, profit=400),
        TrendPoint(date="2025-12-01", sales=99, revenue=1, profit=1),
    ]
    dashboard_repo.pie = [StockSlice(name="Bread", value=3)]
    dashboard_repo.bars = [ProductBar(name="Bread", total_qty=3, sold_qty=10)]
    c = DashboardController(dashboard_repo, runner, today=lambda: date(2026, 1, 10))
    c.activate()
    return c


def test_kpis(ctl):
    v = ctl.view
    assert ctl.state is PageState.READY
    assert v.kpi_value("total_products") == "12"
    assert v.kpi_value("total_sales") == "340"
    assert v.kpi_value("total_revenue") == "MK 125,000.00"
    assert v.kpi_value("total_profit") == "MK 31,000.00"
    assert v.kpi_value("total_replenishment") == "9"


def test_trend_covers_trailing_week(ctl):
    assert [p.date for p in ctl.trend] == [
        "2026-01-04", "2026-01-05", "2026-01-06", "2026-01-07",
        "2026-01-08", "2026-01-09", "2026-01-10",
    ]
    assert [p.sales for p in ctl.trend] == [0, 0, 0, 0, 5, 0, 2]
    m = ctl.view.model_trend
    assert m.rowCount() == 7
    assert m.item(4, 2).text() == "MK 4,000.00"


def test_stock_and_product_tables(ctl):
    v = ctl.view
    assert v.model_stock.item(0, 0).text() == "Bread"
    assert v.model_products.item(0, 2).text() == "10"


def test_refresh_fetches_again(ctl, dashboard_repo):
    ctl.view.btn_refresh.click()
    assert len(dashboard_repo.called("summary")) == 2


def test_refresh_ignored_before_first_load(dashboard_repo, runner):
    ctl = DashboardController(dashboard_repo, runner)
    ctl.refresh()
    assert dashboard_repo.calls == []


def test_one_failed_panel_fails_the_page(ctl, dashboard_repo, api_error):
    dashboard_repo.fail["stock_distribution"] = api_error("Failed to load stock distribution")
    ctl.refresh()
    assert ctl.state is PageState.FAILED
    assert ctl.view.load_state.lbl.text() == "Failed to load stock distribution"
    del dashboard_repo.fail["stock_distribution"]
    ctl.refresh()
    assert ctl.state is PageState.READY
