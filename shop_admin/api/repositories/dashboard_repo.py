# shop_admin/api/repositories/dashboard_repo.py
from __future__ import annotations

from ..client import ApiClient
from ..schemas import (
    DashboardSummary,
    ProductBar,
    StockSlice,
    TrendPoint,
    as_mapping,
    parse_list,
)


class DashboardRepo:
    """Read-only aggregates for the landing page."""

    def __init__(self, api: ApiClient):
        self.api = api

    def summary(self) -> DashboardSummary:
        data = self.api.get("/dashboard/summary", fallback="Failed to load dashboard summary")
        return DashboardSummary.from_api(as_mapping(data))

    def sales_trend(self) -> list[TrendPoint]:
        return parse_list(
            self.api.get("/dashboard/line", fallback="Failed to load sales trend"),
            TrendPoint.from_api,
        )

    def stock_distribution(self) -> list[StockSlice]:
        return parse_list(
            self.api.get("/dashboard/pie", fallback="Failed to load stock distribution"),
            StockSlice.from_api,
        )

    def product_bars(self) -> list[ProductBar]:
        return parse_list(
            self.api.get("/dashboard/products", fallback="Failed to load product performance"),
            ProductBar.from_api,
        )
