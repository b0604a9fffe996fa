# shop_admin/modules/dashboard/controller.py
from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from ..base_module import PageController, PageState
from .view import DashboardView
from ...api.repositories.dashboard_repo import DashboardRepo
from ...api.schemas import DashboardSummary, TrendPoint
from ...constants import TREND_WINDOW_DAYS
from ...utils.calculations import fill_missing_days, last_n_days
from ...utils.helpers import fmt_mk, fmt_qty
from ...utils.tasks import TaskRunner

_log = logging.getLogger(__name__)


class DashboardController(PageController):
    """
    Landing page. Summary, trend, stock distribution and product bars are
    fetched together; the trend is normalised to the trailing
    TREND_WINDOW_DAYS ending today so days without sales show as zero.
    """

    load_failure_message = "Failed to load dashboard"

    def __init__(
        self,
        repo: DashboardRepo,
        runner: TaskRunner | None = None,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(runner)
        self.repo = repo
        self._today = today
        self.summary = DashboardSummary()
        self.trend: list[TrendPoint] = []
        self.attach_view(DashboardView())
        self.view.btn_refresh.clicked.connect(self.refresh)

    def refresh(self) -> None:
        if self.state in (PageState.READY, PageState.FAILED):
            self.load()

    # ---------------------------- data ----------------------------

    def reference_fetchers(self):
        return {
            "summary": self.repo.summary,
            "line": self.repo.sales_trend,
            "pie": self.repo.stock_distribution,
            "products": self.repo.product_bars,
        }

    def apply_reference_data(self, data):
        self.summary = data["summary"]
        self.trend = fill_missing_days(
            data["line"], last_n_days(TREND_WINDOW_DAYS, self._today())
        )
        s = self.summary
        v = self.view
        v.set_kpi_value("total_products", str(s.total_products))
        v.set_kpi_value("total_sales", fmt_qty(s.total_sales))
        v.set_kpi_value("total_revenue", fmt_mk(s.total_revenue))
        v.set_kpi_value("total_profit", fmt_mk(s.total_profit))
        v.set_kpi_value("total_replenishment", fmt_qty(s.total_replenishment))
        v.set_trend(self.trend)
        v.set_stock(data["pie"])
        v.set_products(data["products"])
