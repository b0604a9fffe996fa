"""
Dashboard module package exports.

- DashboardController: KPI cards, 7-day trend, stock and product tables.
- DashboardView, KPICard: UI parts.
"""

from .controller import DashboardController
from .view import DashboardView, KPICard

__all__ = [
    "DashboardController",
    "DashboardView",
    "KPICard",
]
