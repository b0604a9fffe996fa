"""
Remote repository layer public API.

Usage:
    from shop_admin.api.repositories import (
        AuthRepo, CustomersRepo, DashboardRepo, ProductsRepo,
        ReplenishmentRepo, ReportingRepo, SalesRepo,
    )
"""

# ------------------ Auth -------------------
from .auth_repo import AuthRepo

# ---------------- Customers ----------------
from .customers_repo import CustomersRepo

# ---------------- Dashboard ----------------
from .dashboard_repo import DashboardRepo

# ---------------- Products -----------------
from .products_repo import ProductsRepo

# -------------- Replenishment --------------
from .replenishment_repo import ReplenishmentRepo

# ---------------- Reporting ----------------
from .reporting_repo import ReportingRepo

# ------------------ Sales ------------------
from .sales_repo import SalesRepo

__all__ = [
    "AuthRepo",
    "CustomersRepo",
    "DashboardRepo",
    "ProductsRepo",
    "ReplenishmentRepo",
    "ReportingRepo",
    "SalesRepo",
]
