"""
Reporting module package exports.

- ReportingController: product report table, totals and exports.
- ReportingView, ProductReportTableModel: UI parts.
"""

from .controller import ReportingController
from .view import ReportingView
from .model import ProductReportTableModel

__all__ = [
    "ReportingController",
    "ReportingView",
    "ProductReportTableModel",
]
