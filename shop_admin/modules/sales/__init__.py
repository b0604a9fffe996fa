"""
Sales module package exports.

- SalesController: point-of-sale page with live profit preview.
- SalesView: the form and summary widgets.
"""

from .controller import SalesController
from .view import SalesView

__all__ = [
    "SalesController",
    "SalesView",
]
