"""
Product module package exports.

- ProductController: product list, inventory summary and add-product flow.
- ProductView, ProductForm, ProductsTableModel, ProductFilterProxy: UI parts.
"""

from .controller import ProductController
from .view import ProductView
from .form import ProductForm
from .model import ProductsTableModel, ProductFilterProxy

__all__ = [
    "ProductController",
    "ProductView",
    "ProductForm",
    "ProductsTableModel",
    "ProductFilterProxy",
]
