# products/views/__init__.py

"""
Products views package exports.

Purpose:
- Central export point for router imports.
"""

from .dashboard import DashboardView
from .product import ProductViewSet
from .stock import StockViewSet

__all__ = [
    "DashboardView",
    "ProductViewSet",
    "StockViewSet",
]
