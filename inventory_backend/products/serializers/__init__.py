# products/serializers/__init__.py

from .product import (
    ProductCreateSerializer,
    ProductListQuerySerializer,
    ProductStockSerializer,
)
from .stock import StockInRequestSerializer, StockOutRequestSerializer

__all__ = [
    "ProductCreateSerializer",
    "ProductListQuerySerializer",
    "ProductStockSerializer",
    "StockInRequestSerializer",
    "StockOutRequestSerializer",
]
