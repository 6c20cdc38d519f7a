# products/urls.py

"""
PRODUCTS / STOCK URLS

Purpose:
- Register product and stock routes directly under /api/:
    /api/products/            list + create
    /api/products/<barcode>/  detail
    /api/stock/in|out|logs/   bulk movements + log
    /api/dashboard/           summary counts
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import DashboardView, ProductViewSet, StockViewSet

router = SimpleRouter()

router.register(r"products", ProductViewSet, basename="products")
router.register(r"stock", StockViewSet, basename="stock")

urlpatterns = [
    path("dashboard/", DashboardView.as_view(), name="dashboard"),
    path("", include(router.urls)),
]
