# products/services/dashboard.py

"""
DASHBOARD SUMMARY

Counts across the whole ledger:
- totalProducts
- totalStockQuantity  sum over all batches
- lowStockCount       products whose total is below min_stock
- nearExpiryCount     distinct products with a batch expiring in the near-expiry window
- expiredCount        distinct products with a batch already past expiry
"""

from __future__ import annotations

from django.db.models import F, Sum
from django.db.models.functions import Coalesce

from products.models import Product, StockBatch
from products.services.product_list import annotate_stock, near_expiry_window


def dashboard_summary(*, today=None) -> dict:
    today, cutoff = near_expiry_window(today)

    total_products = Product.objects.count()

    low_stock_count = (
        annotate_stock(Product.objects.all(), today=today)
        .filter(stock_total__lt=F("min_stock"))
        .count()
    )

    near_expiry_count = (
        StockBatch.objects.filter(expire_date__gte=today, expire_date__lte=cutoff)
        .values("product_id")
        .distinct()
        .count()
    )

    expired_count = (
        StockBatch.objects.filter(expire_date__lt=today)
        .values("product_id")
        .distinct()
        .count()
    )

    total_stock = StockBatch.objects.aggregate(
        total=Coalesce(Sum("quantity"), 0)
    )["total"]

    return {
        "totalProducts": total_products,
        "lowStockCount": low_stock_count,
        "nearExpiryCount": near_expiry_count,
        "expiredCount": expired_count,
        "totalStockQuantity": int(total_stock or 0),
    }
