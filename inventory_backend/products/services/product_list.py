# products/services/product_list.py

"""
PRODUCT STOCK QUERIES

Purpose:
- Annotate products with stock totals and expiry flags (no N+1 on lists).
- Search / status filter / paginate the product list.
- Resolve a single product by barcode.

Derived values (over ALL batches of the product):
- stock_total         sum of batch quantities (0 without batches)
- earliest_expiry     earliest non-null expire_date
- near_expiry_batches batches expiring today .. today + STOCK_NEAR_EXPIRY_DAYS
- expired_batches     batches with expire_date before today
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.db.models import Count, F, Min, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from products.models import Product
from products.services.exceptions import ProductNotFoundError

STATUS_LOW_STOCK = "lowStock"
STATUS_NEAR_EXPIRY = "nearExpiry"
STATUS_IN_STOCK = "inStock"
STATUS_OUT_OF_STOCK = "outOfStock"
STATUS_EXPIRED = "expired"

PRODUCT_STATUSES = (
    STATUS_LOW_STOCK,
    STATUS_NEAR_EXPIRY,
    STATUS_IN_STOCK,
    STATUS_OUT_OF_STOCK,
    STATUS_EXPIRED,
)


@dataclass(frozen=True)
class ProductPage:
    products: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def near_expiry_window(today=None):
    today = today or timezone.localdate()
    return today, today + timedelta(days=int(settings.STOCK_NEAR_EXPIRY_DAYS))


def annotate_stock(queryset, *, today=None):
    today, cutoff = near_expiry_window(today)

    return queryset.annotate(
        stock_total=Coalesce(Sum("stock_batches__quantity"), 0),
        earliest_expiry=Min("stock_batches__expire_date"),
        near_expiry_batches=Count(
            "stock_batches",
            filter=Q(
                stock_batches__expire_date__gte=today,
                stock_batches__expire_date__lte=cutoff,
            ),
        ),
        expired_batches=Count(
            "stock_batches",
            filter=Q(stock_batches__expire_date__lt=today),
        ),
    )


def filter_by_status(queryset, status: str | None):
    """queryset must already carry annotate_stock() annotations."""
    if not status:
        return queryset

    if status == STATUS_LOW_STOCK:
        return queryset.filter(stock_total__lt=F("min_stock"))

    if status == STATUS_NEAR_EXPIRY:
        return queryset.filter(near_expiry_batches__gt=0)

    if status == STATUS_IN_STOCK:
        return queryset.filter(stock_total__gt=0, stock_total__gte=F("min_stock"))

    if status == STATUS_OUT_OF_STOCK:
        return queryset.filter(stock_total=0)

    if status == STATUS_EXPIRED:
        return queryset.filter(expired_batches__gt=0)

    raise ValueError(f"Unknown product status: {status}")


def list_products(*, search: str | None = None, page: int = 1, limit: int = 20, status=None) -> ProductPage:
    qs = Product.objects.all()

    search = (search or "").strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(barcode__icontains=search))

    qs = filter_by_status(annotate_stock(qs), status).order_by("name", "id")

    limit = min(int(limit), int(settings.PRODUCT_LIST_MAX_LIMIT))
    total = qs.count()
    offset = (int(page) - 1) * limit

    return ProductPage(
        products=list(qs[offset: offset + limit]),
        page=int(page),
        limit=limit,
        total=total,
    )


def get_product_by_barcode(barcode: str):
    product = annotate_stock(Product.objects.filter(barcode=barcode)).first()
    if product is None:
        raise ProductNotFoundError(barcode)
    return product
