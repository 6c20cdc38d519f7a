# products/models/product.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Sum


class Product(models.Model):
    """
    A stock-keeping item identified by its barcode.

    STOCK MODEL (IMPORTANT):
    - Product itself does NOT store stock
    - Stock lives in StockBatch
    - Total stock = sum of ALL batch quantities (expired included)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, db_index=True)
    barcode = models.CharField(max_length=128, unique=True, db_index=True)
    unit = models.CharField(max_length=32)

    # Reorder threshold: total below this counts as low stock.
    min_stock = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.barcode})"

    def clean(self):
        if not (self.barcode or "").strip():
            raise ValidationError({"barcode": "barcode is required"})

        if self.min_stock is None:
            raise ValidationError({"min_stock": "min_stock is required"})

    @property
    def total_quantity(self) -> int:
        return (
            self.stock_batches.aggregate(total=Sum("quantity")).get("total")
            or 0
        )

    @property
    def is_low_stock(self) -> bool:
        return self.total_quantity < int(self.min_stock or 0)
