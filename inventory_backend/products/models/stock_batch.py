# products/models/stock_batch.py

"""
STOCK BATCH (LOT-BASED INVENTORY)

Represents one lot of a product with a single expiry date.

RULES:
- quantity is never negative (DB check constraint + full_clean)
- quantity is mutated ONLY via services (stock-in increments, stock-out decrements)
- expire_date NULL means the lot does not expire
- Zero-quantity batches are kept as history and skipped by FEFO
- (product, lot_number) is unique in practice but NOT enforced by the DB;
  stock-in always reuses the first matching row
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .product import Product


class StockBatch(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="stock_batches",
    )

    lot_number = models.CharField(max_length=128, db_index=True)

    expire_date = models.DateField(null=True, blank=True)

    quantity = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["expire_date", "created_at"]
        indexes = [
            models.Index(
                fields=["product", "expire_date"], name="idx_batch_product_expire"
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name="chk_stockbatch_quantity_gte_zero",
            ),
        ]

    def clean(self):
        if self.quantity is None or self.quantity < 0:
            raise ValidationError({"quantity": "quantity cannot be negative"})

        if not (self.lot_number or "").strip():
            raise ValidationError({"lot_number": "lot_number is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    @property
    def is_empty(self) -> bool:
        return int(self.quantity or 0) <= 0

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"{product_name} | Lot {self.lot_number}"
