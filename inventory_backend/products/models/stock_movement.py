# products/models/stock_movement.py

"""
INVENTORY LEDGER

Immutable record of one stock change against one batch.

GUARANTEES:
- Append-only (no updates, no deletes)
- lot_number is a copy of the batch's lot at write time
- Movements written by one bulk request share a session_id
- A batch with movements cannot be deleted on its own (RESTRICT);
  deleting the product removes batches and movements together
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from .product import Product
from .stock_batch import StockBatch


class StockMovement(models.Model):
    class MovementType(models.TextChoices):
        IN = "IN", "Stock In"
        OUT = "OUT", "Stock Out"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="stock_movements"
    )
    batch = models.ForeignKey(
        StockBatch, on_delete=models.RESTRICT, related_name="stock_movements"
    )

    lot_number = models.CharField(max_length=128, db_index=True)

    movement_type = models.CharField(
        max_length=3, choices=MovementType.choices, db_index=True
    )

    quantity = models.PositiveIntegerField()

    session_id = models.UUIDField(null=True, blank=True, db_index=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["product", "created_at"], name="idx_movement_product_created"
            ),
            models.Index(
                fields=["batch", "created_at"], name="idx_movement_batch_created"
            ),
        ]

    def clean(self):
        if self.quantity is None or self.quantity <= 0:
            raise ValidationError("quantity must be greater than zero")

        if self.batch_id and self.product_id:
            batch_product_id = (
                StockBatch.objects.filter(id=self.batch_id)
                .values_list("product_id", flat=True)
                .first()
            )
            if batch_product_id is not None and batch_product_id != self.product_id:
                raise ValidationError("Batch does not belong to product")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("StockMovement records are immutable")

        if not self.lot_number and self.batch_id:
            self.lot_number = self.batch.lot_number

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "StockMovement records are immutable and cannot be deleted"
        )

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"{product_name} | {self.movement_type} | {self.quantity}"
