# products/tests/test_stock.py

from datetime import date, timedelta

from django.core.exceptions import ValidationError
from django.db.models.deletion import RestrictedError
from django.test import TestCase

from products.models import Product, StockBatch, StockMovement


class StockLedgerModelTests(TestCase):
    """
    Stock-level model tests.

    GUARANTEES:
    - Batch quantities are never negative
    - Batches belong to products
    - Movements are append-only
    - A batch with movements cannot be deleted on its own
    """

    def setUp(self):
        self.product = Product.objects.create(
            name="Drinking Water 600ml",
            barcode="WATER-600",
            unit="bottle",
            min_stock=10,
        )

        self.batch = StockBatch.objects.create(
            product=self.product,
            lot_number="LOT-001",
            quantity=50,
            expire_date=date.today() + timedelta(days=365),
        )

    def _movement(self, **overrides):
        data = {
            "product": self.product,
            "batch": self.batch,
            "movement_type": StockMovement.MovementType.IN,
            "quantity": 5,
        }
        data.update(overrides)
        return StockMovement.objects.create(**data)

    def test_batch_is_linked_to_correct_product(self):
        """Batch must always belong to its product."""
        self.assertEqual(self.batch.product, self.product)
        self.assertEqual(self.product.stock_batches.count(), 1)

    def test_same_lot_twice_is_not_blocked_by_the_database(self):
        StockBatch.objects.create(product=self.product, lot_number="LOT-001", quantity=1)

        self.assertEqual(self.product.stock_batches.filter(lot_number="LOT-001").count(), 2)

    def test_batch_without_expiry_is_allowed(self):
        batch = StockBatch.objects.create(product=self.product, lot_number="NOEXP", quantity=3)
        self.assertIsNone(batch.expire_date)

    def test_stock_never_negative(self):
        """System must never allow negative stock values."""
        self.batch.quantity = -1

        with self.assertRaises(ValidationError):
            self.batch.save()

    def test_movement_copies_lot_number_from_batch(self):
        movement = self._movement()
        self.assertEqual(movement.lot_number, "LOT-001")
        self.assertIsNone(movement.session_id)

    def test_movement_quantity_must_be_positive(self):
        with self.assertRaises(ValidationError):
            self._movement(quantity=0)

    def test_movement_batch_must_belong_to_product(self):
        other = Product.objects.create(name="Rice", barcode="RICE-1", unit="bag")

        with self.assertRaises(ValidationError):
            self._movement(product=other)

    def test_movement_cannot_be_edited(self):
        movement = self._movement()
        movement.quantity = 99

        with self.assertRaises(ValidationError):
            movement.save()

    def test_movement_cannot_be_deleted(self):
        movement = self._movement()

        with self.assertRaises(ValidationError):
            movement.delete()

        self.assertTrue(StockMovement.objects.filter(pk=movement.pk).exists())

    def test_batch_with_movements_cannot_be_deleted_alone(self):
        self._movement()

        with self.assertRaises(RestrictedError):
            self.batch.delete()

    def test_deleting_product_removes_batches_and_movements(self):
        self._movement()

        self.product.delete()

        self.assertEqual(StockBatch.objects.count(), 0)
        self.assertEqual(StockMovement.objects.count(), 0)
