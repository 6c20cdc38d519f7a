# products/tests/test_products.py

from django.db import IntegrityError
from django.test import TestCase

from products.models import Product, StockBatch


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - Products can be created safely
    - Barcode uniqueness is enforced
    - Total stock is derived from batches only
    """

    def test_product_creation(self):
        """A valid product should be created successfully."""
        product = Product.objects.create(
            name="Drinking Water 600ml",
            barcode="8850000000011",
            unit="bottle",
            min_stock=24,
        )

        self.assertEqual(product.name, "Drinking Water 600ml")
        self.assertEqual(product.barcode, "8850000000011")
        self.assertEqual(product.min_stock, 24)

    def test_barcode_must_be_unique(self):
        """Barcode duplication must be rejected."""
        Product.objects.create(name="Rice 5kg", barcode="RICE-5", unit="bag")

        with self.assertRaises(IntegrityError):
            Product.objects.create(name="Rice 5kg Duplicate", barcode="RICE-5", unit="bag")

    def test_total_quantity_without_batches_is_zero(self):
        product = Product.objects.create(name="Canned Tuna", barcode="TUNA-1", unit="can", min_stock=5)

        self.assertEqual(product.total_quantity, 0)
        self.assertTrue(product.is_low_stock)

    def test_total_quantity_sums_every_batch(self):
        product = Product.objects.create(name="Dish Soap", barcode="SOAP-1", unit="bottle", min_stock=10)
        StockBatch.objects.create(product=product, lot_number="L1", quantity=4)
        StockBatch.objects.create(product=product, lot_number="L2", quantity=0)
        StockBatch.objects.create(product=product, lot_number="L3", quantity=7)

        self.assertEqual(product.total_quantity, 11)
        self.assertFalse(product.is_low_stock)

    def test_product_string_representation(self):
        """__str__ should be human readable."""
        product = Product.objects.create(name="Instant Noodles", barcode="NOODLE-1", unit="pack")

        self.assertIn("Instant Noodles", str(product))
        self.assertIn("NOODLE-1", str(product))
