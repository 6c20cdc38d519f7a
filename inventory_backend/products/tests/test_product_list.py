# products/tests/test_product_list.py

from __future__ import annotations

from datetime import timedelta

from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from products.models import Product, StockBatch
from products.services.exceptions import ProductNotFoundError
from products.services.product_list import get_product_by_barcode, list_products


class ProductFixtureMixin:
    """
    Catalog used by list / detail / dashboard tests:

    - WATER  total 40, min 10, one batch expiring in 10 days   -> inStock, nearExpiry
    - RICE   total 1,  min 5,  one batch expired yesterday     -> lowStock, expired
    - TUNA   total 0,  min 0,  no batches                      -> outOfStock
    - SOAP   total 8,  min 2,  one batch in 200 days, one none -> inStock
    """

    def create_catalog(self):
        today = timezone.localdate()

        self.water = Product.objects.create(name="Water", barcode="WATER-600", unit="bottle", min_stock=10)
        self.rice = Product.objects.create(name="Rice", barcode="RICE-5", unit="bag", min_stock=5)
        self.tuna = Product.objects.create(name="Tuna", barcode="TUNA-1", unit="can", min_stock=0)
        self.soap = Product.objects.create(name="Dish Soap", barcode="SOAP-1", unit="bottle", min_stock=2)

        StockBatch.objects.create(
            product=self.water, lot_number="W1", quantity=40, expire_date=today + timedelta(days=10)
        )
        StockBatch.objects.create(
            product=self.rice, lot_number="R1", quantity=1, expire_date=today - timedelta(days=1)
        )
        StockBatch.objects.create(
            product=self.soap, lot_number="S1", quantity=5, expire_date=today + timedelta(days=200)
        )
        StockBatch.objects.create(product=self.soap, lot_number="S2", quantity=3)
        self.today = today


class ProductListServiceTests(ProductFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Results ordered by name
    - Search matches name or barcode, case-insensitive
    - Status filters classify products from their batches
    - Pagination reports totals after filtering
    """

    def setUp(self):
        self.create_catalog()

    def _names(self, **kwargs):
        return [p.name for p in list_products(**kwargs).products]

    def test_ordered_by_name(self):
        self.assertEqual(self._names(), ["Dish Soap", "Rice", "Tuna", "Water"])

    def test_search_by_name_or_barcode(self):
        self.assertEqual(self._names(search="wAt"), ["Water"])
        self.assertEqual(self._names(search="rice-5"), ["Rice"])

    def test_status_filters(self):
        self.assertEqual(self._names(status="lowStock"), ["Rice"])
        self.assertEqual(self._names(status="nearExpiry"), ["Water"])
        self.assertEqual(self._names(status="inStock"), ["Dish Soap", "Water"])
        self.assertEqual(self._names(status="outOfStock"), ["Tuna"])
        self.assertEqual(self._names(status="expired"), ["Rice"])

    def test_pagination(self):
        page = list_products(page=2, limit=3)

        self.assertEqual([p.name for p in page.products], ["Water"])
        self.assertEqual(page.total, 4)
        self.assertEqual(page.total_pages, 2)

    def test_page_past_the_end_is_empty(self):
        page = list_products(page=9, limit=20)

        self.assertEqual(page.products, [])
        self.assertEqual(page.total, 4)

    def test_annotations(self):
        soap = get_product_by_barcode("SOAP-1")

        self.assertEqual(soap.stock_total, 8)
        self.assertEqual(soap.earliest_expiry, self.today + timedelta(days=200))
        self.assertEqual(soap.near_expiry_batches, 0)
        self.assertEqual(soap.expired_batches, 0)

    def test_unknown_barcode_raises(self):
        with self.assertRaises(ProductNotFoundError):
            get_product_by_barcode("NOPE")


@override_settings(API_KEY="test-key")
class ProductApiTests(ProductFixtureMixin, TestCase):
    """
    GUARANTEES:
    - List answers {data, pagination}
    - Invalid query params answer 400
    - Detail is looked up by barcode (404 when unknown)
    - Create validates and rejects duplicate barcodes
    """

    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_X_API_KEY="test-key")
        self.create_catalog()

    def test_list_shape(self):
        res = self.client.get(reverse("products-list"), {"status": "lowStock"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["pagination"], {"page": 1, "limit": 20, "total": 1, "totalPages": 1})

        item = res.data["data"][0]
        self.assertEqual(item["barcode"], "RICE-5")
        self.assertEqual(item["minStock"], 5)
        self.assertEqual(item["totalQuantity"], 1)
        self.assertTrue(item["isExpired"])
        self.assertFalse(item["nearExpiry"])
        self.assertEqual(item["expireDate"], (self.today - timedelta(days=1)).isoformat())

    def test_limit_is_capped(self):
        res = self.client.get(reverse("products-list"), {"limit": 500})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["pagination"]["limit"], 100)

    def test_invalid_query_params_return_400(self):
        for params in ({"limit": 0}, {"limit": "many"}, {"page": 0}, {"status": "sold"}):
            with self.subTest(params=params):
                res = self.client.get(reverse("products-list"), params)
                self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail_by_barcode(self):
        res = self.client.get(reverse("products-detail", kwargs={"barcode": "TUNA-1"}))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["name"], "Tuna")
        self.assertEqual(res.data["totalQuantity"], 0)
        self.assertIsNone(res.data["expireDate"])

    def test_detail_unknown_barcode_returns_404(self):
        res = self.client.get(reverse("products-detail", kwargs={"barcode": "NOPE"}))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_product(self):
        res = self.client.post(
            reverse("products-list"),
            {"name": "Noodles", "barcode": "NOODLE-1", "unit": "pack", "minStock": 12},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["minStock"], 12)
        self.assertEqual(Product.objects.get(barcode="NOODLE-1").min_stock, 12)

    def test_create_duplicate_barcode_returns_400(self):
        res = self.client.post(
            reverse("products-list"),
            {"name": "Water again", "barcode": "WATER-600", "unit": "bottle"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("barcode", res.data["details"])

    def test_create_negative_min_stock_returns_400(self):
        res = self.client.post(
            reverse("products-list"),
            {"name": "Bad", "barcode": "BAD-1", "unit": "pc", "minStock": -1},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
