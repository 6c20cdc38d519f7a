# products/apps.py

"""
PRODUCTS APP CONFIG

Single-warehouse stock ledger:
- Products (by barcode)
- Stock batches (lot + expiry)
- Append-only stock movements
"""

from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "products"
    verbose_name = "Products & Stock"
