from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from products.models import Product
from products.services.stock_in import StockInItem, stock_in_items


class Command(BaseCommand):
    help = "Seed sample products and dated stock batches (via stock-in)"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding products and stock..."))

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        products_data = [
            ("8850000000011", "Drinking Water 600ml", "bottle", 24),
            ("8850000000028", "Instant Noodles", "pack", 50),
            ("8850000000035", "Canned Tuna", "can", 12),
            ("8850000000042", "Dish Soap 500ml", "bottle", 6),
            ("8850000000059", "Rice 5kg", "bag", 4),
        ]

        for barcode, name, unit, min_stock in products_data:
            Product.objects.get_or_create(
                barcode=barcode,
                defaults={"name": name, "unit": unit, "min_stock": min_stock},
            )

        # -------------------------------
        # STOCK (two lots per product, one bulk stock-in)
        # -------------------------------
        today = timezone.localdate()
        items = []
        for barcode, _name, _unit, min_stock in products_data:
            for i in range(2):
                items.append(
                    StockInItem(
                        barcode=barcode,
                        quantity=min_stock * (i + 1),
                        lot_number=f"SEED-{barcode[-4:]}-{i + 1}",
                        expire_date=today + timedelta(days=20 + i * 160),
                    )
                )

        outcome = stock_in_items(items=items)

        self.stdout.write(
            self.style.SUCCESS(
                f"Products and stock seeded successfully (session {outcome.session_id})."
            )
        )
