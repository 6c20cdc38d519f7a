# products/serializers/product.py

"""
PRODUCT SERIALIZERS

Purpose:
- Create products (camelCase wire fields).
- Render products with stock figures from annotate_stock() annotations.
- Validate list query parameters.
"""

from django.conf import settings
from rest_framework import serializers

from products.models import Product
from products.services.product_list import PRODUCT_STATUSES


class ProductCreateSerializer(serializers.ModelSerializer):
    minStock = serializers.IntegerField(source="min_stock", min_value=0, required=False, default=0)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Product
        fields = ["id", "name", "barcode", "unit", "minStock", "createdAt"]
        read_only_fields = ["id"]

    def validate_barcode(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("barcode is required")
        return value


class ProductStockSerializer(serializers.ModelSerializer):
    """
    Read-only product row with stock figures.

    GUARANTEES:
    - Instances come from annotate_stock() (no per-row queries)
    - totalQuantity counts every batch, expired included
    """

    minStock = serializers.IntegerField(source="min_stock", read_only=True)
    totalQuantity = serializers.IntegerField(source="stock_total", read_only=True)
    nearExpiry = serializers.SerializerMethodField()
    expireDate = serializers.DateField(source="earliest_expiry", read_only=True)
    isExpired = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "barcode",
            "unit",
            "minStock",
            "totalQuantity",
            "nearExpiry",
            "expireDate",
            "isExpired",
        ]
        read_only_fields = fields

    def get_nearExpiry(self, obj) -> bool:
        return int(getattr(obj, "near_expiry_batches", 0) or 0) > 0

    def get_isExpired(self, obj) -> bool:
        return int(getattr(obj, "expired_batches", 0) or 0) > 0


class ProductListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=20, min_value=1)
    status = serializers.ChoiceField(choices=PRODUCT_STATUSES, required=False)

    def validate_limit(self, value):
        return min(value, int(settings.PRODUCT_LIST_MAX_LIMIT))
