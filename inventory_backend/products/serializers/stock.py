# products/serializers/stock.py
"""
======================================================
PATH: products/serializers/stock.py
======================================================
STOCK MOVEMENT REQUEST SERIALIZERS

Purpose:
- Validate bulk stock-in / stock-out bodies before any service runs.
- Translate camelCase wire fields into service item dataclasses.

Rules:
- items must be a non-empty list
- barcode must be a non-empty string
- quantity must be a whole number in 1 .. MAX_QUANTITY (batch column range)
- lotNumber may be blank/missing (stock-in auto-generates one)
- expireDate accepts YYYY-MM-DD or an ISO datetime; ""/null mean "no expiry"
"""

from __future__ import annotations

from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from products.services.stock_fefo import StockOutItem
from products.services.stock_in import StockInItem

MAX_QUANTITY = 2147483647


def _parse_expire_date(value):
    if value in (None, ""):
        return None

    raw = str(value).strip()
    if not raw:
        return None

    try:
        parsed = parse_date(raw)
        if parsed is None:
            dt = parse_datetime(raw)
            parsed = dt.date() if dt is not None else None
    except ValueError:
        parsed = None

    if parsed is None:
        raise serializers.ValidationError("expireDate must be a valid date (YYYY-MM-DD)")
    return parsed


class StockInItemSerializer(serializers.Serializer):
    barcode = serializers.CharField(max_length=128)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)
    lotNumber = serializers.CharField(
        max_length=128, required=False, allow_blank=True, allow_null=True
    )
    expireDate = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_expireDate(self, value):
        return _parse_expire_date(value)

    def validate_lotNumber(self, value):
        return (value or "").strip()


class StockInRequestSerializer(serializers.Serializer):
    items = StockInItemSerializer(many=True, allow_empty=False)

    def to_stock_items(self) -> list[StockInItem]:
        return [
            StockInItem(
                barcode=row["barcode"],
                quantity=row["quantity"],
                lot_number=row.get("lotNumber") or "",
                expire_date=row.get("expireDate"),
            )
            for row in self.validated_data["items"]
        ]


class StockOutItemSerializer(serializers.Serializer):
    barcode = serializers.CharField(max_length=128)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)


class StockOutRequestSerializer(serializers.Serializer):
    items = StockOutItemSerializer(many=True, allow_empty=False)

    def to_stock_items(self) -> list[StockOutItem]:
        return [
            StockOutItem(barcode=row["barcode"], quantity=row["quantity"])
            for row in self.validated_data["items"]
        ]
