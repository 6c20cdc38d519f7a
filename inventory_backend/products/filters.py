# products/filters.py

"""
MOVEMENT LOG FILTERS (django-filter)

Query parameters:
- type      IN | OUT
- fromDate  YYYY-MM-DD, inclusive, local calendar date of created_at
- toDate    YYYY-MM-DD, inclusive
- filter    today | 7days (shorthand; wins over fromDate/toDate, which are
            then ignored even when malformed)
"""

from __future__ import annotations

from datetime import timedelta

import django_filters
from django import forms
from django.utils import timezone

from products.models import StockMovement

PERIOD_TODAY = "today"
PERIOD_7DAYS = "7days"

DATE_RANGE_FIELDS = ("fromDate", "toDate")


class StockMovementFilterForm(forms.Form):
    def clean(self):
        cleaned_data = super().clean()

        # Shorthand period replaces any explicit date range.
        if cleaned_data.get("filter"):
            for name in DATE_RANGE_FIELDS:
                self.errors.pop(name, None)
                cleaned_data[name] = None

        return cleaned_data


class StockMovementFilter(django_filters.FilterSet):
    type = django_filters.ChoiceFilter(
        field_name="movement_type",
        choices=StockMovement.MovementType.choices,
    )
    fromDate = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    toDate = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    filter = django_filters.ChoiceFilter(
        choices=((PERIOD_TODAY, "Today"), (PERIOD_7DAYS, "Last 7 days")),
        method="filter_period",
    )

    class Meta:
        form = StockMovementFilterForm

    def filter_period(self, queryset, name, value):
        today = timezone.localdate()

        if value == PERIOD_TODAY:
            return queryset.filter(created_at__date=today)

        if value == PERIOD_7DAYS:
            return queryset.filter(
                created_at__date__gte=today - timedelta(days=7),
                created_at__date__lte=today,
            )

        return queryset
