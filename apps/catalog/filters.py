"""FilterSet definitions for catalog listings."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Airport


class AirportFilterSet(django_filters.FilterSet):
    """Free-text airport lookup over code, name, city and country."""

    search = django_filters.CharFilter(method="filter_search")
    country = django_filters.CharFilter(field_name="country_name", lookup_expr="iexact")

    class Meta:
        model = Airport
        fields = ["is_active"]

    def filter_search(self, queryset, name, value):  # type: ignore
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(iata_code__icontains=term)
            | Q(name__icontains=term)
            | Q(city_name__icontains=term)
            | Q(country_name__icontains=term)
        )
