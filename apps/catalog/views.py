"""Catalog API views.

Everyone can browse active rows; administrators see everything and manage
the catalog.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsAdminOrReadOnly, is_platform_admin
from .filters import AirportFilterSet
from .models import Airport, HotelChain, ManagedAirline
from .serializers import AirportSerializer, HotelChainSerializer, ManagedAirlineSerializer


class AirportPagination(PageNumberPagination):
    page_size = 10


class CatalogViewSet(viewsets.ModelViewSet):
    """Shared behaviour: active-only reads for non-admins and a toggle action."""

    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if is_platform_admin(self.request.user):
            return qs
        return qs.active()

    @action(detail=True, methods=["post"], url_path="toggle-active")
    def toggle_active(self, request, pk=None):  # type: ignore
        instance = self.get_object()
        instance.is_active = not instance.is_active
        instance.save(update_fields=["is_active", "updated_at"])
        return Response(self.get_serializer(instance).data)


class AirportViewSet(CatalogViewSet):
    queryset = Airport.objects.order_by("iata_code")
    serializer_class = AirportSerializer
    pagination_class = AirportPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = AirportFilterSet


class ManagedAirlineViewSet(CatalogViewSet):
    queryset = ManagedAirline.objects.order_by("code")
    serializer_class = ManagedAirlineSerializer
    pagination_class = None


class HotelChainViewSet(CatalogViewSet):
    queryset = HotelChain.objects.order_by("name")
    serializer_class = HotelChainSerializer
    pagination_class = None
