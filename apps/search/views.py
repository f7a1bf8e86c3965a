"""Search API views.

Searches are public; results are priced for the caller's role and cached
so a booking can reference an offer by id.
"""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import IsPlatformAdmin
from . import services
from .client import SearchApiError
from .serializers import FlightSearchSerializer, HotelSearchSerializer, LocationLookupSerializer


def provider_error(exc: SearchApiError) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)


class FlightSearchView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        serializer = FlightSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        try:
            result = services.search_flights(serializer.validated_data, request.user)
        except SearchApiError as exc:
            return provider_error(exc)
        return Response(result)


class FeaturedFlightsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        try:
            result = services.featured_flights(request.user)
        except SearchApiError as exc:
            return provider_error(exc)
        return Response(result)


class LocationLookupView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        serializer = LocationLookupSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        try:
            result = services.lookup_locations(serializer.validated_data["keyword"])
        except SearchApiError as exc:
            return provider_error(exc)
        return Response(result)


class HotelSearchView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        serializer = HotelSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        try:
            result = services.search_hotels(serializer.validated_data)
        except SearchApiError as exc:
            return provider_error(exc)
        return Response(result)


class QuotaView(APIView):
    """Aggregator account usage for administrators."""

    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def get(self, request):  # type: ignore
        try:
            return Response(services.get_quota())
        except SearchApiError as exc:
            return provider_error(exc)
