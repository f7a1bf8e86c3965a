"""URL declarations for search endpoints (namespace: search)."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    FeaturedFlightsView,
    FlightSearchView,
    HotelSearchView,
    LocationLookupView,
    QuotaView,
)

urlpatterns = [
    path('flights/', FlightSearchView.as_view(), name='flights'),
    path('flights/featured/', FeaturedFlightsView.as_view(), name='featured'),
    path('locations/', LocationLookupView.as_view(), name='locations'),
    path('hotels/', HotelSearchView.as_view(), name='hotels'),
    path('quota/', QuotaView.as_view(), name='quota'),
]
