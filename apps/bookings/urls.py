"""URL routing for the booking domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import FlightBookingViewSet, HotelBookingViewSet

router = DefaultRouter()
router.register(r"flights", FlightBookingViewSet, basename="flight-booking")
router.register(r"hotels", HotelBookingViewSet, basename="hotel-booking")

urlpatterns = [
    path("", include(router.urls)),
]
