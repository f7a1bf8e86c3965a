"""URL declarations for the catalog app (namespace: catalog)."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AirportViewSet, HotelChainViewSet, ManagedAirlineViewSet

router = DefaultRouter()
router.register(r'airports', AirportViewSet, basename='airport')
router.register(r'airlines', ManagedAirlineViewSet, basename='airline')
router.register(r'hotel-chains', HotelChainViewSet, basename='hotel-chain')

urlpatterns = [
    path('', include(router.urls)),
]
