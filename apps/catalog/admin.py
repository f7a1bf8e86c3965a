"""Admin registrations for catalog reference data."""

from __future__ import annotations

from django.contrib import admin

from .models import Airport, HotelChain, ManagedAirline


@admin.register(Airport)
class AirportAdmin(admin.ModelAdmin):
    list_display = ("iata_code", "name", "city_name", "country_name", "is_active")
    list_filter = ("is_active", "country_name")
    search_fields = ("iata_code", "name", "city_name", "country_name")


@admin.register(ManagedAirline)
class ManagedAirlineAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "baggage_info", "is_active")
    list_filter = ("is_active",)
    search_fields = ("code", "name")


@admin.register(HotelChain)
class HotelChainAdmin(admin.ModelAdmin):
    list_display = ("name", "brand_id", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "brand_id")
