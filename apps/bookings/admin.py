"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import BookingPassenger, FlightBooking, HotelBooking, HotelBookingGuest


class BookingPassengerInline(admin.TabularInline):
    model = BookingPassenger
    extra = 0


class HotelBookingGuestInline(admin.TabularInline):
    model = HotelBookingGuest
    extra = 0


@admin.register(FlightBooking)
class FlightBookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_reference",
        "user",
        "route_label",
        "trip_type",
        "passengers_count",
        "total_price",
        "status",
        "payment_method",
        "created_at",
    )
    list_filter = ("status", "trip_type", "created_at")
    search_fields = ("booking_reference", "user__email", "user__first_name", "user__last_name")
    readonly_fields = (
        "booking_reference",
        "total_price",
        "midtrans_token",
        "payment_order_id",
        "payment_expiry",
        "created_at",
        "updated_at",
    )
    inlines = [BookingPassengerInline]


@admin.register(HotelBooking)
class HotelBookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_reference",
        "user",
        "hotel_name",
        "check_in",
        "check_out",
        "total_price",
        "status",
        "created_at",
    )
    list_filter = ("status", "check_in")
    search_fields = ("booking_reference", "hotel_name", "user__email")
    readonly_fields = (
        "booking_reference",
        "total_price",
        "nights_count",
        "midtrans_token",
        "payment_order_id",
        "payment_expiry",
        "created_at",
        "updated_at",
    )
    inlines = [HotelBookingGuestInline]
