"""Serializers for the booking domain."""

from __future__ import annotations

from typing import Any

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import BookingPassenger, BookingStatus, FlightBooking, HotelBooking, HotelBookingGuest
from .services import MAX_PASSENGERS


class PassengerSerializer(serializers.ModelSerializer):
    class Meta:
        model = BookingPassenger
        fields = [
            "id",
            "title",
            "first_name",
            "last_name",
            "date_of_birth",
            "nationality",
            "passport_number",
            "passport_expiry",
        ]
        read_only_fields = ["id"]

    def validate_date_of_birth(self, value):  # type: ignore
        if value >= timezone.localdate():
            raise serializers.ValidationError("Date of birth must be in the past.")
        return value

    def validate_passport_expiry(self, value):  # type: ignore
        if value <= timezone.localdate():
            raise serializers.ValidationError("Passport has expired.")
        return value


class HotelGuestSerializer(serializers.ModelSerializer):
    class Meta:
        model = HotelBookingGuest
        fields = ["id", "title", "first_name", "last_name", "date_of_birth", "nationality"]
        read_only_fields = ["id"]
        extra_kwargs = {"title": {"required": False}}


class FlightBookingCreateSerializer(serializers.Serializer):
    offer_id = serializers.CharField(max_length=64)
    passengers_count = serializers.IntegerField(min_value=1, max_value=MAX_PASSENGERS)
    passengers = PassengerSerializer(many=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        count = len(attrs["passengers"])
        if count < 1 or count > attrs["passengers_count"]:
            raise serializers.ValidationError(
                {"passengers": f"Provide between 1 and {attrs['passengers_count']} passengers."}
            )
        return attrs


class HotelBookingCreateSerializer(serializers.Serializer):
    offer_id = serializers.CharField(max_length=255)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    rooms_count = serializers.IntegerField(min_value=1, max_value=10, default=1)
    adults_count = serializers.IntegerField(min_value=1, max_value=30, default=1)
    guests = HotelGuestSerializer(many=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out must be after check-in."})
        if not attrs["guests"]:
            raise serializers.ValidationError({"guests": "At least one guest is required."})
        return attrs


class CustomerSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    full_name = serializers.CharField()


class FlightBookingSerializer(serializers.ModelSerializer):
    passengers = PassengerSerializer(many=True, read_only=True)
    customer = CustomerSummarySerializer(source="user", read_only=True)
    route = serializers.CharField(source="route_label", read_only=True)

    class Meta:
        model = FlightBooking
        fields = [
            "id",
            "booking_reference",
            "customer",
            "route",
            "flight_data",
            "trip_type",
            "passengers_count",
            "passengers",
            "total_price",
            "currency",
            "status",
            "payment_method",
            "payment_redirect_url",
            "payment_expiry",
            "eticket_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class HotelBookingSerializer(serializers.ModelSerializer):
    guests = HotelGuestSerializer(many=True, read_only=True)
    customer = CustomerSummarySerializer(source="user", read_only=True)

    class Meta:
        model = HotelBooking
        fields = [
            "id",
            "booking_reference",
            "customer",
            "hotel_id",
            "hotel_name",
            "hotel_address",
            "hotel_data",
            "check_in",
            "check_out",
            "nights_count",
            "rooms_count",
            "adults_count",
            "guests",
            "total_price",
            "currency",
            "status",
            "payment_method",
            "payment_redirect_url",
            "payment_expiry",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CustomerDetailsSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)


class PaymentRequestSerializer(serializers.Serializer):
    customer_details = CustomerDetailsSerializer(required=False)


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.choices)


class ETicketSerializer(serializers.Serializer):
    eticket_url = serializers.URLField(max_length=500)
