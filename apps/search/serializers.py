"""Validation of search parameters."""

from __future__ import annotations

from typing import Any

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from .services import active_brand_ids


class FlightSearchSerializer(serializers.Serializer):
    origin = serializers.RegexField(r"^[A-Za-z]{3}$", error_messages={"invalid": "Use a 3-letter airport code."})
    destination = serializers.RegexField(
        r"^[A-Za-z]{3}$", error_messages={"invalid": "Use a 3-letter airport code."}
    )
    date = serializers.DateField()
    return_date = serializers.DateField(required=False, allow_null=True)
    trip_type = serializers.ChoiceField(choices=["one-way", "round-trip"], default="one-way")
    adults = serializers.IntegerField(min_value=1, max_value=9, default=1)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        attrs["origin"] = attrs["origin"].upper()
        attrs["destination"] = attrs["destination"].upper()
        if attrs["origin"] == attrs["destination"]:
            raise serializers.ValidationError({"destination": "Destination must differ from origin."})
        if attrs["date"] < timezone.localdate():
            raise serializers.ValidationError({"date": "Departure date cannot be in the past."})

        if attrs["trip_type"] == "round-trip":
            return_date = attrs.get("return_date")
            if return_date is None:
                raise serializers.ValidationError({"return_date": "Return date is required for round trips."})
            if return_date < attrs["date"]:
                raise serializers.ValidationError({"return_date": "Return date cannot precede departure."})
        else:
            attrs["return_date"] = None
        return attrs


class LocationLookupSerializer(serializers.Serializer):
    keyword = serializers.CharField(min_length=2, max_length=100, trim_whitespace=True)


class HotelSearchSerializer(serializers.Serializer):
    location = serializers.CharField(max_length=200)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    adults = serializers.IntegerField(min_value=1, max_value=30, default=1)
    children = serializers.IntegerField(min_value=0, max_value=20, default=0)
    rooms = serializers.IntegerField(min_value=1, max_value=10, default=1)
    hotel_chains = serializers.ListField(child=serializers.CharField(max_length=32), required=False, default=list)

    def to_internal_value(self, data):  # type: ignore
        # Query strings carry chains as repeated keys or a comma-separated value.
        if hasattr(data, "getlist"):
            chains = [part for value in data.getlist("hotel_chains") for part in value.split(",") if part]
            data = {key: data.get(key) for key in data.keys()}
            data["hotel_chains"] = chains
        return super().to_internal_value(data)

    def validate_hotel_chains(self, value: list[str]) -> list[str]:
        if not value:
            return []
        unknown = sorted(set(value) - active_brand_ids())
        if unknown:
            raise serializers.ValidationError(f"Unknown or inactive hotel chains: {', '.join(unknown)}.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out must be after check-in."})
        if attrs["check_in"] < timezone.localdate():
            raise serializers.ValidationError({"check_in": "Check-in date cannot be in the past."})
        return attrs
