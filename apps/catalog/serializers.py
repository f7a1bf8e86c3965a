"""Serializers for catalog reference data."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Airport, HotelChain, ManagedAirline


def _ensure_unique(model, field: str, value: str, instance, message: str) -> None:
    qs = model.objects.filter(**{f"{field}__iexact": value})
    if instance is not None:
        qs = qs.exclude(pk=instance.pk)
    if qs.exists():
        raise serializers.ValidationError(message)


class AirportSerializer(serializers.ModelSerializer):
    class Meta:
        model = Airport
        fields = ["id", "iata_code", "name", "city_name", "country_name", "is_active"]
        extra_kwargs = {"iata_code": {"validators": []}}

    def validate_iata_code(self, value: str) -> str:
        value = value.strip().upper()
        _ensure_unique(Airport, "iata_code", value, self.instance, f"Airport {value} already exists.")
        return value


class ManagedAirlineSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=120, required=False, allow_blank=True)

    class Meta:
        model = ManagedAirline
        fields = ["id", "code", "name", "baggage_info", "is_active"]
        extra_kwargs = {"code": {"validators": []}}

    def validate_code(self, value: str) -> str:
        value = value.strip().upper()
        _ensure_unique(ManagedAirline, "code", value, self.instance, f"Airline {value} is already managed.")
        return value


class HotelChainSerializer(serializers.ModelSerializer):
    class Meta:
        model = HotelChain
        fields = ["id", "name", "brand_id", "is_active"]
        extra_kwargs = {
            "name": {"validators": []},
            "brand_id": {"validators": []},
        }

    def validate_name(self, value: str) -> str:
        value = value.strip()
        _ensure_unique(HotelChain, "name", value, self.instance, f"Hotel chain '{value}' already exists.")
        return value

    def validate_brand_id(self, value: str) -> str:
        value = value.strip()
        _ensure_unique(
            HotelChain,
            "brand_id",
            value,
            self.instance,
            f"Brand id {value} is already assigned to another chain.",
        )
        return value
