"""Per-key validation of application settings."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from rest_framework import serializers  # type: ignore

from .models import AppSetting


class DiscountsSerializer(serializers.Serializer):
    agent = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100"))
    user = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100"))


class CurrencySerializer(serializers.Serializer):
    eur_to_idr = serializers.DecimalField(max_digits=14, decimal_places=4)

    def validate_eur_to_idr(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError("Exchange rate must be greater than zero.")
        return value


class FlightSettingsSerializer(serializers.Serializer):
    max_price_one_way = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True
    )
    max_price_round_trip = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        for field, value in attrs.items():
            if value is not None and value <= 0:
                raise serializers.ValidationError({field: "Price cap must be greater than zero."})
        return attrs


VALUE_SERIALIZERS: dict[str, type[serializers.Serializer]] = {
    AppSetting.Key.DISCOUNTS: DiscountsSerializer,
    AppSetting.Key.CURRENCY: CurrencySerializer,
    AppSetting.Key.FLIGHT_SETTINGS: FlightSettingsSerializer,
}


def to_json_value(validated: dict[str, Any]) -> dict[str, Any]:
    """Decimals become floats so the value fits a JSONField."""
    return {key: (float(value) if isinstance(value, Decimal) else value) for key, value in validated.items()}

