"""Pricing rules: role discounts, currency conversion and search price caps.

All amounts are handled as ``Decimal`` and rounded half-up to two places.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from .models import AppSetting

TWO_PLACES = Decimal("0.01")

DEFAULTS: dict[str, dict[str, Any]] = {
    AppSetting.Key.DISCOUNTS: {"agent": 0, "user": 0},
    AppSetting.Key.CURRENCY: {"eur_to_idr": 1},
    AppSetting.Key.FLIGHT_SETTINGS: {},
}


def to_decimal(value: Any, default: Decimal | None = None) -> Decimal | None:
    if value is None or value == "":
        return default
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def get_setting(key: str) -> dict[str, Any]:
    """Stored value merged over the defaults for ``key``."""
    value = dict(DEFAULTS.get(key, {}))
    stored = AppSetting.objects.filter(key=key).values_list("value", flat=True).first()
    if isinstance(stored, dict):
        value.update(stored)
    return value


def discount_percent_for(user) -> Decimal:
    """Discount percentage for the caller's role; anonymous and admins get none."""
    if user is None or not getattr(user, "is_authenticated", False):
        return Decimal("0")
    if hasattr(user, "is_admin") and user.is_admin():
        return Decimal("0")

    discounts = get_setting(AppSetting.Key.DISCOUNTS)
    key = "agent" if user.is_agent() else "user"
    percent = to_decimal(discounts.get(key), Decimal("0"))
    return min(max(percent, Decimal("0")), Decimal("100"))


def apply_discount(price: Decimal | int | float | str, percent: Decimal | int | float | str) -> Decimal:
    price = to_decimal(price, Decimal("0"))
    percent = to_decimal(percent, Decimal("0"))
    discounted = price * (Decimal("1") - percent / Decimal("100"))
    return discounted.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def convert_to_idr(amount: Decimal | int | float | str, currency: str) -> Decimal:
    """Convert EUR amounts with the configured rate; IDR passes through."""
    amount = to_decimal(amount, Decimal("0"))
    if (currency or "").upper() == "EUR":
        rate = to_decimal(get_setting(AppSetting.Key.CURRENCY).get("eur_to_idr"), Decimal("1"))
        amount = amount * rate
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def price_limit(trip_type: str) -> Decimal | None:
    """Search price cap for the trip type, ``None`` when unlimited."""
    caps = get_setting(AppSetting.Key.FLIGHT_SETTINGS)
    field = "max_price_round_trip" if trip_type == "round-trip" else "max_price_one_way"
    limit = to_decimal(caps.get(field))
    if limit is None or limit <= 0:
        return None
    return limit
