"""Short-lived storage of mapped search offers.

Bookings reference an offer by id and are priced from the cached copy, so
the client never supplies a price.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from django.conf import settings
from django.core.cache import cache

FLIGHT = "flight"
HOTEL = "hotel"


def _build_cache_key(kind: str, offer_id: str) -> str:
    prefix = getattr(settings, "SEARCH_OFFER_CACHE_PREFIX", "search:offer")
    return f"{prefix}:{kind}:{offer_id}"


def store_offers(kind: str, offers: list[Dict[str, Any]]) -> list[Dict[str, Any]]:
    if not offers:
        return offers
    timeout = getattr(settings, "SEARCH_OFFER_TTL", 1800)
    cache.set_many({_build_cache_key(kind, offer["id"]): offer for offer in offers}, timeout)
    return offers


def get_offer(kind: str, offer_id: str) -> Optional[Dict[str, Any]]:
    """Cached offer or ``None`` once it has expired."""
    if not offer_id:
        return None
    return cache.get(_build_cache_key(kind, str(offer_id)))


__all__ = [
    "FLIGHT",
    "HOTEL",
    "get_offer",
    "store_offers",
]
