"""Mapping of raw aggregator results into storefront offers.

Flight results carry a flat list of segments even for round trips, so the
outbound and return legs are recovered by matching airport codes against
the searched destination.
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable

DEFAULT_BAGGAGE = "20kg included"
UNKNOWN_AIRLINE = "Unknown Airline"
ROUND_TRIP = "round-trip"


def _airport_id(segment: dict[str, Any], side: str) -> str:
    return str((segment.get(side) or {}).get("id") or "").upper()


def split_round_trip_segments(
    segments: list[dict[str, Any]],
    destination: str,
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Split a combined segment list into ``(outbound, return)`` legs.

    The return leg starts at the first segment departing from the searched
    destination. Failing that, the list is split right after the first
    segment (other than the last) that arrives at the destination. When no
    split point exists, or the split would leave the outbound leg empty,
    every segment is outbound.
    """
    target = (destination or "").upper()
    outbound: list[dict[str, Any]] = []
    inbound: list[dict[str, Any]] = []

    found_return = False
    for segment in segments:
        if not found_return and _airport_id(segment, "departure_airport") == target:
            found_return = True
        if found_return:
            inbound.append(segment)
        else:
            outbound.append(segment)

    if not inbound and len(segments) > 1:
        split_at = None
        for index, segment in enumerate(segments[:-1]):
            if _airport_id(segment, "arrival_airport") == target:
                split_at = index + 1
                break
        if split_at is None:
            return list(segments), []
        outbound, inbound = list(segments[:split_at]), list(segments[split_at:])

    if not outbound:
        return list(segments), []
    return outbound, inbound


def format_duration(total_minutes: Any) -> str:
    try:
        minutes = int(total_minutes or 0)
    except (TypeError, ValueError):
        minutes = 0
    return f"{minutes // 60}h {minutes % 60}m"


def airline_code_from_flight_number(flight_number: str | None) -> str:
    parts = (flight_number or "").split()
    return parts[0].upper() if parts else ""


def _split_datetime(point: dict[str, Any]) -> tuple[str, str]:
    """Return ``(date, time)`` from separate fields or a combined string."""
    date = point.get("date") or ""
    time = point.get("time") or ""
    if not date and " " in time:
        date, time = time.split(" ", 1)
    return date, time


def _endpoint(point: dict[str, Any] | None) -> dict[str, Any]:
    point = point or {}
    date, time = _split_datetime(point)
    name = point.get("name") or ""
    return {
        "airport": {
            "code": point.get("id") or "",
            "name": name,
            "city": point.get("city") or name,
        },
        "date": date,
        "time": time,
    }


def map_leg(segments: list[dict[str, Any]], total_minutes: Any = None) -> dict[str, Any]:
    """Summary of one leg from its first and last segment."""
    first = segments[0] if segments else {}
    last = segments[-1] if segments else {}
    if total_minutes is None:
        total_minutes = sum(int(s.get("duration") or 0) for s in segments)
    flight_number = first.get("flight_number") or "N/A"
    return {
        "flight_number": flight_number,
        "airline": first.get("airline") or UNKNOWN_AIRLINE,
        "airline_code": airline_code_from_flight_number(first.get("flight_number")),
        "departure": _endpoint(first.get("departure_airport")),
        "arrival": _endpoint(last.get("arrival_airport")),
        "duration": format_duration(total_minutes),
        "stops": max(len(segments) - 1, 0),
        "aircraft": first.get("airplane") or "N/A",
        "extensions": list(first.get("extensions") or []),
    }


def map_flight_offer(
    offer: dict[str, Any],
    *,
    destination: str,
    trip_type: str,
    airlines: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Map one aggregator offer; pricing fields are filled in by the caller.

    ``airlines`` maps managed airline codes to objects with ``name`` and
    ``baggage_info``; a managed name overrides the aggregator's.
    """
    airlines = airlines or {}
    segments = list(offer.get("flights") or [])

    if trip_type == ROUND_TRIP and len(segments) > 1:
        outbound, inbound = split_round_trip_segments(segments, destination)
    else:
        outbound, inbound = segments, []

    mapped = map_leg(outbound, offer.get("total_duration") or 0)
    managed = airlines.get(mapped["airline_code"])
    if managed is not None:
        mapped["airline"] = managed.name or mapped["airline"]

    mapped.update(
        {
            "id": uuid.uuid4().hex,
            "price": offer.get("price") or 0,
            "cabin_class": str(offer.get("type") or "Economy").lower(),
            "baggage": (managed.baggage_info if managed is not None else "") or DEFAULT_BAGGAGE,
            "is_round_trip": bool(inbound),
            "return_flight": map_leg(inbound) if inbound else None,
            "booking_token": offer.get("booking_token"),
        }
    )
    return mapped


def combine_offers(data: dict[str, Any]) -> Iterable[dict[str, Any]]:
    yield from data.get("best_flights") or []
    yield from data.get("other_flights") or []


def map_hotel_property(prop: dict[str, Any], currency: str) -> dict[str, Any]:
    """``id`` is unique per search; ``hotel_id`` is the aggregator's property id."""
    images = list(prop.get("images") or [])
    city = prop.get("city")
    return {
        "id": uuid.uuid4().hex,
        "hotel_id": prop.get("property_token") or prop.get("data_id") or "",
        "name": prop.get("name") or "",
        "description": prop.get("description") or "",
        "price": (prop.get("price_per_night") or {}).get("extracted_price") or 0,
        "currency": currency,
        "rating": prop.get("rating"),
        "reviews": prop.get("reviews"),
        "thumbnail": (images[0].get("thumbnail") if images else None) or prop.get("thumbnail"),
        "link": prop.get("link"),
        "address": f"{city}, {prop.get('country') or ''}" if city else "",
        "hotel_class": prop.get("extracted_hotel_class") or 0,
        "amenities": list(prop.get("amenities") or []),
        "check_in_time": prop.get("check_in_time"),
        "check_out_time": prop.get("check_out_time"),
        "images": images,
        "nearby_places": list(prop.get("nearby_places") or []),
        "reviews_breakdown": list(prop.get("reviews_breakdown") or []),
    }
