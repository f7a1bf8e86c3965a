"""Search orchestration: query building, filtering, pricing and caching."""

from __future__ import annotations

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Any

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.catalog.models import HotelChain, ManagedAirline
from apps.storefront.pricing import (
    apply_discount,
    convert_to_idr,
    discount_percent_for,
    price_limit,
    to_decimal,
)
from . import client
from .cache import FLIGHT, HOTEL, store_offers
from .mapping import ROUND_TRIP, combine_offers, map_flight_offer, map_hotel_property

logger = logging.getLogger(__name__)


def _managed_airlines() -> list[ManagedAirline]:
    return list(ManagedAirline.objects.active().order_by("code"))


def _airline_payload(airline: ManagedAirline) -> dict[str, Any]:
    return {"code": airline.code, "name": airline.name, "baggage_info": airline.baggage_info}


def build_flight_query(params: dict[str, Any], airlines: list[ManagedAirline], limit: Decimal | None) -> dict[str, Any]:
    """Aggregator query for a validated search."""
    query: dict[str, Any] = {
        "departure_id": params["origin"],
        "arrival_id": params["destination"],
        "outbound_date": params["date"].isoformat(),
        "adults": str(params.get("adults") or 1),
    }
    if params.get("trip_type") == ROUND_TRIP and params.get("return_date"):
        query["flight_type"] = "round_trip"
        query["return_date"] = params["return_date"].isoformat()
    else:
        query["flight_type"] = "one_way"

    if airlines:
        query["included_airlines"] = ",".join(airline.code for airline in airlines)
    if limit is not None:
        query["max_price"] = str(int(limit))
    return query


def price_offer(offer: dict[str, Any], percent: Decimal) -> dict[str, Any]:
    """Apply the role discount, then convert EUR results to IDR.

    The aggregator price is kept as ``base_price`` so a cached offer can be
    priced again for whoever books it.
    """
    currency = settings.SEARCH_CURRENCY.upper()
    raw = to_decimal(offer.get("base_price", offer.get("price")), Decimal("0"))
    discounted = apply_discount(raw, percent)
    original = raw
    if currency == "EUR":
        discounted = convert_to_idr(discounted, currency)
        original = convert_to_idr(raw, currency)
        currency = "IDR"
    offer.update(
        {
            "base_price": float(raw),
            "price": float(discounted),
            "original_price": float(original),
            "discount_percent": float(percent),
            "currency": currency,
        }
    )
    return offer


def price_offer_for(offer: dict[str, Any], user) -> dict[str, Any]:
    """Copy of a cached flight offer priced with ``user``'s discount."""
    return price_offer(dict(offer), discount_percent_for(user))


def search_flights(params: dict[str, Any], user) -> dict[str, Any]:
    airlines = _managed_airlines()
    trip_type = params.get("trip_type") or "one-way"
    limit = price_limit(trip_type)

    data = client.search_flights(build_flight_query(params, airlines, limit))

    by_code = {airline.code: airline for airline in airlines}
    percent = discount_percent_for(user)
    offers = []
    for raw in combine_offers(data):
        price = to_decimal(raw.get("price"), Decimal("0"))
        if price <= 0 or (limit is not None and price > limit):
            continue
        mapped = map_flight_offer(
            raw,
            destination=params["destination"],
            trip_type=trip_type,
            airlines=by_code,
        )
        mapped["trip_type"] = trip_type
        offers.append(price_offer(mapped, percent))

    store_offers(FLIGHT, offers)
    logger.info(f"Flight search returned {len(offers)} offers for {params['origin']} -> {params['destination']}")
    return {
        "offers": offers,
        "managed_airlines": [_airline_payload(airline) for airline in airlines],
    }


def featured_flights(user) -> dict[str, Any]:
    """One-way offers on the configured promotional route."""
    route = settings.FEATURED_ROUTE
    params = {
        "origin": route["origin"],
        "destination": route["destination"],
        "date": timezone.localdate() + timedelta(days=route["days_ahead"]),
        "trip_type": "one-way",
        "adults": 1,
    }
    result = search_flights(params, user)
    result["route"] = {
        "origin": params["origin"],
        "destination": params["destination"],
        "date": params["date"].isoformat(),
    }
    return result


def lookup_locations(keyword: str) -> dict[str, Any]:
    data = client.search_locations(keyword)
    return {"locations": data.get("locations") or []}


def search_hotels(params: dict[str, Any]) -> dict[str, Any]:
    query: dict[str, Any] = {
        "q": params["location"],
        "check_in_date": params["check_in"].isoformat(),
        "check_out_date": params["check_out"].isoformat(),
        "adults": str(params.get("adults") or 1),
    }
    if params.get("children"):
        query["children"] = str(params["children"])
    if params.get("rooms"):
        query["rooms"] = str(params["rooms"])
    if params.get("hotel_chains"):
        query["brands"] = ",".join(params["hotel_chains"])

    data = client.search_hotels(query)
    currency = settings.SEARCH_CURRENCY.upper()
    hotels = []
    for prop in data.get("properties") or []:
        hotel = map_hotel_property(prop, currency)
        if currency == "EUR":
            hotel["price"] = float(convert_to_idr(hotel["price"], currency))
            hotel["currency"] = "IDR"
        hotel["check_in"] = params["check_in"].isoformat()
        hotel["check_out"] = params["check_out"].isoformat()
        hotels.append(hotel)
    store_offers(HOTEL, hotels)
    return {
        "hotels": hotels,
        "nights": (params["check_out"] - params["check_in"]).days,
        "brands": data.get("brands") or [],
    }


def active_brand_ids() -> set[str]:
    return set(HotelChain.objects.active().values_list("brand_id", flat=True))


def get_quota() -> dict[str, Any]:
    return client.get_quota()
