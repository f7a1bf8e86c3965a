"""
SearchApi aggregator client.

Thin wrapper over the aggregator's HTTP API used for flight, airport and
hotel lookups. Every call sends the account key as ``api_key`` and returns
the decoded JSON body; transport failures and error payloads are raised as
``SearchApiError``.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)


class SearchApiError(Exception):
    """Raised when the aggregator cannot be reached or reports an error."""


def _get(path: str, params: dict[str, Any]) -> dict[str, Any]:
    api_key = settings.SEARCHAPI_API_KEY
    if not api_key:
        raise SearchApiError("Search provider API key is not configured.")

    query = {key: value for key, value in params.items() if value not in (None, "")}
    query["api_key"] = api_key

    try:
        response = requests.get(
            f"{settings.SEARCHAPI_BASE_URL}{path}",
            params=query,
            timeout=settings.SEARCHAPI_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error while calling search provider ({path}): {e}")
        raise SearchApiError(f"Search provider is unavailable: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"Search provider returned a non-JSON body ({path}), HTTP {response.status_code}")
        raise SearchApiError("Search provider returned an invalid response.") from e

    if not isinstance(data, dict):
        raise SearchApiError("Search provider returned an invalid response.")

    if response.status_code >= 400 or data.get("error"):
        message = data.get("error") or f"HTTP {response.status_code}"
        logger.error(f"Search provider error ({path}): {message}")
        raise SearchApiError(f"Search provider error: {message}")

    return data


def search_flights(params: dict[str, Any]) -> dict[str, Any]:
    """Google Flights engine search; ``params`` are aggregator query fields."""
    logger.info(
        f"Flight search {params.get('departure_id')} -> {params.get('arrival_id')} "
        f"on {params.get('outbound_date')} ({params.get('flight_type')})"
    )
    return _get("search", {"engine": "google_flights", "currency": settings.SEARCH_CURRENCY, **params})


def search_locations(keyword: str) -> dict[str, Any]:
    """Airport and city autocomplete."""
    return _get("search", {"engine": "google_flights_location", "q": keyword})


def search_hotels(params: dict[str, Any]) -> dict[str, Any]:
    logger.info(
        f"Hotel search '{params.get('q')}' {params.get('check_in_date')} - {params.get('check_out_date')}"
    )
    return _get(
        "search",
        {
            "engine": "google_hotels",
            "property_type": "hotel",
            "currency": settings.SEARCH_CURRENCY,
            **params,
        },
    )


def get_quota() -> dict[str, Any]:
    """Account usage for the configured key."""
    return _get("me", {})
