"""Domain services for booking workflows.

Prices are never taken from the client: a booking references a cached
search offer and the total is computed from the cached aggregator price
with the booking user's own discount.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from apps.search.cache import FLIGHT, HOTEL, get_offer
from apps.search.services import price_offer_for
from .models import BookingPassenger, BookingStatus, FlightBooking, HotelBooking, HotelBookingGuest

logger = logging.getLogger(__name__)

MAX_PASSENGERS = 9
EDITABLE_STATUSES = (BookingStatus.PENDING, BookingStatus.SUCCESS)


class BookingError(Exception):
    """Raised when a booking request cannot be fulfilled."""


def _money(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _offer_price(offer: dict[str, Any]) -> Decimal:
    price = Decimal(str(offer.get("price") or 0))
    if price <= 0:
        raise BookingError("The selected offer has no valid price.")
    return price


def create_flight_booking(
    user,
    *,
    offer_id: str,
    passengers_count: int,
    passengers: Iterable[dict[str, Any]],
) -> FlightBooking:
    offer = get_offer(FLIGHT, offer_id)
    if offer is None:
        raise BookingError("This flight offer has expired. Please search again.")
    offer = price_offer_for(offer, user)

    passengers = list(passengers)
    if not 1 <= passengers_count <= MAX_PASSENGERS:
        raise BookingError(f"Passengers count must be between 1 and {MAX_PASSENGERS}.")
    if not passengers or len(passengers) > passengers_count:
        raise BookingError(f"Provide between 1 and {passengers_count} passengers.")

    total = _money(_offer_price(offer) * passengers_count)

    with transaction.atomic():
        booking = FlightBooking.objects.create(
            user=user,
            flight_data=offer,
            trip_type=offer.get("trip_type") or FlightBooking.TripType.ONE_WAY,
            passengers_count=passengers_count,
            total_price=total,
            currency=offer.get("currency") or "IDR",
            status=BookingStatus.PENDING,
        )
        BookingPassenger.objects.bulk_create(
            [BookingPassenger(booking=booking, **passenger) for passenger in passengers]
        )

    logger.info(f"Flight booking {booking.booking_reference} created for user {user.pk}, total {total}")
    return booking


def create_hotel_booking(
    user,
    *,
    offer_id: str,
    check_in: date,
    check_out: date,
    rooms_count: int,
    adults_count: int,
    guests: Iterable[dict[str, Any]],
) -> HotelBooking:
    offer = get_offer(HOTEL, offer_id)
    if offer is None:
        raise BookingError("This hotel offer has expired. Please search again.")
    if offer.get("check_in") != check_in.isoformat() or offer.get("check_out") != check_out.isoformat():
        raise BookingError("The dates differ from the searched offer. Please search again.")

    nights = (check_out - check_in).days
    if nights < 1:
        raise BookingError("Check-out must be at least one night after check-in.")
    if rooms_count < 1 or adults_count < 1:
        raise BookingError("At least one room and one adult are required.")
    guests = list(guests)
    if not guests:
        raise BookingError("At least one guest is required.")

    total = _money(_offer_price(offer) * nights * rooms_count)

    with transaction.atomic():
        booking = HotelBooking.objects.create(
            user=user,
            hotel_id=str(offer.get("hotel_id") or offer["id"]),
            hotel_name=offer.get("name") or "",
            hotel_address=offer.get("address") or "",
            hotel_data=offer,
            check_in=check_in,
            check_out=check_out,
            nights_count=nights,
            rooms_count=rooms_count,
            adults_count=adults_count,
            total_price=total,
            currency=offer.get("currency") or "IDR",
            status=BookingStatus.PENDING,
        )
        HotelBookingGuest.objects.bulk_create([HotelBookingGuest(booking=booking, **guest) for guest in guests])

    logger.info(f"Hotel booking {booking.booking_reference} created for user {user.pk}, total {total}")
    return booking


def ensure_manifest_editable(booking: FlightBooking) -> None:
    if booking.status not in EDITABLE_STATUSES:
        raise BookingError("Passengers can only be edited on pending or paid bookings.")


@transaction.atomic
def replace_passengers(booking: FlightBooking, passengers: Iterable[dict[str, Any]]) -> list[BookingPassenger]:
    ensure_manifest_editable(booking)
    passengers = list(passengers)
    if len(passengers) > booking.passengers_count:
        raise BookingError(f"This booking allows at most {booking.passengers_count} passengers.")

    booking.passengers.all().delete()
    return BookingPassenger.objects.bulk_create(
        [BookingPassenger(booking=booking, **passenger) for passenger in passengers]
    )


def delete_passenger(booking: FlightBooking, passenger_id: int) -> None:
    ensure_manifest_editable(booking)
    deleted, _ = booking.passengers.filter(pk=passenger_id).delete()
    if not deleted:
        raise BookingError("Passenger not found on this booking.")


def set_status(booking, status: str) -> None:
    if status not in BookingStatus.values:
        raise BookingError(f"Unknown status: {status}.")
    booking.status = status
    booking.save(update_fields=["status", "updated_at"])
    logger.info(f"Booking {booking.booking_reference} status set to {status}")


def attach_eticket(booking: FlightBooking, url: str) -> None:
    if booking.status != BookingStatus.SUCCESS:
        raise BookingError("E-tickets can only be issued for paid bookings.")
    booking.eticket_url = url
    booking.save(update_fields=["eticket_url", "updated_at"])


def search_bookings(queryset, term: str):
    """Match a booking reference or the customer's name/email."""
    term = (term or "").strip()
    if not term:
        return queryset
    return queryset.filter(
        Q(booking_reference__icontains=term)
        | Q(user__first_name__icontains=term)
        | Q(user__last_name__icontains=term)
        | Q(user__email__icontains=term)
    )


def expire_unpaid_bookings(now=None) -> int:
    """Fail pending bookings past the unpaid window whose payment session is over."""
    now = now or timezone.now()
    cutoff = now - timedelta(hours=settings.BOOKING_UNPAID_TTL_HOURS)
    session_over = Q(payment_expiry__isnull=True) | Q(payment_expiry__lte=now)

    expired = 0
    for model in (FlightBooking, HotelBooking):
        expired += (
            model.objects.filter(status=BookingStatus.PENDING, created_at__lte=cutoff)
            .filter(session_over)
            .update(status=BookingStatus.FAILED, updated_at=now)
        )
    return expired
