"""Celery tasks that deliver notification emails."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.bookings.models import FlightBooking, HotelBooking
from apps.users.models import CustomUser, PasswordResetToken, RegistrationRequest
from .services import (
    send_eticket_email,
    send_flight_booking_email,
    send_hotel_booking_email,
    send_registration_approved_email,
    send_registration_received_email,
)

logger = logging.getLogger(__name__)


@shared_task(name="notifications.send_registration_received_email")
def send_registration_received_email_task(request_id: int) -> bool:
    try:
        registration = RegistrationRequest.objects.get(pk=request_id)
    except RegistrationRequest.DoesNotExist:
        logger.error(f"Registration request {request_id} not found for acknowledgement email")
        return False
    return send_registration_received_email(registration)


@shared_task(name="notifications.send_registration_approved_email")
def send_registration_approved_email_task(user_id: int, token_id: int) -> bool:
    try:
        user = CustomUser.objects.get(pk=user_id)
        token = PasswordResetToken.objects.get(pk=token_id, user=user)
    except (CustomUser.DoesNotExist, PasswordResetToken.DoesNotExist):
        logger.error(f"User {user_id} or token {token_id} not found for activation email")
        return False
    return send_registration_approved_email(user, token)


@shared_task(name="notifications.send_flight_booking_email")
def send_flight_booking_email_task(booking_id: str) -> bool:
    """Invoice or receipt, depending on the booking status at send time."""
    try:
        booking = FlightBooking.objects.select_related("user").get(pk=booking_id)
    except FlightBooking.DoesNotExist:
        logger.error(f"Flight booking {booking_id} not found for invoice email")
        return False
    return send_flight_booking_email(booking)


@shared_task(name="notifications.send_hotel_booking_email")
def send_hotel_booking_email_task(booking_id: str) -> bool:
    try:
        booking = HotelBooking.objects.select_related("user").get(pk=booking_id)
    except HotelBooking.DoesNotExist:
        logger.error(f"Hotel booking {booking_id} not found for invoice email")
        return False
    return send_hotel_booking_email(booking)


@shared_task(name="notifications.send_eticket_email")
def send_eticket_email_task(booking_id: str) -> bool:
    try:
        booking = FlightBooking.objects.select_related("user").get(pk=booking_id)
    except FlightBooking.DoesNotExist:
        logger.error(f"Flight booking {booking_id} not found for e-ticket email")
        return False
    if not booking.eticket_url:
        logger.warning(f"Booking {booking.booking_reference} has no e-ticket to send")
        return False
    return send_eticket_email(booking)
