"""Payment workflows on top of the Midtrans adapter."""

from __future__ import annotations

import logging
import uuid
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import BookingStatus, FlightBooking, HotelBooking
from apps.notifications.tasks import send_flight_booking_email_task, send_hotel_booking_email_task
from . import midtrans
from .models import PaymentNotification

logger = logging.getLogger(__name__)

HOTEL_ORDER_PREFIX = "HOTEL-"
ITEM_NAME_MAX_LENGTH = 50


class PaymentError(Exception):
    """Raised when a payment session cannot be created for a booking."""


class PaymentForbidden(PaymentError):
    """Raised when someone other than the booking owner tries to pay."""


def _now_ms() -> int:
    return int(timezone.now().timestamp() * 1000)


def build_order_id(booking) -> str:
    if isinstance(booking, HotelBooking):
        return f"{HOTEL_ORDER_PREFIX}{booking.booking_reference}-{_now_ms()}"
    return f"{booking.pk}-{_now_ms()}"


def build_item(booking, amount: int) -> dict[str, Any]:
    if isinstance(booking, HotelBooking):
        item_id = booking.hotel_id
        name = booking.hotel_name or f"Hotel booking {booking.booking_reference}"
    else:
        item_id = booking.flight_data.get("id") or str(booking.pk)
        origin = booking.route_from.get("city") or booking.route_from.get("code") or ""
        destination = booking.route_to.get("city") or booking.route_to.get("code") or ""
        name = f"Flight: {origin} - {destination}"
    return {
        "id": str(item_id)[:ITEM_NAME_MAX_LENGTH],
        "price": amount,
        "quantity": 1,
        "name": name[:ITEM_NAME_MAX_LENGTH],
    }


def build_customer_details(user, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    details = {
        "first_name": user.first_name or user.username or "",
        "last_name": user.last_name or "",
        "email": user.email,
        "phone": user.phone or "",
    }
    for key, value in (overrides or {}).items():
        if value:
            details[key] = value
    return details


def create_payment_session(booking, user, customer_details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Start (or reuse) a hosted checkout session for a pending booking."""
    if booking.user_id != user.pk:
        raise PaymentForbidden("You do not have permission to pay for this booking.")
    if booking.status != BookingStatus.PENDING:
        raise PaymentError(f"Booking status is {booking.status}, cannot create payment session.")

    if booking.has_active_payment_session():
        return {
            "token": booking.midtrans_token,
            "redirect_url": booking.payment_redirect_url,
            "order_id": booking.payment_order_id,
            "expires_at": booking.payment_expiry,
            "reused": True,
        }

    amount = int(booking.total_price.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    order_id = build_order_id(booking)
    payload = {
        "transaction_details": {"order_id": order_id, "gross_amount": amount},
        "item_details": [build_item(booking, amount)],
        "customer_details": build_customer_details(user, customer_details),
        "expiry": {"unit": "minutes", "duration": settings.MIDTRANS_PAYMENT_EXPIRY_MINUTES},
    }

    session = midtrans.create_snap_transaction(payload)

    booking.midtrans_token = session["token"]
    booking.payment_redirect_url = session.get("redirect_url", "")
    booking.payment_expiry = timezone.now() + timedelta(minutes=settings.MIDTRANS_PAYMENT_EXPIRY_MINUTES)
    booking.payment_order_id = order_id
    booking.save(
        update_fields=[
            "midtrans_token",
            "payment_redirect_url",
            "payment_expiry",
            "payment_order_id",
            "updated_at",
        ]
    )
    return {
        "token": booking.midtrans_token,
        "redirect_url": booking.payment_redirect_url,
        "order_id": order_id,
        "expires_at": booking.payment_expiry,
        "reused": False,
    }


def resolve_booking(order_id: str):
    """Find the booking an order id belongs to, or ``None``."""
    if not order_id:
        return None
    for model in (FlightBooking, HotelBooking):
        booking = model.objects.filter(payment_order_id=order_id).first()
        if booking is not None:
            return booking

    if order_id.startswith(HOTEL_ORDER_PREFIX):
        reference = order_id[len(HOTEL_ORDER_PREFIX):].rsplit("-", 1)[0]
        return HotelBooking.objects.filter(booking_reference=reference).first()

    try:
        booking_id = uuid.UUID("-".join(order_id.split("-")[:5]))
    except ValueError:
        return None
    return FlightBooking.objects.filter(pk=booking_id).first()


def _log_notification(payload: dict[str, Any], outcome: str, booking=None) -> None:
    PaymentNotification.objects.create(
        order_id=str(payload.get("order_id") or "")[:100],
        transaction_status=str(payload.get("transaction_status") or "")[:32],
        fraud_status=str(payload.get("fraud_status") or "")[:32],
        payment_type=str(payload.get("payment_type") or "")[:32],
        gross_amount=str(payload.get("gross_amount") or "")[:32],
        outcome=outcome,
        booking_reference=booking.booking_reference if booking is not None else "",
        resulting_status=booking.status if booking is not None else "",
        payload=payload,
    )


def handle_notification(payload: dict[str, Any]) -> dict[str, Any]:
    """Apply a gateway notification and return the acknowledgement body."""
    order_id = str(payload.get("order_id") or "")

    if not midtrans.verify_signature(payload):
        logger.warning(f"Midtrans signature mismatch for order {order_id}, notification ignored")
        _log_notification(payload, PaymentNotification.Outcome.INVALID_SIGNATURE)
        return {"status": "ignored", "reason": "Invalid signature"}

    booking = resolve_booking(order_id)
    if booking is None:
        logger.info(f"Midtrans notification for unknown order {order_id}")
        _log_notification(payload, PaymentNotification.Outcome.UNKNOWN_ORDER)
        return {"status": "ok", "message": "Received (order not found)"}

    new_status = midtrans.resolve_transaction_status(
        payload.get("transaction_status") or "",
        payload.get("fraud_status") or "",
    )

    with transaction.atomic():
        booking = type(booking).objects.select_for_update().get(pk=booking.pk)
        previous = booking.status
        if previous == BookingStatus.SUCCESS and new_status == BookingStatus.PENDING:
            new_status = previous
        fresh_success = new_status == BookingStatus.SUCCESS and previous != BookingStatus.SUCCESS

        update_fields = ["status", "updated_at"]
        booking.status = new_status
        if fresh_success:
            booking.payment_method = midtrans.describe_payment_method(payload)
            update_fields.append("payment_method")
        booking.save(update_fields=update_fields)
        _log_notification(payload, PaymentNotification.Outcome.PROCESSED, booking)

    logger.info(f"Booking {booking.booking_reference} status {previous} -> {booking.status} (order {order_id})")

    if fresh_success:
        if isinstance(booking, HotelBooking):
            send_hotel_booking_email_task.delay(str(booking.pk))
        else:
            send_flight_booking_email_task.delay(str(booking.pk))

    return {"status": "ok", "booking_status": booking.status}
