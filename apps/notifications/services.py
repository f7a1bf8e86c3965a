"""Email notifications for accounts and bookings."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

from apps.users.services import build_activation_link

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import FlightBooking, HotelBooking
    from apps.users.models import CustomUser, PasswordResetToken, RegistrationRequest

logger = logging.getLogger(__name__)

BANK_METHOD_MARKERS = ("Virtual Account", "Bank", "Bill Payment")


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send one email through Django's mail backend.

    Args:
        recipient_email: recipient address
        subject: subject line
        context: values used to build the message; ``message`` is the plain
            text body when no HTML is given
        html_message: HTML body (optional)

    Returns:
        bool: True when the backend accepted the message
    """
    if not recipient_email:
        logger.warning(f"Email '{subject}' skipped: no recipient")
        return False

    try:
        if html_message:
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def format_money(amount: Decimal | float | int, currency: str) -> str:
    if currency == "IDR":
        return f"{currency} {Decimal(str(amount)):,.0f}"
    return f"{currency} {Decimal(str(amount)):,.2f}"


def is_bank_method(payment_method: str) -> bool:
    """Unpaid bookings without a method yet are treated as bank transfers."""
    if not payment_method:
        return True
    return any(marker in payment_method for marker in BANK_METHOD_MARKERS)


def _payment_instructions(payment_method: str) -> str:
    if is_bank_method(payment_method):
        return f"""
        <p><strong>Payment instructions:</strong> transfer to {escape(settings.BANK_TRANSFER_INSTRUCTIONS)}</p>
        """
    return """
        <p><strong>Payment instructions:</strong> scan the QRIS code shown at checkout to complete your payment.</p>
        """


# ============================================================================
# ACCOUNT EMAILS
# ============================================================================

def send_password_reset_code_email(user: "CustomUser", code: str) -> bool:
    """Deliver a one-time password reset code."""
    subject = "[SkyBook] Your password reset code"
    context = {
        "name": user.first_name or user.email,
        "code": code,
        "ttl": settings.PASSWORD_RESET_TTL_MINUTES,
    }

    html_message = f"""
    <html>
    <body>
        <h2>Hello, {escape(context['name'])}!</h2>
        <p>Use this code to reset your SkyBook password:</p>
        <p style="font-size: 24px; letter-spacing: 4px;"><strong>{context['code']}</strong></p>
        <p>The code is valid for {context['ttl']} minutes.</p>
        <p>If you did not request a reset, you can ignore this email.</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=user.email,
        subject=subject,
        context=context,
        html_message=html_message,
    )


def send_registration_received_email(registration: "RegistrationRequest") -> bool:
    """Acknowledge a registration request waiting for admin review."""
    subject = "[SkyBook] Registration request received"
    context = {"name": registration.first_name}

    html_message = f"""
    <html>
    <body>
        <h2>Hello, {escape(context['name'])}!</h2>
        <p>We have received your registration request.</p>
        <p>An administrator will review it shortly. You will get another email once your account is activated.</p>
        <p>Thank you for choosing SkyBook!</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=registration.email,
        subject=subject,
        context=context,
        html_message=html_message,
    )


def send_registration_approved_email(user: "CustomUser", token: "PasswordResetToken") -> bool:
    """Send the activation link created for an approved registration."""
    subject = "[SkyBook] Your account has been approved"
    link = build_activation_link(user, token)
    context = {
        "name": user.first_name or user.email,
        "role": user.get_role_display(),
        "link": link,
    }

    html_message = f"""
    <html>
    <body>
        <h2>Congratulations, {escape(context['name'])}!</h2>
        <p>Your registration has been approved with the role <strong>{context['role']}</strong>.</p>
        <p>Open the link below to activate your account and choose a password:</p>
        <p><a href="{escape(link)}">Activate my account</a></p>
        <p style="font-size: 11px; color: #888;">{escape(link)}</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=user.email,
        subject=subject,
        context=context,
        html_message=html_message,
    )


# ============================================================================
# BOOKING EMAILS
# ============================================================================

def booking_subject(booking: "FlightBooking | HotelBooking") -> str:
    if booking.is_paid:
        return f"[RECEIPT] Payment receipt - {booking.booking_reference}"
    return f"[INVOICE] Payment due - {booking.booking_reference}"


def send_flight_booking_email(booking: "FlightBooking") -> bool:
    """Invoice while the booking is unpaid, receipt once it is paid."""
    subject = booking_subject(booking)
    checkout_url = f"{settings.APP_URL}/booking/checkout/{booking.pk}"
    passengers = list(booking.passengers.all())
    context = {
        "name": booking.user.first_name or booking.user.email,
        "reference": booking.booking_reference,
        "airline": booking.airline or "-",
        "route": booking.route_label,
        "trip_type": booking.get_trip_type_display(),
        "passengers": [passenger.full_name for passenger in passengers],
        "total": format_money(booking.total_price, booking.currency),
        "payment_method": booking.payment_method or "-",
        "checkout_url": checkout_url,
    }

    passenger_items = "".join(f"<li>{escape(name)}</li>" for name in context["passengers"])
    instructions = "" if booking.is_paid else _payment_instructions(booking.payment_method)
    heading = "Payment receipt" if booking.is_paid else "Payment due"

    html_message = f"""
    <html>
    <body>
        <h2>Hello, {escape(context['name'])}!</h2>
        <h3>{heading}: {context['reference']}</h3>
        <ul>
            <li><strong>Airline:</strong> {escape(context['airline'])}</li>
            <li><strong>Route:</strong> {escape(context['route'])} ({context['trip_type']})</li>
            <li><strong>Total:</strong> {context['total']}</li>
            <li><strong>Payment method:</strong> {escape(context['payment_method'])}</li>
        </ul>

        <h3>Passengers ({len(passengers)}):</h3>
        <ul>{passenger_items}</ul>
        {instructions}
        <p><a href="{checkout_url}">View your booking</a></p>

        <p>Regards,<br>SkyBook</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=booking.user.email,
        subject=subject,
        context=context,
        html_message=html_message,
    )


def send_hotel_booking_email(booking: "HotelBooking") -> bool:
    """Hotel invoice or receipt."""
    subject = booking_subject(booking)
    checkout_url = f"{settings.APP_URL}/booking/hotel-checkout/{booking.pk}"
    guests = [f"{guest.title} {guest.first_name} {guest.last_name}" for guest in booking.guests.all()]
    context = {
        "name": booking.user.first_name or booking.user.email,
        "reference": booking.booking_reference,
        "hotel": booking.hotel_name,
        "address": booking.hotel_address or "-",
        "check_in": booking.check_in.strftime("%d.%m.%Y"),
        "check_out": booking.check_out.strftime("%d.%m.%Y"),
        "nights": booking.nights_count,
        "rooms": booking.rooms_count,
        "guests": guests,
        "total": format_money(booking.total_price, booking.currency),
        "payment_method": booking.payment_method or "-",
        "checkout_url": checkout_url,
    }

    guest_items = "".join(f"<li>{escape(name)}</li>" for name in guests)
    instructions = "" if booking.is_paid else _payment_instructions(booking.payment_method)
    heading = "Payment receipt" if booking.is_paid else "Payment due"

    html_message = f"""
    <html>
    <body>
        <h2>Hello, {escape(context['name'])}!</h2>
        <h3>{heading}: {context['reference']}</h3>
        <ul>
            <li><strong>Hotel:</strong> {escape(context['hotel'])}</li>
            <li><strong>Address:</strong> {escape(context['address'])}</li>
            <li><strong>Check-in:</strong> {context['check_in']}</li>
            <li><strong>Check-out:</strong> {context['check_out']}</li>
            <li><strong>Nights:</strong> {context['nights']}, <strong>rooms:</strong> {context['rooms']}</li>
            <li><strong>Total:</strong> {context['total']}</li>
            <li><strong>Payment method:</strong> {escape(context['payment_method'])}</li>
        </ul>

        <h3>Guests:</h3>
        <ul>{guest_items}</ul>
        {instructions}
        <p><a href="{checkout_url}">View your booking</a></p>

        <p>Regards,<br>SkyBook</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=booking.user.email,
        subject=subject,
        context=context,
        html_message=html_message,
    )


def send_eticket_email(booking: "FlightBooking") -> bool:
    """Tell the customer their e-ticket is ready to download."""
    subject = f"[E-TICKET] Your e-ticket is ready - {booking.booking_reference}"
    departure = booking.flight_data.get("departure") or {}
    context = {
        "name": booking.user.first_name or booking.user.email,
        "reference": booking.booking_reference,
        "route": booking.route_label,
        "departure_date": departure.get("date") or "-",
        "departure_time": departure.get("time") or "-",
        "eticket_url": booking.eticket_url,
    }

    html_message = f"""
    <html>
    <body>
        <h2>Hello, {escape(context['name'])}!</h2>
        <p>The e-ticket for booking <strong>{context['reference']}</strong> has been issued.</p>
        <ul>
            <li><strong>Route:</strong> {escape(context['route'])}</li>
            <li><strong>Departure:</strong> {escape(context['departure_date'])} {escape(context['departure_time'])}</li>
        </ul>
        <p><a href="{escape(context['eticket_url'])}">Download e-ticket</a></p>
        <p>Have a pleasant flight!<br>SkyBook</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=booking.user.email,
        subject=subject,
        context=context,
        html_message=html_message,
    )
