"""Tests for notification emails."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.core import mail
from django.utils import timezone

from apps.bookings.models import BookingPassenger, BookingStatus, FlightBooking, HotelBooking
from apps.notifications.services import (
    format_money,
    is_bank_method,
    send_email_notification,
    send_eticket_email,
    send_flight_booking_email,
    send_hotel_booking_email,
)
from apps.notifications.tasks import send_eticket_email_task, send_flight_booking_email_task
from apps.users.models import User


@pytest.fixture
def customer(db):
    return User.objects.create_user(email="customer@example.com", first_name="Budi")


@pytest.fixture
def flight_booking(customer):
    booking = FlightBooking.objects.create(
        user=customer,
        flight_data={
            "airline": "Garuda Indonesia",
            "departure": {"airport": {"code": "CGK", "city": "Jakarta"}, "date": "2026-11-20", "time": "08:00"},
            "arrival": {"airport": {"code": "DPS", "city": "Denpasar"}},
        },
        passengers_count=1,
        total_price=Decimal("1500000.00"),
    )
    BookingPassenger.objects.create(
        booking=booking,
        title="Mr",
        first_name="Budi",
        last_name="Santoso",
        date_of_birth="1990-05-01",
        nationality="Indonesia",
        passport_number="C1234567",
        passport_expiry=timezone.localdate() + timedelta(days=700),
    )
    return booking


def test_format_money():
    assert format_money(Decimal("1500000.00"), "IDR") == "IDR 1,500,000"
    assert format_money(99.5, "EUR") == "EUR 99.50"


def test_bank_method_detection():
    assert is_bank_method("")
    assert is_bank_method("Virtual Account BCA")
    assert is_bank_method("Mandiri Bill Payment")
    assert not is_bank_method("QRIS")
    assert not is_bank_method("Credit Card")


def test_send_email_notification_reports_failure():
    with mock.patch("apps.notifications.services.send_mail", side_effect=OSError("SMTP down")):
        assert send_email_notification("someone@example.com", "Hello", {}, html_message="<p>Hi</p>") is False


def test_send_email_notification_without_recipient():
    assert send_email_notification("", "Hello", {"message": "Hi"}) is False
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_unpaid_flight_invoice(flight_booking):
    assert send_flight_booking_email(flight_booking)

    message = mail.outbox[0]
    html = message.alternatives[0][0]
    assert message.subject == f"[INVOICE] Payment due - {flight_booking.booking_reference}"
    assert "Garuda Indonesia" in message.body
    assert "Jakarta - Denpasar" in message.body
    assert "Mr Budi Santoso" in message.body
    assert "IDR 1,500,000" in message.body
    assert "BANK MANDIRI" in message.body
    assert f"https://skybook.test/booking/checkout/{flight_booking.pk}" in html


@pytest.mark.django_db
def test_qris_invoice_has_no_bank_instructions(flight_booking):
    flight_booking.payment_method = "QRIS"
    flight_booking.save()

    send_flight_booking_email(flight_booking)

    assert "BANK MANDIRI" not in mail.outbox[0].body
    assert "QRIS" in mail.outbox[0].body


@pytest.mark.django_db
def test_paid_flight_receipt(flight_booking):
    flight_booking.status = BookingStatus.SUCCESS
    flight_booking.payment_method = "Credit Card"
    flight_booking.save()

    send_flight_booking_email(flight_booking)

    message = mail.outbox[0]
    assert message.subject == f"[RECEIPT] Payment receipt - {flight_booking.booking_reference}"
    assert "Credit Card" in message.body
    assert "BANK MANDIRI" not in message.body


@pytest.mark.django_db
def test_hotel_invoice(customer):
    check_in = timezone.localdate() + timedelta(days=3)
    booking = HotelBooking.objects.create(
        user=customer,
        hotel_id="ChIJ123",
        hotel_name="Hilton Bali Resort",
        hotel_address="Nusa Dua, Indonesia",
        check_in=check_in,
        check_out=check_in + timedelta(days=2),
        nights_count=2,
        total_price=Decimal("5500000.00"),
    )
    booking.guests.create(first_name="Ayu", last_name="Pratiwi")

    assert send_hotel_booking_email(booking)

    message = mail.outbox[0]
    assert message.subject.startswith("[INVOICE]")
    assert "Hilton Bali Resort" in message.body
    assert "Mr Ayu Pratiwi" in message.body
    assert f"https://skybook.test/booking/hotel-checkout/{booking.pk}" in message.alternatives[0][0]


@pytest.mark.django_db
def test_eticket_email(flight_booking):
    flight_booking.eticket_url = "https://files.skybook.test/tickets/sb.pdf"

    assert send_eticket_email(flight_booking)

    message = mail.outbox[0]
    assert message.subject.startswith("[E-TICKET]")
    assert "2026-11-20 08:00" in message.body
    assert "https://files.skybook.test/tickets/sb.pdf" in message.alternatives[0][0]


@pytest.mark.django_db
def test_tasks_handle_missing_bookings():
    missing = "00000000-0000-0000-0000-000000000000"
    assert send_flight_booking_email_task(missing) is False
    assert send_eticket_email_task(missing) is False


@pytest.mark.django_db
def test_eticket_task_skips_booking_without_ticket(flight_booking):
    assert send_eticket_email_task(str(flight_booking.pk)) is False
    assert len(mail.outbox) == 0
