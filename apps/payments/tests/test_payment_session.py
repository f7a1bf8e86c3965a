"""API tests for starting a hosted checkout session."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import BookingStatus, FlightBooking, HotelBooking
from apps.users.models import User

REQUESTS_POST = "apps.payments.midtrans.requests.post"

FLIGHT_DATA = {
    "id": "offer-1",
    "airline": "Garuda Indonesia",
    "departure": {"airport": {"code": "CGK", "city": "Jakarta"}, "date": "2026-11-20", "time": "08:00"},
    "arrival": {"airport": {"code": "DPS", "city": "Denpasar"}, "date": "2026-11-20", "time": "10:50"},
}


def snap_response(ok: bool = True, status_code: int = 201, payload: dict | None = None) -> mock.MagicMock:
    response = mock.MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = (
        payload
        if payload is not None
        else {"token": "snap-token-1", "redirect_url": "https://app.sandbox.midtrans.com/snap/v4/redirection/snap-token-1"}
    )
    return response


class FlightPaymentSessionTests(APITestCase):
    def setUp(self) -> None:
        self.customer = User.objects.create_user(
            email="customer@example.com",
            first_name="Budi",
            last_name="Santoso",
            phone="+6281234567890",
            password="Skyb00k-Login!42",
        )
        self.booking = FlightBooking.objects.create(
            user=self.customer,
            flight_data=FLIGHT_DATA,
            passengers_count=2,
            total_price=Decimal("3000000.40"),
        )
        self.url = reverse("flight-booking-pay", args=[self.booking.pk])
        self.client.force_authenticate(self.customer)

    @mock.patch(REQUESTS_POST)
    def test_creates_snap_session(self, mock_post) -> None:
        mock_post.return_value = snap_response()

        response = self.client.post(self.url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["token"], "snap-token-1")
        self.assertFalse(response.data["reused"])

        self.booking.refresh_from_db()
        self.assertEqual(self.booking.midtrans_token, "snap-token-1")
        self.assertTrue(self.booking.payment_order_id.startswith(f"{self.booking.pk}-"))
        self.assertGreater(self.booking.payment_expiry, timezone.now() + timedelta(minutes=29))

        kwargs = mock_post.call_args.kwargs
        self.assertEqual(kwargs["auth"], ("SB-Mid-server-test", ""))
        payload = kwargs["json"]
        self.assertEqual(payload["transaction_details"]["gross_amount"], 3000000)
        self.assertEqual(payload["transaction_details"]["order_id"], self.booking.payment_order_id)
        self.assertEqual(payload["item_details"][0]["name"], "Flight: Jakarta - Denpasar")
        self.assertEqual(payload["item_details"][0]["price"], 3000000)
        self.assertEqual(payload["customer_details"]["email"], "customer@example.com")
        self.assertEqual(payload["customer_details"]["phone"], "+6281234567890")
        self.assertEqual(payload["expiry"], {"unit": "minutes", "duration": 30})

    @mock.patch(REQUESTS_POST)
    def test_customer_details_override_profile(self, mock_post) -> None:
        mock_post.return_value = snap_response()

        self.client.post(
            self.url,
            {"customer_details": {"first_name": "Siti", "email": "siti@example.com"}},
            format="json",
        )

        details = mock_post.call_args.kwargs["json"]["customer_details"]
        self.assertEqual(details["first_name"], "Siti")
        self.assertEqual(details["last_name"], "Santoso")
        self.assertEqual(details["email"], "siti@example.com")

    @mock.patch(REQUESTS_POST)
    def test_active_session_is_reused(self, mock_post) -> None:
        mock_post.return_value = snap_response()
        self.client.post(self.url, {}, format="json")

        response = self.client.post(self.url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["reused"])
        self.assertEqual(mock_post.call_count, 1)

    @mock.patch(REQUESTS_POST)
    def test_expired_session_is_replaced(self, mock_post) -> None:
        self.booking.midtrans_token = "old-token"
        self.booking.payment_expiry = timezone.now() - timedelta(minutes=1)
        self.booking.save()
        mock_post.return_value = snap_response()

        response = self.client.post(self.url, {}, format="json")

        self.assertEqual(response.data["token"], "snap-token-1")
        self.assertEqual(mock_post.call_count, 1)

    @mock.patch(REQUESTS_POST)
    def test_only_pending_bookings_can_be_paid(self, mock_post) -> None:
        self.booking.status = BookingStatus.SUCCESS
        self.booking.save()

        response = self.client.post(self.url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        mock_post.assert_not_called()

    @mock.patch(REQUESTS_POST)
    def test_only_owner_can_pay(self, mock_post) -> None:
        admin = User.objects.create_user(
            email="admin@skybook.test",
            password="Skyb00k-Admin!42",
            role=User.RoleChoices.ADMIN,
        )
        self.client.force_authenticate(admin)

        response = self.client.post(self.url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        mock_post.assert_not_called()

    @mock.patch(REQUESTS_POST)
    def test_gateway_error_maps_to_bad_gateway(self, mock_post) -> None:
        mock_post.return_value = snap_response(
            ok=False,
            status_code=401,
            payload={"error_messages": ["Access denied due to unauthorized transaction"]},
        )

        response = self.client.post(self.url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY, response.data)
        self.assertEqual(response.data["errors"], ["Access denied due to unauthorized transaction"])
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.midtrans_token, "")


class HotelPaymentSessionTests(APITestCase):
    @mock.patch(REQUESTS_POST)
    def test_hotel_order_id_uses_reference(self, mock_post) -> None:
        customer = User.objects.create_user(email="guest@example.com", password="Skyb00k-Login!42")
        check_in = timezone.localdate() + timedelta(days=5)
        booking = HotelBooking.objects.create(
            user=customer,
            hotel_id="ChIJ123",
            hotel_name="Hilton Bali Resort With A Very Long Name That Exceeds Fifty",
            check_in=check_in,
            check_out=check_in + timedelta(days=2),
            nights_count=2,
            total_price=Decimal("5500000.00"),
        )
        mock_post.return_value = snap_response()
        self.client.force_authenticate(customer)

        response = self.client.post(reverse("hotel-booking-pay", args=[booking.pk]), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertTrue(booking.payment_order_id.startswith(f"HOTEL-{booking.booking_reference}-"))
        item = mock_post.call_args.kwargs["json"]["item_details"][0]
        self.assertEqual(len(item["name"]), 50)
        self.assertEqual(item["id"], "ChIJ123")
