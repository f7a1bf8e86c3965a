"""API tests for the analytics overview."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import BookingStatus, FlightBooking, HotelBooking
from apps.users.models import RegistrationRequest, User


class OverviewAnalyticsAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@skybook.test",
            password="Skyb00k-Admin!42",
            role=User.RoleChoices.ADMIN,
        )
        self.customer = User.objects.create_user(email="customer@example.com", password="Skyb00k-Login!42")
        self.other = User.objects.create_user(email="other@example.com", password="Skyb00k-Login!42")
        FlightBooking.objects.create(user=self.customer, total_price=Decimal("1000000.00"), status=BookingStatus.SUCCESS)
        FlightBooking.objects.create(user=self.customer, total_price=Decimal("500000.00"))
        FlightBooking.objects.create(user=self.other, total_price=Decimal("2000000.00"), status=BookingStatus.SUCCESS)
        RegistrationRequest.objects.create(first_name="New", email="new@example.com")
        self.url = reverse("analytics:overview")

    def test_admin_gets_platform_totals(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["scope"], "platform")
        self.assertEqual(response.data["users"], 3)
        self.assertEqual(response.data["pending_registration_requests"], 1)
        self.assertEqual(response.data["flight_bookings"]["total"], 3)
        self.assertEqual(response.data["flight_bookings"]["Success"], 2)
        self.assertEqual(response.data["hotel_bookings"]["total"], 0)
        self.assertEqual(response.data["revenue"], {"IDR": Decimal("3000000.00")})

    def test_customer_gets_personal_totals(self) -> None:
        self.client.force_authenticate(self.customer)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["scope"], "personal")
        self.assertEqual(response.data["flight_bookings"]["total"], 2)
        self.assertEqual(response.data["flight_bookings"]["Pending"], 1)
        self.assertEqual(response.data["spend"], {"IDR": Decimal("1000000.00")})
        self.assertNotIn("users", response.data)

    def test_revenue_is_grouped_by_currency(self) -> None:
        HotelBooking.objects.create(
            user=self.customer,
            hotel_id="ChIJ123",
            hotel_name="Hilton Bali Resort",
            check_in=date(2026, 11, 20),
            check_out=date(2026, 11, 22),
            nights_count=2,
            total_price=Decimal("300.00"),
            currency="EUR",
            status=BookingStatus.SUCCESS,
        )
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            response.data["revenue"],
            {"IDR": Decimal("3000000.00"), "EUR": Decimal("300.00")},
        )

    def test_requires_authentication(self) -> None:
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
