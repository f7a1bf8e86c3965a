"""API tests for airports, managed airlines and hotel chains."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import Airport, HotelChain, ManagedAirline
from apps.users.models import User


class AirportAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@skybook.test",
            password="Skyb00k-Admin!42",
            role=User.RoleChoices.ADMIN,
        )
        Airport.objects.create(iata_code="cgk", name="Soekarno-Hatta", city_name="Jakarta", country_name="Indonesia")
        Airport.objects.create(iata_code="DPS", name="Ngurah Rai", city_name="Denpasar", country_name="Indonesia")
        Airport.objects.create(
            iata_code="JED",
            name="King Abdulaziz",
            city_name="Jeddah",
            country_name="Saudi Arabia",
            is_active=False,
        )
        self.list_url = reverse("catalog:airport-list")

    def test_codes_are_stored_upper_case(self) -> None:
        self.assertTrue(Airport.objects.filter(iata_code="CGK").exists())

    def test_public_listing_hides_inactive_airports(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        codes = [row["iata_code"] for row in response.data["results"]]
        self.assertEqual(codes, ["CGK", "DPS"])

    def test_admin_sees_inactive_airports(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.list_url)
        self.assertEqual(response.data["count"], 3)

    def test_search_matches_city(self) -> None:
        response = self.client.get(self.list_url, {"search": "denpa"})

        self.assertEqual([row["iata_code"] for row in response.data["results"]], ["DPS"])

    def test_listing_is_paginated_by_ten(self) -> None:
        for index in range(12):
            Airport.objects.create(iata_code=f"X{chr(65 + index)}A", name=f"Airport {index}")

        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data["results"]), 10)
        self.assertIsNotNone(response.data["next"])

    def test_anonymous_cannot_create(self) -> None:
        response = self.client.post(self.list_url, {"iata_code": "SUB", "name": "Juanda"}, format="json")
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_admin_create_rejects_duplicate_code(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, {"iata_code": "dps", "name": "Another"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("iata_code", response.data)

    def test_toggle_active(self) -> None:
        self.client.force_authenticate(self.admin)
        airport = Airport.objects.get(iata_code="JED")

        response = self.client.post(reverse("catalog:airport-toggle-active", args=[airport.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        airport.refresh_from_db()
        self.assertTrue(airport.is_active)


class ManagedAirlineAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@skybook.test",
            password="Skyb00k-Admin!42",
            role=User.RoleChoices.ADMIN,
        )
        self.client.force_authenticate(self.admin)
        self.list_url = reverse("catalog:airline-list")

    def test_name_defaults_to_code(self) -> None:
        response = self.client.post(self.list_url, {"code": "ga"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        airline = ManagedAirline.objects.get()
        self.assertEqual(airline.code, "GA")
        self.assertEqual(airline.name, "GA")

    def test_listing_is_not_paginated(self) -> None:
        ManagedAirline.objects.create(code="GA", name="Garuda Indonesia", baggage_info="30kg")
        ManagedAirline.objects.create(code="SV", name="Saudia")

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([row["code"] for row in response.data], ["GA", "SV"])


class HotelChainAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@skybook.test",
            password="Skyb00k-Admin!42",
            role=User.RoleChoices.ADMIN,
        )
        HotelChain.objects.create(name="Hilton", brand_id="33")
        self.client.force_authenticate(self.admin)
        self.list_url = reverse("catalog:hotel-chain-list")

    def test_brand_id_must_be_unique(self) -> None:
        response = self.client.post(self.list_url, {"name": "Marriott", "brand_id": "33"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("brand_id", response.data)

    def test_name_must_be_unique_ignoring_case(self) -> None:
        response = self.client.post(self.list_url, {"name": "hilton", "brand_id": "34"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("name", response.data)
