"""API tests for the back-office user administration endpoints."""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import PasswordResetToken, RegistrationRequest, User
from apps.users.services import build_activation_link


class RegistrationReviewAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@skybook.test",
            password="Skyb00k-Admin!42",
            role=User.RoleChoices.ADMIN,
        )
        self.registration = RegistrationRequest.objects.create(
            first_name="Dewi",
            last_name="Lestari",
            email="dewi@example.com",
            phone="+6281200000001",
            role="agent",
        )
        self.client.force_authenticate(self.admin)

    def test_list_pending_requests(self) -> None:
        RegistrationRequest.objects.create(
            first_name="Old",
            email="old@example.com",
            status=RegistrationRequest.Status.REJECTED,
        )

        response = self.client.get(
            reverse("backoffice:registration-request-list"), {"status": "pending"}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        emails = [row["email"] for row in response.data["results"]]
        self.assertEqual(emails, ["dewi@example.com"])

    def test_approve_creates_account_and_sends_activation_link(self) -> None:
        url = reverse("backoffice:registration-request-approve", args=[self.registration.pk])

        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        user = User.objects.get(email="dewi@example.com")
        self.assertEqual(user.role, User.RoleChoices.AGENT)
        self.assertFalse(user.has_usable_password())

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, RegistrationRequest.Status.APPROVED)
        self.assertEqual(self.registration.reviewed_by, self.admin)

        token = PasswordResetToken.objects.get(user=user, purpose=PasswordResetToken.Purpose.INVITE)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("approved", mail.outbox[0].subject)
        self.assertIn("https://skybook.test/reset-password?", mail.outbox[0].body)
        self.assertIn(token.code, mail.outbox[0].body)

    def test_activation_link_code_sets_password(self) -> None:
        self.client.post(reverse("backoffice:registration-request-approve", args=[self.registration.pk]))
        user = User.objects.get(email="dewi@example.com")
        token = PasswordResetToken.objects.get(user=user)
        query = parse_qs(urlparse(build_activation_link(user, token)).query)

        self.client.force_authenticate(None)
        response = self.client.post(
            reverse("auth:password-reset-confirm"),
            {
                "identifier": query["email"][0],
                "code": query["code"][0],
                "new_password": "Skyb00k-Agent!42",
                "new_password_confirm": "Skyb00k-Agent!42",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        response = self.client.post(
            reverse("auth:login"), {"login": user.email, "password": "Skyb00k-Agent!42"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_reviewed_request_cannot_be_approved_again(self) -> None:
        self.client.post(reverse("backoffice:registration-request-reject", args=[self.registration.pk]))

        response = self.client.post(
            reverse("backoffice:registration-request-approve", args=[self.registration.pk])
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(User.objects.filter(email="dewi@example.com").exists())

    def test_non_admin_is_forbidden(self) -> None:
        customer = User.objects.create_user(email="customer@example.com", password="Skyb00k-Login!42")
        self.client.force_authenticate(customer)

        response = self.client.post(
            reverse("backoffice:registration-request-approve", args=[self.registration.pk])
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class UserAdminAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@skybook.test",
            password="Skyb00k-Admin!42",
            role=User.RoleChoices.ADMIN,
        )
        self.customer = User.objects.create_user(
            email="customer@example.com",
            first_name="Rina",
            password="Skyb00k-Login!42",
        )
        self.client.force_authenticate(self.admin)

    def test_search_users(self) -> None:
        response = self.client.get(reverse("backoffice:admin-user-list"), {"search": "rina"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([row["email"] for row in response.data["results"]], ["customer@example.com"])

    def test_set_role(self) -> None:
        url = reverse("backoffice:admin-user-set-role", args=[self.customer.pk])

        response = self.client.post(url, {"role": "agent"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.customer.refresh_from_db()
        self.assertEqual(self.customer.role, User.RoleChoices.AGENT)

    def test_admin_cannot_change_own_role(self) -> None:
        url = reverse("backoffice:admin-user-set-role", args=[self.admin.pk])

        response = self.client.post(url, {"role": "user"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.admin.refresh_from_db()
        self.assertEqual(self.admin.role, User.RoleChoices.ADMIN)
