"""API tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import PasswordResetToken, RegistrationRequest, User


class RegistrationRequestAPITests(APITestCase):
    def setUp(self) -> None:
        self.url = reverse("auth:register-request")
        self.payload = {
            "first_name": "Sari",
            "last_name": "Wulandari",
            "email": "Sari@Example.com",
            "phone": "+6281234567890",
            "role": "agent",
        }

    def test_request_is_stored_and_acknowledged(self) -> None:
        response = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        registration = RegistrationRequest.objects.get()
        self.assertEqual(registration.email, "sari@example.com")
        self.assertEqual(registration.role, "agent")
        self.assertEqual(registration.status, RegistrationRequest.Status.PENDING)
        self.assertFalse(User.objects.filter(email="sari@example.com").exists())

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("Registration request received", mail.outbox[0].subject)
        self.assertEqual(mail.outbox[0].to, ["sari@example.com"])

    def test_duplicate_request_is_rejected(self) -> None:
        self.client.post(self.url, self.payload, format="json")

        response = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("email", response.data)

    def test_registered_email_is_rejected(self) -> None:
        User.objects.create_user(email="sari@example.com", password="Skyb00k-Login!42")

        response = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_admin_role_cannot_be_requested(self) -> None:
        response = self.client.post(self.url, {**self.payload, "role": "admin"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("role", response.data)


class LoginAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="lock@example.com",
            phone="+6281100000001",
            password="CorrectPassword1",
        )
        self.url = reverse("auth:login")

    def test_login_by_email_returns_tokens(self) -> None:
        response = self.client.post(
            self.url, {"login": "LOCK@example.com", "password": "CorrectPassword1"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], "lock@example.com")

    def test_login_by_phone(self) -> None:
        response = self.client.post(
            self.url, {"login": "+6281100000001", "password": "CorrectPassword1"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_login_limited_attempts(self) -> None:
        wrong_payload = {"login": self.user.email, "password": "wrong"}
        for _ in range(5):
            response = self.client.post(self.url, wrong_payload, format="json")

        self.user.refresh_from_db()
        self.assertTrue(self.user.is_locked)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        # Correct password is refused while the lock is active
        response = self.client.post(self.url, {"login": self.user.email, "password": "CorrectPassword1"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        # After lock expires user can login again
        self.user.locked_until = timezone.now() - timedelta(minutes=1)
        self.user.save(update_fields=["locked_until"])
        response = self.client.post(self.url, {"login": self.user.email, "password": "CorrectPassword1"})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        self.user.refresh_from_db()
        self.assertIsNone(self.user.locked_until)
        self.assertEqual(self.user.failed_login_attempts, 0)

    def test_token_refresh(self) -> None:
        login = self.client.post(self.url, {"login": self.user.email, "password": "CorrectPassword1"})

        response = self.client.post(
            reverse("auth:token_refresh"), {"refresh": login.data["tokens"]["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)


class PasswordResetAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="reset@example.com",
            phone="+6281100000002",
            password="OldPassword1",
        )
        self.request_url = reverse("auth:password-reset-request")
        self.confirm_url = reverse("auth:password-reset-confirm")

    def _confirm(self, code: str, password: str = "Skyb00k-Reset!42"):
        return self.client.post(
            self.confirm_url,
            {
                "identifier": self.user.email,
                "code": code,
                "new_password": password,
                "new_password_confirm": password,
            },
            format="json",
        )

    def test_password_reset_flow(self) -> None:
        response = self.client.post(self.request_url, {"identifier": self.user.email}, format="json")
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED, response.data)

        token = PasswordResetToken.objects.get(user=self.user, is_used=False)
        self.assertEqual(len(token.code), 6)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(token.code, mail.outbox[0].body)

        response = self._confirm(token.code)
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        self.user.refresh_from_db()
        token.refresh_from_db()
        self.assertTrue(self.user.check_password("Skyb00k-Reset!42"))
        self.assertTrue(token.is_used)

    def test_unknown_identifier_is_not_disclosed(self) -> None:
        response = self.client.post(self.request_url, {"identifier": "ghost@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED, response.data)
        self.assertEqual(len(mail.outbox), 0)
        self.assertFalse(PasswordResetToken.objects.exists())

    def test_new_request_invalidates_previous_code(self) -> None:
        self.client.post(self.request_url, {"identifier": self.user.email}, format="json")
        self.client.post(self.request_url, {"identifier": self.user.email}, format="json")

        self.assertEqual(PasswordResetToken.objects.filter(user=self.user, is_used=False).count(), 1)

    def test_wrong_code_exhausts_attempts(self) -> None:
        self.client.post(self.request_url, {"identifier": self.user.email}, format="json")
        token = PasswordResetToken.objects.get(user=self.user, is_used=False)
        wrong = "000000" if token.code != "000000" else "111111"

        for expected_left in (2, 1, 0):
            response = self._confirm(wrong)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
            token.refresh_from_db()
            self.assertEqual(token.attempts_left, expected_left)

        # Even the right code is refused once attempts are used up
        response = self._confirm(token.code)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        token.refresh_from_db()
        self.assertTrue(token.is_used)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("OldPassword1"))

    def test_expired_code_is_rejected(self) -> None:
        self.client.post(self.request_url, {"identifier": self.user.email}, format="json")
        token = PasswordResetToken.objects.get(user=self.user, is_used=False)
        token.expires_at = timezone.now() - timedelta(minutes=1)
        token.save(update_fields=["expires_at"])

        response = self._confirm(token.code)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        token.refresh_from_db()
        self.assertTrue(token.is_used)

    def test_mismatched_passwords(self) -> None:
        response = self.client.post(
            self.confirm_url,
            {
                "identifier": self.user.email,
                "code": "123456",
                "new_password": "Skyb00k-Reset!42",
                "new_password_confirm": "Skyb00k-Reset!43",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("new_password_confirm", response.data)


class MeAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="me@example.com", password="Skyb00k-Login!42")
        self.url = reverse("user-me")

    def test_requires_authentication(self) -> None:
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_profile_keeps_role(self) -> None:
        self.client.force_authenticate(self.user)

        response = self.client.patch(
            self.url,
            {"first_name": "Budi", "phone": "081234567890", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.first_name, "Budi")
        self.assertEqual(self.user.role, User.RoleChoices.USER)
