"""Serializers for authentication flows (access request, login, password reset)."""

from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.password_validation import validate_password  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.notifications.services import send_password_reset_code_email
from .models import PHONE_VALIDATOR, PasswordResetToken, RegistrationRequest, Role


User = get_user_model()


def find_user_by_identifier(identifier: str):
    """Resolve a login identifier (email or phone) to a user or ``None``."""
    identifier = (identifier or "").strip()
    if not identifier:
        return None
    if "@" in identifier:
        return User.objects.filter(email__iexact=identifier).first()
    phone = User.objects.normalize_phone(identifier)
    return User.objects.filter(phone=phone).first()


class RegistrationRequestSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])
    role = serializers.ChoiceField(
        choices=[Role.USER.value, Role.AGENT.value],
        default=Role.USER.value,
    )

    class Meta:
        model = RegistrationRequest
        fields = ["id", "first_name", "last_name", "email", "phone", "role", "status", "created_at"]
        read_only_fields = ["id", "status", "created_at"]
        extra_kwargs = {
            # Uniqueness is checked in validate_email with a friendlier message.
            "email": {"validators": []},
        }

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if RegistrationRequest.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A registration request for this email already exists.")
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("This email is already registered.")
        return value


class LoginSerializer(serializers.Serializer):
    login = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = find_user_by_identifier(attrs.get("login", ""))
        if user is None:
            raise serializers.ValidationError({"login": "Invalid login or password."})

        if user.is_locked:
            raise serializers.ValidationError(
                {"non_field_errors": ["Account is temporarily locked. Try again later."]}
            )

        if not user.is_active or not user.check_password(attrs.get("password", "")):
            user.register_failed_attempt(threshold=5)
            raise serializers.ValidationError({"login": "Invalid login or password."})

        if user.failed_login_attempts or user.locked_until:
            user.unlock()

        attrs["user"] = user
        return attrs


class PasswordResetRequestSerializer(serializers.Serializer):
    identifier = serializers.CharField()

    @transaction.atomic
    def issue_code(self) -> PasswordResetToken | None:
        """Create a reset code for a known account; unknown identifiers are ignored."""
        user = find_user_by_identifier(self.validated_data["identifier"])
        if user is None:
            return None

        PasswordResetToken.objects.filter(user=user, is_used=False).update(is_used=True)

        code = f"{secrets.randbelow(1_000_000):06d}"
        token = PasswordResetToken.objects.create(
            user=user,
            code=code,
            purpose=PasswordResetToken.Purpose.RESET,
            expires_at=timezone.now() + timedelta(minutes=settings.PASSWORD_RESET_TTL_MINUTES),
            attempts_left=3,
        )
        send_password_reset_code_email(user, code)
        return token


class PasswordResetConfirmSerializer(serializers.Serializer):
    identifier = serializers.CharField()
    code = serializers.CharField()
    new_password = serializers.CharField(min_length=8, write_only=True)
    new_password_confirm = serializers.CharField(min_length=8, write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("new_password") != attrs.get("new_password_confirm"):
            raise serializers.ValidationError({"new_password_confirm": "Passwords do not match."})
        user = find_user_by_identifier(attrs.get("identifier", ""))
        if user is None:
            raise serializers.ValidationError({"code": "Invalid or expired code."})
        validate_password(attrs["new_password"], user=user)
        attrs["user"] = user
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        # Failed attempts must be persisted, so this runs outside a transaction.
        user = validated_data["user"]
        token = (
            PasswordResetToken.objects.filter(user=user, is_used=False)
            .order_by("-created_at")
            .first()
        )
        if token is None:
            raise serializers.ValidationError({"code": "Code not found. Request a new one."})

        if token.is_expired:
            token.mark_used()
            raise serializers.ValidationError({"code": "The code has expired."})

        if token.attempts_left == 0:
            token.mark_used()
            raise serializers.ValidationError({"code": "Too many attempts. Request a new code."})

        if not secrets.compare_digest(token.code, validated_data["code"].strip()):
            token.decrement_attempt()
            raise serializers.ValidationError({"code": "Invalid code."})

        with transaction.atomic():
            user.set_password(validated_data["new_password"])
            user.locked_until = None
            user.failed_login_attempts = 0
            user.save(update_fields=["password", "locked_until", "failed_login_attempts"])
            token.mark_used()
        return user
