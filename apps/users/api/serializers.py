"""Serializers for the back-office API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.models import CustomUser, RegistrationRequest, Role


class AdminUserSerializer(serializers.ModelSerializer):
    """User profile as seen by administrators."""

    role_display = serializers.CharField(source="get_role_display", read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
            "role_display",
            "avatar_url",
            "is_active",
            "last_login",
            "created_at",
        ]
        read_only_fields = fields


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices)


class RegistrationRequestAdminSerializer(serializers.ModelSerializer):
    reviewed_by_email = serializers.EmailField(source="reviewed_by.email", read_only=True, default=None)

    class Meta:
        model = RegistrationRequest
        fields = [
            "id",
            "first_name",
            "last_name",
            "email",
            "phone",
            "role",
            "status",
            "reviewed_by_email",
            "reviewed_at",
            "created_at",
        ]
        read_only_fields = fields
