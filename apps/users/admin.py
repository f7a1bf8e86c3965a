"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser, PasswordResetToken, RegistrationRequest


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Personal info"),
            {"fields": ("username", "first_name", "last_name", "phone", "avatar_url")},
        ),
        (_("Role"), {"fields": ("role",)}),
        (
            _("Security"),
            {"fields": ("failed_login_attempts", "locked_until")},
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "password1",
                    "password2",
                    "first_name",
                    "last_name",
                    "phone",
                    "role",
                    "is_staff",
                    "is_superuser",
                ),
            },
        ),
    )
    list_display = ("email", "role", "phone", "is_active", "is_staff", "is_locked", "created_at")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "phone", "first_name", "last_name")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at", "date_joined")


@admin.register(RegistrationRequest)
class RegistrationRequestAdmin(admin.ModelAdmin):
    list_display = ("email", "first_name", "last_name", "role", "status", "reviewed_by", "created_at")
    list_filter = ("status", "role")
    search_fields = ("email", "first_name", "last_name", "phone")
    readonly_fields = ("reviewed_by", "reviewed_at", "created_at")


@admin.register(PasswordResetToken)
class PasswordResetTokenAdmin(admin.ModelAdmin):
    list_display = ("user", "purpose", "expires_at", "attempts_left", "is_used", "created_at")
    list_filter = ("purpose", "is_used")
    search_fields = ("user__email", "user__phone")
