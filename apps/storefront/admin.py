"""Admin registrations for application settings."""

from __future__ import annotations

from django.contrib import admin

from .models import AppSetting


@admin.register(AppSetting)
class AppSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "updated_at")
    readonly_fields = ("updated_at",)
