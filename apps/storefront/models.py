"""Key/value application settings edited from the back office."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class AppSetting(models.Model):
    class Key(models.TextChoices):
        DISCOUNTS = "discounts", _("Role discounts")
        CURRENCY = "currency", _("Currency conversion")
        FLIGHT_SETTINGS = "flight_settings", _("Flight price caps")

    key = models.CharField(_("Key"), max_length=32, primary_key=True, choices=Key.choices)
    value = models.JSONField(_("Value"), default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Application setting")
        verbose_name_plural = _("Application settings")
        ordering = ["key"]

    def __str__(self) -> str:
        return self.get_key_display()
