"""Reference data used by flight and hotel search."""

from __future__ import annotations

from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


IATA_AIRPORT_VALIDATOR = RegexValidator(r"^[A-Za-z]{3}$", _("Airport code must be 3 letters."))
AIRLINE_CODE_VALIDATOR = RegexValidator(r"^[A-Za-z0-9]{2,3}$", _("Airline code must be 2-3 characters."))


class ActiveQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Airport(models.Model):
    """Airport offered in the origin/destination pickers."""

    iata_code = models.CharField(
        _("IATA code"),
        max_length=3,
        unique=True,
        validators=[IATA_AIRPORT_VALIDATOR],
    )
    name = models.CharField(_("Name"), max_length=255)
    city_name = models.CharField(_("City"), max_length=120, blank=True)
    country_name = models.CharField(_("Country"), max_length=120, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActiveQuerySet.as_manager()

    class Meta:
        verbose_name = _("Airport")
        verbose_name_plural = _("Airports")
        ordering = ["iata_code"]

    def __str__(self) -> str:
        return f"{self.iata_code} - {self.name}"

    def save(self, *args, **kwargs):  # type: ignore
        self.iata_code = (self.iata_code or "").strip().upper()
        super().save(*args, **kwargs)


class ManagedAirline(models.Model):
    """Airline whitelisted for search; only its flights are offered."""

    code = models.CharField(
        _("Airline code"),
        max_length=3,
        unique=True,
        validators=[AIRLINE_CODE_VALIDATOR],
    )
    name = models.CharField(_("Name"), max_length=120, blank=True)
    baggage_info = models.CharField(_("Baggage allowance"), max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActiveQuerySet.as_manager()

    class Meta:
        verbose_name = _("Managed airline")
        verbose_name_plural = _("Managed airlines")
        ordering = ["code"]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"

    def save(self, *args, **kwargs):  # type: ignore
        self.code = (self.code or "").strip().upper()
        if not self.name:
            self.name = self.code
        super().save(*args, **kwargs)


class HotelChain(models.Model):
    """Hotel brand that can be used to narrow hotel search."""

    name = models.CharField(_("Name"), max_length=120, unique=True)
    brand_id = models.CharField(
        _("Aggregator brand id"),
        max_length=32,
        unique=True,
        help_text=_("Brand identifier used by the search aggregator."),
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActiveQuerySet.as_manager()

    class Meta:
        verbose_name = _("Hotel chain")
        verbose_name_plural = _("Hotel chains")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
