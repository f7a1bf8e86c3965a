"""Booking domain models for SkyBook."""

from __future__ import annotations

import secrets
import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class BookingStatus(models.TextChoices):
    PENDING = "Pending", _("Awaiting payment")
    SUCCESS = "Success", _("Paid")
    CHALLENGE = "Challenge", _("Under fraud review")
    FAILED = "Failed", _("Failed")
    CANCELLED = "Cancelled", _("Cancelled")


class BaseBooking(models.Model):
    """Fields shared by flight and hotel bookings, including the payment session."""

    REFERENCE_PREFIX = ""

    Status = BookingStatus

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="%(class)ss",
    )
    booking_reference = models.CharField(max_length=16, unique=True, editable=False)
    total_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="IDR")
    status = models.CharField(
        max_length=16,
        choices=BookingStatus.choices,
        default=BookingStatus.PENDING,
        db_index=True,
    )
    midtrans_token = models.CharField(max_length=255, blank=True)
    payment_redirect_url = models.URLField(max_length=500, blank=True)
    payment_expiry = models.DateTimeField(null=True, blank=True)
    payment_order_id = models.CharField(max_length=100, blank=True, db_index=True)
    payment_method = models.CharField(
        max_length=64,
        blank=True,
        help_text=_("Human readable payment method reported by the gateway."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.booking_reference} ({self.status})"

    def save(self, *args, **kwargs):  # type: ignore
        if not self.booking_reference:
            self.booking_reference = self.generate_reference()
        super().save(*args, **kwargs)

    @classmethod
    def generate_reference(cls) -> str:
        while True:
            reference = f"{cls.REFERENCE_PREFIX}{secrets.token_hex(4).upper()}"
            if not cls.objects.filter(booking_reference=reference).exists():
                return reference

    @property
    def is_paid(self) -> bool:
        return self.status == BookingStatus.SUCCESS

    def has_active_payment_session(self) -> bool:
        return bool(self.midtrans_token and self.payment_expiry and self.payment_expiry > timezone.now())


class FlightBooking(BaseBooking):
    REFERENCE_PREFIX = "SB"

    class TripType(models.TextChoices):
        ONE_WAY = "one-way", _("One way")
        ROUND_TRIP = "round-trip", _("Round trip")

    flight_data = models.JSONField(_("Offer snapshot"), default=dict)
    trip_type = models.CharField(max_length=16, choices=TripType.choices, default=TripType.ONE_WAY)
    passengers_count = models.PositiveSmallIntegerField(default=1)
    eticket_url = models.URLField(max_length=500, blank=True)

    class Meta(BaseBooking.Meta):
        verbose_name = _("Flight booking")
        verbose_name_plural = _("Flight bookings")

    @property
    def route_from(self) -> dict:
        return (self.flight_data.get("departure") or {}).get("airport") or {}

    @property
    def route_to(self) -> dict:
        return (self.flight_data.get("arrival") or {}).get("airport") or {}

    @property
    def route_label(self) -> str:
        origin = self.route_from.get("city") or self.route_from.get("code") or "?"
        destination = self.route_to.get("city") or self.route_to.get("code") or "?"
        return f"{origin} - {destination}"

    @property
    def airline(self) -> str:
        return self.flight_data.get("airline") or ""


class BookingPassenger(models.Model):
    class Title(models.TextChoices):
        MR = "Mr", _("Mr")
        MRS = "Mrs", _("Mrs")
        MS = "Ms", _("Ms")
        MSTR = "Mstr", _("Master")
        MISS = "Miss", _("Miss")

    booking = models.ForeignKey(FlightBooking, on_delete=models.CASCADE, related_name="passengers")
    title = models.CharField(max_length=8, choices=Title.choices)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    date_of_birth = models.DateField()
    nationality = models.CharField(max_length=64)
    passport_number = models.CharField(max_length=32)
    passport_expiry = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Passenger")
        verbose_name_plural = _("Passengers")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.title} {self.first_name} {self.last_name}"

    @property
    def full_name(self) -> str:
        return f"{self.title} {self.first_name} {self.last_name}"


class HotelBooking(BaseBooking):
    REFERENCE_PREFIX = "HTL"

    hotel_id = models.CharField(max_length=255)
    hotel_name = models.CharField(max_length=255)
    hotel_address = models.CharField(max_length=255, blank=True)
    hotel_data = models.JSONField(_("Offer snapshot"), default=dict, blank=True)
    check_in = models.DateField()
    check_out = models.DateField()
    nights_count = models.PositiveSmallIntegerField(default=1)
    rooms_count = models.PositiveSmallIntegerField(default=1)
    adults_count = models.PositiveSmallIntegerField(default=1)

    class Meta(BaseBooking.Meta):
        verbose_name = _("Hotel booking")
        verbose_name_plural = _("Hotel bookings")


class HotelBookingGuest(models.Model):
    booking = models.ForeignKey(HotelBooking, on_delete=models.CASCADE, related_name="guests")
    title = models.CharField(max_length=8, choices=BookingPassenger.Title.choices, default=BookingPassenger.Title.MR)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    date_of_birth = models.DateField(null=True, blank=True)
    nationality = models.CharField(max_length=64, blank=True)

    class Meta:
        verbose_name = _("Hotel guest")
        verbose_name_plural = _("Hotel guests")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.title} {self.first_name} {self.last_name}"
