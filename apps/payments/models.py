"""Audit log of payment gateway notifications."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class PaymentNotification(models.Model):
    """One notification received on the webhook, processed or not."""

    class Outcome(models.TextChoices):
        PROCESSED = "processed", _("Processed")
        INVALID_SIGNATURE = "invalid_signature", _("Ignored: invalid signature")
        UNKNOWN_ORDER = "unknown_order", _("Ignored: unknown order")

    order_id = models.CharField(max_length=100, db_index=True)
    transaction_status = models.CharField(max_length=32, blank=True)
    fraud_status = models.CharField(max_length=32, blank=True)
    payment_type = models.CharField(max_length=32, blank=True)
    gross_amount = models.CharField(max_length=32, blank=True)
    outcome = models.CharField(max_length=32, choices=Outcome.choices)
    booking_reference = models.CharField(max_length=16, blank=True)
    resulting_status = models.CharField(max_length=16, blank=True)
    payload = models.JSONField(default=dict)
    received_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Payment notification")
        verbose_name_plural = _("Payment notifications")
        ordering = ["-received_at"]

    def __str__(self) -> str:
        return f"{self.order_id} {self.transaction_status} ({self.outcome})"
