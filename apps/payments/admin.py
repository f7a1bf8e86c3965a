"""Admin registration for payment notifications."""

from __future__ import annotations

from django.contrib import admin

from .models import PaymentNotification


@admin.register(PaymentNotification)
class PaymentNotificationAdmin(admin.ModelAdmin):
    list_display = (
        "order_id",
        "transaction_status",
        "payment_type",
        "gross_amount",
        "outcome",
        "resulting_status",
        "received_at",
    )
    list_filter = ("outcome", "transaction_status", "payment_type")
    search_fields = ("order_id", "booking_reference")
    readonly_fields = [field.name for field in PaymentNotification._meta.fields]
