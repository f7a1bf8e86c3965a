"""URL declarations for payments (namespace: payments)."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import midtrans_webhook

urlpatterns = [
    path('midtrans/notification/', midtrans_webhook, name='midtrans-notification'),
]
