"""
Midtrans Snap integration.

Creates hosted checkout sessions and verifies asynchronous payment
notifications. Requests authenticate with the server key over HTTP basic
auth (key as user name, empty password).
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any

import requests
from django.conf import settings  # type: ignore

from apps.bookings.models import BookingStatus

logger = logging.getLogger(__name__)

SANDBOX_SNAP_URL = "https://app.sandbox.midtrans.com/snap/v1/transactions"
PRODUCTION_SNAP_URL = "https://app.midtrans.com/snap/v1/transactions"

SUCCESS_STATUSES = {"capture", "settlement"}
FAILED_STATUSES = {"cancel", "deny", "expire"}


class MidtransError(Exception):
    """Raised when the gateway rejects a request or cannot be reached."""

    def __init__(self, message: str, messages: list[str] | None = None):
        super().__init__(message)
        self.messages = messages or [message]


def snap_url() -> str:
    return PRODUCTION_SNAP_URL if settings.MIDTRANS_IS_PRODUCTION else SANDBOX_SNAP_URL


def _server_key() -> str:
    key = settings.MIDTRANS_SERVER_KEY
    if not key:
        raise MidtransError("Payment gateway server key is not configured.")
    return key


def create_snap_transaction(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Create a Snap checkout session.

    Args:
        payload: Snap request body (transaction, item and customer details).

    Returns:
        dict: ``token`` and ``redirect_url`` of the hosted checkout.
    """
    order_id = payload.get("transaction_details", {}).get("order_id")
    logger.info(f"Creating Midtrans Snap transaction for order {order_id}")

    try:
        response = requests.post(
            snap_url(),
            json=payload,
            auth=(_server_key(), ""),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=settings.MIDTRANS_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error while calling Midtrans: {e}")
        raise MidtransError(f"Payment gateway is unavailable: {e}") from e

    try:
        data = response.json()
    except ValueError:
        data = {}

    if not response.ok or not data.get("token"):
        messages = data.get("error_messages") or [f"Midtrans API error (HTTP {response.status_code})"]
        logger.error(f"Midtrans rejected order {order_id}: {messages}")
        raise MidtransError(", ".join(messages), messages)

    logger.info(f"Midtrans Snap token issued for order {order_id}")
    return {"token": data["token"], "redirect_url": data.get("redirect_url", "")}


def build_signature(order_id: str, status_code: str, gross_amount: str, server_key: str | None = None) -> str:
    """SHA-512 of order id, status code, gross amount and server key."""
    raw = f"{order_id}{status_code}{gross_amount}{server_key or settings.MIDTRANS_SERVER_KEY}"
    return hashlib.sha512(raw.encode("utf-8")).hexdigest()


def verify_signature(payload: dict[str, Any]) -> bool:
    signature = str(payload.get("signature_key") or "")
    if not signature or not settings.MIDTRANS_SERVER_KEY:
        return False
    expected = build_signature(
        str(payload.get("order_id", "")),
        str(payload.get("status_code", "")),
        str(payload.get("gross_amount", "")),
    )
    return hmac.compare_digest(expected, signature)


def resolve_transaction_status(transaction_status: str, fraud_status: str = "") -> str:
    """Map a gateway transaction status onto a booking status."""
    if transaction_status in SUCCESS_STATUSES:
        return BookingStatus.CHALLENGE if fraud_status == "challenge" else BookingStatus.SUCCESS
    if transaction_status in FAILED_STATUSES:
        return BookingStatus.FAILED
    return BookingStatus.PENDING


def describe_payment_method(payload: dict[str, Any]) -> str:
    """Human readable label for the payment type in a notification."""
    payment_type = payload.get("payment_type") or ""

    if payment_type == "bank_transfer":
        va_numbers = payload.get("va_numbers") or []
        bank = (va_numbers[0].get("bank") if va_numbers else "") or ""
        if not bank and payload.get("permata_va_number"):
            bank = "permata"
        return f"Virtual Account {bank.upper()}".strip()
    if payment_type == "credit_card":
        return "Credit Card"
    if payment_type == "qris":
        return "QRIS"
    if payment_type == "cstore":
        store = payload.get("store") or ""
        return store.upper() if store else "Retail Outlet"
    if payment_type == "echannel":
        return "Mandiri Bill Payment"
    if payment_type == "gopay":
        return "GoPay"
    return payment_type or "Midtrans"
