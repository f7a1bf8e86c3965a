"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import expire_unpaid_bookings as expire_unpaid

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (run by Celery Beat)
# ============================================================================

@shared_task(name="bookings.expire_unpaid_bookings")
def expire_unpaid_bookings() -> dict[str, int]:
    """
    Fail bookings that were never paid.

    Pending flight and hotel bookings older than BOOKING_UNPAID_TTL_HOURS
    whose payment session has expired (or never started) become Failed.

    Returns:
        dict: {"expired": number of bookings marked Failed}
    """
    expired = expire_unpaid()
    if expired:
        logger.info(f"Marked {expired} unpaid bookings as Failed")
    return {"expired": expired}
