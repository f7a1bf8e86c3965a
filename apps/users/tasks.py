"""Celery tasks for the users domain."""

from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from .models import PasswordResetToken

logger = logging.getLogger(__name__)


@shared_task(name="users.purge_stale_reset_tokens")
def purge_stale_reset_tokens(days: int = 7) -> dict[str, int]:
    """
    Delete reset and invite tokens that were used or expired long ago.

    Runs nightly through Celery Beat.
    """
    cutoff = timezone.now() - timedelta(days=days)
    deleted, _ = PasswordResetToken.objects.filter(
        Q(is_used=True, created_at__lt=cutoff) | Q(expires_at__lt=cutoff)
    ).delete()

    if deleted:
        logger.info(f"Purged {deleted} stale password reset tokens")
    return {"deleted": deleted}
