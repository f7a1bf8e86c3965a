"""Account provisioning for approved registration requests."""

from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from urllib.parse import urlencode

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from .models import CustomUser, PasswordResetToken, RegistrationRequest

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Raised when a registration request cannot be reviewed."""


def issue_invite_token(user: CustomUser) -> PasswordResetToken:
    """Create a long-lived activation token, replacing any unused one."""
    PasswordResetToken.objects.filter(user=user, is_used=False).update(is_used=True)
    return PasswordResetToken.objects.create(
        user=user,
        code=secrets.token_urlsafe(32),
        purpose=PasswordResetToken.Purpose.INVITE,
        expires_at=timezone.now() + timedelta(hours=settings.INVITE_TOKEN_TTL_HOURS),
        attempts_left=3,
    )


def approve_registration_request(
    registration: RegistrationRequest,
    reviewer: CustomUser,
) -> tuple[CustomUser, PasswordResetToken]:
    """Create the account for a pending request and issue its activation token.

    The account starts with an unusable password; the customer sets one
    through the activation link.
    """
    if registration.status != RegistrationRequest.Status.PENDING:
        raise RegistrationError("Only pending requests can be approved.")
    if CustomUser.objects.filter(email__iexact=registration.email).exists():
        raise RegistrationError("An account with this email already exists.")

    phone = CustomUser.objects.normalize_phone(registration.phone) if registration.phone else None
    if phone and CustomUser.objects.filter(phone=phone).exists():
        phone = None

    with transaction.atomic():
        user = CustomUser.objects.create_user(
            email=registration.email,
            password=None,
            first_name=registration.first_name,
            last_name=registration.last_name,
            phone=phone,
            role=registration.role,
        )
        token = issue_invite_token(user)
        registration.mark_reviewed(RegistrationRequest.Status.APPROVED, reviewer)

    logger.info(f"Registration request {registration.pk} approved by {reviewer.pk}, user {user.pk} created")
    return user, token


def reject_registration_request(registration: RegistrationRequest, reviewer: CustomUser) -> None:
    if registration.status != RegistrationRequest.Status.PENDING:
        raise RegistrationError("Only pending requests can be rejected.")
    registration.mark_reviewed(RegistrationRequest.Status.REJECTED, reviewer)
    logger.info(f"Registration request {registration.pk} rejected by {reviewer.pk}")


def build_activation_link(user: CustomUser, token: PasswordResetToken) -> str:
    query = urlencode({"email": user.email, "code": token.code})
    return f"{settings.APP_URL}/reset-password?{query}"
