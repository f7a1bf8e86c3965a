"""Tests for periodic user maintenance tasks."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.users.models import PasswordResetToken, User
from apps.users.tasks import purge_stale_reset_tokens


@pytest.mark.django_db
def test_purge_stale_reset_tokens():
    user = User.objects.create_user(email="reset@example.com")
    now = timezone.now()
    old_used = PasswordResetToken.objects.create(user=user, code="111111", expires_at=now, is_used=True)
    long_expired = PasswordResetToken.objects.create(user=user, code="222222", expires_at=now - timedelta(days=10))
    active = PasswordResetToken.objects.create(user=user, code="333333", expires_at=now + timedelta(minutes=15))
    PasswordResetToken.objects.filter(pk=old_used.pk).update(created_at=now - timedelta(days=8))

    assert purge_stale_reset_tokens() == {"deleted": 2}
    assert list(PasswordResetToken.objects.values_list("pk", flat=True)) == [active.pk]
    assert not PasswordResetToken.objects.filter(pk=long_expired.pk).exists()
