import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("skybook")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Unpaid bookings whose payment window closed become Failed
    "expire-unpaid-bookings": {
        "task": "bookings.expire_unpaid_bookings",
        "schedule": crontab(minute="*/10"),
        "options": {"expires": 300},
    },
    # Used password reset and invite tokens are purged nightly
    "purge-stale-reset-tokens": {
        "task": "users.purge_stale_reset_tokens",
        "schedule": crontab(minute=30, hour=3),
    },
}

app.conf.timezone = "Asia/Jakarta"
