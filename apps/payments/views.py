"""Payment gateway webhook."""

from __future__ import annotations

import json
import logging

from django.http import HttpResponseBadRequest, JsonResponse  # type: ignore
from django.views.decorators.csrf import csrf_exempt  # type: ignore
from django.views.decorators.http import require_http_methods  # type: ignore
from django_ratelimit.decorators import ratelimit  # type: ignore

from .services import handle_notification

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@ratelimit(key="ip", rate="120/m", method="POST")
def midtrans_webhook(request):
    """Receive Midtrans payment notifications.

    Business outcomes are always acknowledged with HTTP 200 so the gateway
    stops retrying; only malformed bodies are rejected.
    """
    if getattr(request, "limited", False):
        logger.warning(f"Rate limit exceeded on payment webhook for IP: {request.META.get('REMOTE_ADDR')}")
        return JsonResponse({"error": "Rate limit exceeded"}, status=429)

    if request.method == "GET":
        return JsonResponse({"status": "active", "message": "Payment notification endpoint is running"})

    try:
        payload = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.error("Invalid JSON in payment notification")
        return HttpResponseBadRequest("Invalid JSON")

    if not isinstance(payload, dict):
        return HttpResponseBadRequest("Invalid payload")

    return JsonResponse(handle_notification(payload))
