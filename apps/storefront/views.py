"""Back-office endpoints for application settings."""

from __future__ import annotations

from django.http import Http404  # type: ignore
from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import IsPlatformAdmin
from .models import AppSetting
from .pricing import get_setting
from .serializers import VALUE_SERIALIZERS, to_json_value


def _payload(key: str) -> dict:
    setting = AppSetting.objects.filter(key=key).first()
    return {
        "key": key,
        "value": get_setting(key),
        "updated_at": setting.updated_at if setting else None,
    }


class AppSettingListView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def get(self, request):  # type: ignore
        return Response([_payload(key) for key in AppSetting.Key.values])


class AppSettingDetailView(APIView):
    """GET or PUT a single setting; the value is validated per key."""

    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def _check_key(self, key: str) -> None:
        if key not in VALUE_SERIALIZERS:
            raise Http404

    def get(self, request, key: str):  # type: ignore
        self._check_key(key)
        return Response(_payload(key))

    def put(self, request, key: str):  # type: ignore
        self._check_key(key)
        serializer = VALUE_SERIALIZERS[key](data=request.data)
        serializer.is_valid(raise_exception=True)
        AppSetting.objects.update_or_create(
            key=key,
            defaults={"value": to_json_value(serializer.validated_data)},
        )
        return Response(_payload(key))
