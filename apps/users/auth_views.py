"""Views for authentication flows (access request, login, token refresh, password reset)."""

from __future__ import annotations

from django.utils.decorators import method_decorator  # type: ignore
from django_ratelimit.decorators import ratelimit  # type: ignore
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from apps.notifications.tasks import send_registration_received_email_task
from .auth_serializers import (
    LoginSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    RegistrationRequestSerializer,
)
from .serializers import UserSerializer


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


@method_decorator(ratelimit(key="ip", rate="5/h", method="POST", block=True), name="post")
class RegistrationRequestView(APIView):
    """Public access request; an administrator approves it later."""

    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = RegistrationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = serializer.save()
        send_registration_received_email_task.delay(registration.pk)
        return Response(serializer.data, status=status.HTTP_201_CREATED)


@method_decorator(ratelimit(key="ip", rate="20/m", method="POST", block=True), name="post")
class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)


class PasswordResetRequestView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.issue_code()
        return Response(
            {"detail": "If the account exists, a reset code has been sent to its email."},
            status=status.HTTP_202_ACCEPTED,
        )


class PasswordResetConfirmView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"detail": "Password updated."}, status=status.HTTP_200_OK)
