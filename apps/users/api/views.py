"""API views for back-office user administration."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.notifications.tasks import send_registration_approved_email_task
from apps.users.models import CustomUser, RegistrationRequest
from apps.users.services import (
    RegistrationError,
    approve_registration_request,
    reject_registration_request,
)
from .permissions import IsPlatformAdmin
from .serializers import (
    AdminUserSerializer,
    RegistrationRequestAdminSerializer,
    RoleUpdateSerializer,
)


class UserAdminViewSet(viewsets.ReadOnlyModelViewSet):
    """
    User profiles for administrators.

    Endpoints:
    - GET /api/v1/admin/users/ - list profiles, newest first (?role=, ?search=)
    - GET /api/v1/admin/users/{id}/ - profile details
    - POST /api/v1/admin/users/{id}/set-role/ - change a user's role
    """

    queryset = CustomUser.objects.order_by("-created_at")
    serializer_class = AdminUserSerializer
    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        role = self.request.query_params.get("role")
        if role:
            qs = qs.filter(role=role)
        term = self.request.query_params.get("search")
        if term:
            qs = qs.filter(
                Q(email__icontains=term)
                | Q(first_name__icontains=term)
                | Q(last_name__icontains=term)
                | Q(phone__icontains=term)
            )
        return qs

    @action(detail=True, methods=["post"], url_path="set-role")
    def set_role(self, request, pk=None):  # type: ignore
        target = self.get_object()
        if target.pk == request.user.pk:
            return Response(
                {"detail": "You cannot change your own role."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target.role = serializer.validated_data["role"]
        target.save(update_fields=["role", "updated_at"])
        return Response(AdminUserSerializer(target).data)


class RegistrationRequestViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Review queue of access requests.

    - GET /api/v1/admin/registration-requests/?status=pending
    - POST /api/v1/admin/registration-requests/{id}/approve/
    - POST /api/v1/admin/registration-requests/{id}/reject/
    """

    queryset = RegistrationRequest.objects.select_related("reviewed_by").order_by("-created_at")
    serializer_class = RegistrationRequestAdminSerializer
    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        status_filter = self.request.query_params.get("status")
        if status_filter:
            qs = qs.filter(status=status_filter)
        return qs

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):  # type: ignore
        registration = self.get_object()
        try:
            user, token = approve_registration_request(registration, request.user)
        except RegistrationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        send_registration_approved_email_task.delay(user.pk, token.pk)
        return Response(
            {
                "request": RegistrationRequestAdminSerializer(registration).data,
                "user": AdminUserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):  # type: ignore
        registration = self.get_object()
        try:
            reject_registration_request(registration, request.user)
        except RegistrationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(RegistrationRequestAdminSerializer(registration).data)
