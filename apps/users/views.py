"""User API views."""

from __future__ import annotations

from rest_framework import generics, permissions  # type: ignore

from .serializers import UserSerializer


class MeView(generics.RetrieveUpdateAPIView):
    """Read or update the signed-in user's profile.

    Email and role are read-only here; roles are changed by administrators
    through the back-office API.
    """

    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):  # type: ignore
        return self.request.user
