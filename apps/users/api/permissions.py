"""Permission classes for the back-office API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_platform_admin(user) -> bool:
    """True for signed-in administrators (role ``admin`` or Django superuser)."""
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


class IsPlatformAdmin(permissions.BasePermission):
    """
    Permission class that only allows platform administrators.
    """

    message = "Administrator access required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_platform_admin(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Anyone may read, only administrators may write.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_platform_admin(request.user)
