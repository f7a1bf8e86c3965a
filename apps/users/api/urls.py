"""URL routing for the back-office API (namespace: backoffice)."""

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import RegistrationRequestViewSet, UserAdminViewSet

router = DefaultRouter()

router.register(r"users", UserAdminViewSet, basename="admin-user")
router.register(r"registration-requests", RegistrationRequestViewSet, basename="registration-request")

urlpatterns = [
    path("", include(router.urls)),
]
