"""URL configuration for the SkyBook project.

The `urlpatterns` list routes URLs to views. It includes both Django admin
and application‑level routers provided by Django Rest Framework and each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/users/', include('apps.users.urls')),
    path('api/v1/catalog/', include(('apps.catalog.urls', 'catalog'), namespace='catalog')),
    path('api/v1/settings/', include(('apps.storefront.urls', 'storefront'), namespace='storefront')),
    path('api/v1/search/', include(('apps.search.urls', 'search'), namespace='search')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/payments/', include(('apps.payments.urls', 'payments'), namespace='payments')),
    path('api/v1/analytics/', include(('apps.analytics.urls', 'analytics'), namespace='analytics')),
    # Back-office API
    path('api/v1/admin/', include(('apps.users.api.urls', 'backoffice'), namespace='backoffice')),
    # API docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='docs'),
]
