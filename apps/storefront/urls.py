"""URL declarations for application settings (namespace: storefront)."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import AppSettingDetailView, AppSettingListView

urlpatterns = [
    path('', AppSettingListView.as_view(), name='setting-list'),
    path('<str:key>/', AppSettingDetailView.as_view(), name='setting-detail'),
]
