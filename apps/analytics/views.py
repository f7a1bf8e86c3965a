"""API views for analytics.

Aggregated booking metrics: platform-wide for administrators, personal
for everyone else.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework.views import APIView  # type: ignore
from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.models import BookingStatus, FlightBooking, HotelBooking
from apps.users.api.permissions import is_platform_admin
from apps.users.models import CustomUser, RegistrationRequest
from django.db import models  # type: ignore


def _status_counts(queryset) -> dict[str, int]:
    counts = {value: 0 for value in BookingStatus.values}
    for row in queryset.values('status').annotate(total=models.Count('id')):
        counts[row['status']] = row['total']
    counts['total'] = sum(counts.values())
    return counts


def _revenue(*querysets) -> dict[str, Decimal]:
    """Sum of paid bookings per currency."""
    totals: dict[str, Decimal] = {}
    for queryset in querysets:
        paid = queryset.filter(status=BookingStatus.SUCCESS)
        for row in paid.values('currency').annotate(total=models.Sum('total_price')):
            totals[row['currency']] = totals.get(row['currency'], Decimal('0')) + row['total']
    return totals


class OverviewAnalyticsView(APIView):
    """Return general statistics for the platform or a specific user."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        user = request.user
        flight_qs = FlightBooking.objects.all()
        hotel_qs = HotelBooking.objects.all()
        is_admin = is_platform_admin(user)
        if not is_admin:
            flight_qs = flight_qs.filter(user=user)
            hotel_qs = hotel_qs.filter(user=user)

        revenue = _revenue(flight_qs, hotel_qs)
        data = {
            'scope': 'platform' if is_admin else 'personal',
            'flight_bookings': _status_counts(flight_qs),
            'hotel_bookings': _status_counts(hotel_qs),
        }
        if is_admin:
            data['users'] = CustomUser.objects.count()
            data['pending_registration_requests'] = RegistrationRequest.objects.filter(
                status=RegistrationRequest.Status.PENDING
            ).count()
            data['revenue'] = revenue
        else:
            data['spend'] = revenue
        return Response(data)
