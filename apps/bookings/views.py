"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.notifications.tasks import (
    send_eticket_email_task,
    send_flight_booking_email_task,
    send_hotel_booking_email_task,
)
from apps.payments.midtrans import MidtransError
from apps.payments.services import PaymentError, PaymentForbidden, create_payment_session
from apps.users.api.permissions import IsPlatformAdmin, is_platform_admin
from .models import FlightBooking, HotelBooking
from .serializers import (
    ETicketSerializer,
    FlightBookingCreateSerializer,
    FlightBookingSerializer,
    HotelBookingCreateSerializer,
    HotelBookingSerializer,
    PassengerSerializer,
    PaymentRequestSerializer,
    StatusUpdateSerializer,
)
from .services import (
    BookingError,
    attach_eticket,
    create_flight_booking,
    create_hotel_booking,
    delete_passenger,
    replace_passengers,
    search_bookings,
    set_status,
)


class BookingViewSetMixin(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Customers see their own bookings; administrators see everything."""

    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset().select_related("user")
        if not is_platform_admin(self.request.user):
            qs = qs.filter(user=self.request.user)
        status_filter = self.request.query_params.get("status")
        if status_filter:
            qs = qs.filter(status=status_filter)
        return search_bookings(qs, self.request.query_params.get("search", ""))

    def perform_booking(self, data):  # type: ignore
        raise NotImplementedError

    def queue_booking_email(self, booking) -> None:
        raise NotImplementedError

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = self.perform_booking(serializer.validated_data)
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        self.queue_booking_email(booking)
        read_serializer = self.read_serializer_class(booking, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        serializer = PaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            session = create_payment_session(
                booking,
                request.user,
                serializer.validated_data.get("customer_details"),
            )
        except PaymentForbidden as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except PaymentError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except MidtransError as exc:
            return Response(
                {"detail": str(exc), "errors": exc.messages},
                status=status.HTTP_502_BAD_GATEWAY,
            )
        return Response(session)

    @action(
        detail=True,
        methods=["post"],
        url_path="set-status",
        permission_classes=[permissions.IsAuthenticated, IsPlatformAdmin],
    )
    def update_status(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        set_status(booking, serializer.validated_data["status"])
        return Response(self.read_serializer_class(booking).data)


class FlightBookingViewSet(BookingViewSetMixin):
    """
    Flight bookings.

    - POST /api/v1/bookings/flights/ - book a cached offer
    - GET/PUT /api/v1/bookings/flights/{id}/passengers/ - passenger manifest
    - DELETE /api/v1/bookings/flights/{id}/passengers/{passenger_id}/
    - POST /api/v1/bookings/flights/{id}/pay/ - start hosted checkout
    - POST /api/v1/bookings/flights/{id}/issue-eticket/ - admin only
    """

    queryset = FlightBooking.objects.prefetch_related("passengers")
    read_serializer_class = FlightBookingSerializer

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return FlightBookingCreateSerializer
        return FlightBookingSerializer

    def perform_booking(self, data):  # type: ignore
        return create_flight_booking(
            self.request.user,
            offer_id=data["offer_id"],
            passengers_count=data["passengers_count"],
            passengers=data["passengers"],
        )

    def queue_booking_email(self, booking) -> None:
        send_flight_booking_email_task.delay(str(booking.pk))

    @action(detail=True, methods=["get", "put"])
    def passengers(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        if request.method == "GET":
            return Response(PassengerSerializer(booking.passengers.all(), many=True).data)

        if booking.user_id != request.user.pk:
            return Response({"detail": "Only the booking owner can edit passengers."}, status=status.HTTP_403_FORBIDDEN)
        serializer = PassengerSerializer(data=request.data, many=True)
        serializer.is_valid(raise_exception=True)
        try:
            replace_passengers(booking, serializer.validated_data)
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(PassengerSerializer(booking.passengers.all(), many=True).data)

    @action(detail=True, methods=["delete"], url_path=r"passengers/(?P<passenger_id>\d+)")
    def remove_passenger(self, request, pk=None, passenger_id=None):  # type: ignore
        booking = self.get_object()
        if booking.user_id != request.user.pk:
            return Response({"detail": "Only the booking owner can edit passengers."}, status=status.HTTP_403_FORBIDDEN)
        try:
            delete_passenger(booking, int(passenger_id))
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(
        detail=True,
        methods=["post"],
        url_path="issue-eticket",
        permission_classes=[permissions.IsAuthenticated, IsPlatformAdmin],
    )
    def issue_eticket(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        serializer = ETicketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            attach_eticket(booking, serializer.validated_data["eticket_url"])
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        send_eticket_email_task.delay(str(booking.pk))
        return Response(FlightBookingSerializer(booking).data)


class HotelBookingViewSet(BookingViewSetMixin):
    queryset = HotelBooking.objects.prefetch_related("guests")
    read_serializer_class = HotelBookingSerializer

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return HotelBookingCreateSerializer
        return HotelBookingSerializer

    def perform_booking(self, data):  # type: ignore
        return create_hotel_booking(
            self.request.user,
            offer_id=data["offer_id"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            rooms_count=data["rooms_count"],
            adults_count=data["adults_count"],
            guests=data["guests"],
        )

    def queue_booking_email(self, booking) -> None:
        send_hotel_booking_email_task.delay(str(booking.pk))
