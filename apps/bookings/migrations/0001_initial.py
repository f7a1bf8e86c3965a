import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


BOOKING_STATUS_CHOICES = [
    ("Pending", "Awaiting payment"),
    ("Success", "Paid"),
    ("Challenge", "Under fraud review"),
    ("Failed", "Failed"),
    ("Cancelled", "Cancelled"),
]

TITLE_CHOICES = [
    ("Mr", "Mr"),
    ("Mrs", "Mrs"),
    ("Ms", "Ms"),
    ("Mstr", "Master"),
    ("Miss", "Miss"),
]


def booking_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("booking_reference", models.CharField(editable=False, max_length=16, unique=True)),
        ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
        ("currency", models.CharField(default="IDR", max_length=3)),
        (
            "status",
            models.CharField(choices=BOOKING_STATUS_CHOICES, db_index=True, default="Pending", max_length=16),
        ),
        ("midtrans_token", models.CharField(blank=True, max_length=255)),
        ("payment_redirect_url", models.URLField(blank=True, max_length=500)),
        ("payment_expiry", models.DateTimeField(blank=True, null=True)),
        ("payment_order_id", models.CharField(blank=True, db_index=True, max_length=100)),
        (
            "payment_method",
            models.CharField(
                blank=True,
                help_text="Human readable payment method reported by the gateway.",
                max_length=64,
            ),
        ),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="FlightBooking",
            fields=booking_fields()
            + [
                ("flight_data", models.JSONField(default=dict, verbose_name="Offer snapshot")),
                (
                    "trip_type",
                    models.CharField(
                        choices=[("one-way", "One way"), ("round-trip", "Round trip")],
                        default="one-way",
                        max_length=16,
                    ),
                ),
                ("passengers_count", models.PositiveSmallIntegerField(default=1)),
                ("eticket_url", models.URLField(blank=True, max_length=500)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="flightbookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Flight booking",
                "verbose_name_plural": "Flight bookings",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="HotelBooking",
            fields=booking_fields()
            + [
                ("hotel_id", models.CharField(max_length=255)),
                ("hotel_name", models.CharField(max_length=255)),
                ("hotel_address", models.CharField(blank=True, max_length=255)),
                ("hotel_data", models.JSONField(blank=True, default=dict, verbose_name="Offer snapshot")),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("nights_count", models.PositiveSmallIntegerField(default=1)),
                ("rooms_count", models.PositiveSmallIntegerField(default=1)),
                ("adults_count", models.PositiveSmallIntegerField(default=1)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="hotelbookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Hotel booking",
                "verbose_name_plural": "Hotel bookings",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="BookingPassenger",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(choices=TITLE_CHOICES, max_length=8)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("date_of_birth", models.DateField()),
                ("nationality", models.CharField(max_length=64)),
                ("passport_number", models.CharField(max_length=32)),
                ("passport_expiry", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="passengers",
                        to="bookings.flightbooking",
                    ),
                ),
            ],
            options={
                "verbose_name": "Passenger",
                "verbose_name_plural": "Passengers",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="HotelBookingGuest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(choices=TITLE_CHOICES, default="Mr", max_length=8)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("date_of_birth", models.DateField(blank=True, null=True)),
                ("nationality", models.CharField(blank=True, max_length=64)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="guests",
                        to="bookings.hotelbooking",
                    ),
                ),
            ],
            options={
                "verbose_name": "Hotel guest",
                "verbose_name_plural": "Hotel guests",
                "ordering": ["id"],
            },
        ),
    ]
