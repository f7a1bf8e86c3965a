import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Airport",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "iata_code",
                    models.CharField(
                        max_length=3,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator("^[A-Za-z]{3}$", "Airport code must be 3 letters.")
                        ],
                        verbose_name="IATA code",
                    ),
                ),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("city_name", models.CharField(blank=True, max_length=120, verbose_name="City")),
                ("country_name", models.CharField(blank=True, max_length=120, verbose_name="Country")),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Airport",
                "verbose_name_plural": "Airports",
                "ordering": ["iata_code"],
            },
        ),
        migrations.CreateModel(
            name="HotelChain",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120, unique=True, verbose_name="Name")),
                (
                    "brand_id",
                    models.CharField(
                        help_text="Brand identifier used by the search aggregator.",
                        max_length=32,
                        unique=True,
                        verbose_name="Aggregator brand id",
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Hotel chain",
                "verbose_name_plural": "Hotel chains",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ManagedAirline",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "code",
                    models.CharField(
                        max_length=3,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^[A-Za-z0-9]{2,3}$", "Airline code must be 2-3 characters."
                            )
                        ],
                        verbose_name="Airline code",
                    ),
                ),
                ("name", models.CharField(blank=True, max_length=120, verbose_name="Name")),
                ("baggage_info", models.CharField(blank=True, max_length=255, verbose_name="Baggage allowance")),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Managed airline",
                "verbose_name_plural": "Managed airlines",
                "ordering": ["code"],
            },
        ),
    ]
