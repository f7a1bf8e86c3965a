from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AppSetting",
            fields=[
                (
                    "key",
                    models.CharField(
                        choices=[
                            ("discounts", "Role discounts"),
                            ("currency", "Currency conversion"),
                            ("flight_settings", "Flight price caps"),
                        ],
                        max_length=32,
                        primary_key=True,
                        serialize=False,
                        verbose_name="Key",
                    ),
                ),
                ("value", models.JSONField(blank=True, default=dict, verbose_name="Value")),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Application setting",
                "verbose_name_plural": "Application settings",
                "ordering": ["key"],
            },
        ),
    ]
