from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PaymentNotification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_id", models.CharField(db_index=True, max_length=100)),
                ("transaction_status", models.CharField(blank=True, max_length=32)),
                ("fraud_status", models.CharField(blank=True, max_length=32)),
                ("payment_type", models.CharField(blank=True, max_length=32)),
                ("gross_amount", models.CharField(blank=True, max_length=32)),
                (
                    "outcome",
                    models.CharField(
                        choices=[
                            ("processed", "Processed"),
                            ("invalid_signature", "Ignored: invalid signature"),
                            ("unknown_order", "Ignored: unknown order"),
                        ],
                        max_length=32,
                    ),
                ),
                ("booking_reference", models.CharField(blank=True, max_length=16)),
                ("resulting_status", models.CharField(blank=True, max_length=16)),
                ("payload", models.JSONField(default=dict)),
                ("received_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Payment notification",
                "verbose_name_plural": "Payment notifications",
                "ordering": ["-received_at"],
            },
        ),
    ]
