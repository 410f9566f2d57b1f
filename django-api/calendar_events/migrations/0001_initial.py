import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("description", models.TextField(blank=True, default="")),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                (
                    "repeat_type",
                    models.CharField(
                        choices=[
                            ("none", "None"),
                            ("daily", "Daily"),
                            ("weekly", "Weekly"),
                            ("monthly", "Monthly"),
                            ("yearly", "Yearly"),
                        ],
                        default="none",
                        max_length=10,
                    ),
                ),
                ("repeat_interval", models.PositiveIntegerField(default=0)),
                ("repeat_end_date", models.DateField(blank=True, null=True)),
                ("series_id", models.UUIDField(blank=True, null=True)),
                (
                    "notification_time",
                    models.PositiveIntegerField(
                        choices=[
                            (1, "1 min"),
                            (10, "10 min"),
                            (60, "60 min"),
                            (120, "120 min"),
                            (1440, "1440 min"),
                        ],
                        default=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["date", "start_time"],
                "indexes": [
                    models.Index(fields=["date", "start_time"], name="calendar_ev_date_3f9b1c_idx"),
                    models.Index(fields=["series_id"], name="calendar_ev_series__8a2d4e_idx"),
                ],
            },
        ),
    ]
