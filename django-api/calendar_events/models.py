"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

from calendar_events.domain.value_objects import (
    DEFAULT_NOTIFICATION_TIME,
    NOTIFICATION_CHOICES,
    RepeatType,
)


class Event(models.Model):
    """Persistence model for calendar events."""

    REPEAT_CHOICES = [(repeat_type.value, repeat_type.name.title()) for repeat_type in RepeatType]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="")
    repeat_type = models.CharField(
        max_length=10, choices=REPEAT_CHOICES, default=RepeatType.NONE.value
    )
    repeat_interval = models.PositiveIntegerField(default=0)
    repeat_end_date = models.DateField(blank=True, null=True)
    series_id = models.UUIDField(blank=True, null=True)
    notification_time = models.PositiveIntegerField(
        choices=[(minutes, f"{minutes} min") for minutes in NOTIFICATION_CHOICES],
        default=DEFAULT_NOTIFICATION_TIME,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "start_time"]
        indexes = [
            models.Index(fields=["date", "start_time"], name="calendar_ev_date_3f9b1c_idx"),
            models.Index(fields=["series_id"], name="calendar_ev_series__8a2d4e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.date}"
