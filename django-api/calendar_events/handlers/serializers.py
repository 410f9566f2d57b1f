"""Serializers for transforming domain models to and from the API's JSON shape.

Field names follow the browser client (camelCase). The same serializers
decode responses in the HTTP gateway, so both ends share one wire format.
"""

from typing import Any

from rest_framework import serializers

from calendar_events.domain import (
    Event,
    EventForm,
    EventId,
    InvalidRecurrenceError,
    RepeatInfo,
    RepeatType,
    SeriesId,
)
from calendar_events.domain.value_objects import DEFAULT_NOTIFICATION_TIME, NOTIFICATION_CHOICES

TIME_FORMAT = "%H:%M"


class RepeatSerializer(serializers.Serializer):
    """Serializer for the RepeatInfo value object."""

    type = serializers.ChoiceField(choices=[t.value for t in RepeatType], default=RepeatType.NONE.value)
    interval = serializers.IntegerField(min_value=0, default=0)
    endDate = serializers.DateField(source="end_date", allow_null=True, default=None)


class EventSerializer(serializers.Serializer):
    """Serializer for Event and EventForm domain models."""

    id = serializers.UUIDField(required=False)
    title = serializers.CharField(max_length=255)
    date = serializers.DateField()
    startTime = serializers.TimeField(source="start_time", format=TIME_FORMAT, input_formats=[TIME_FORMAT, "iso-8601"])
    endTime = serializers.TimeField(source="end_time", format=TIME_FORMAT, input_formats=[TIME_FORMAT, "iso-8601"])
    description = serializers.CharField(allow_blank=True, default="")
    location = serializers.CharField(allow_blank=True, max_length=255, default="")
    category = serializers.CharField(allow_blank=True, max_length=100, default="")
    repeat = RepeatSerializer(required=False)
    notificationTime = serializers.ChoiceField(
        source="notification_time",
        choices=NOTIFICATION_CHOICES,
        default=DEFAULT_NOTIFICATION_TIME,
    )
    seriesId = serializers.UUIDField(source="series_id", allow_null=True, default=None)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError({"endTime": "End time must be after start time."})
        repeat = _repeat_from_data(attrs.get("repeat"))
        try:
            repeat.validate(attrs["date"])
        except InvalidRecurrenceError as exc:
            raise serializers.ValidationError({"repeat": exc.message}) from exc
        attrs["repeat"] = repeat
        return attrs


class EventBatchSerializer(serializers.Serializer):
    """Payload of the batch create/update endpoints."""

    events = EventSerializer(many=True, allow_empty=False)


class EventIdsSerializer(serializers.Serializer):
    """Payload of the batch delete endpoint."""

    eventIds = serializers.ListField(source="event_ids", child=serializers.UUIDField(), allow_empty=False)


def _repeat_from_data(data: Any) -> RepeatInfo:
    if isinstance(data, RepeatInfo):
        return data
    if not data:
        return RepeatInfo.none()
    return RepeatInfo(
        type=data.get("type", RepeatType.NONE),
        interval=data.get("interval", 0),
        end_date=data.get("end_date"),
    )


def form_from_data(data: dict[str, Any]) -> EventForm:
    """Build an EventForm from a serializer's ``validated_data``."""
    series_id = data.get("series_id")
    return EventForm(
        title=data["title"],
        date=data["date"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        description=data.get("description", ""),
        location=data.get("location", ""),
        category=data.get("category", ""),
        repeat=_repeat_from_data(data.get("repeat")),
        notification_time=data.get("notification_time", DEFAULT_NOTIFICATION_TIME),
        series_id=SeriesId(value=series_id) if series_id else None,
    )


def event_from_data(data: dict[str, Any], event_id: EventId | None = None) -> Event:
    """Build an Event from ``validated_data``; ``event_id`` wins over the payload's id."""
    if event_id is None:
        if data.get("id") is None:
            raise serializers.ValidationError({"id": "This field is required."})
        event_id = EventId(value=data["id"])
    return Event.from_form(event_id, form_from_data(data))
