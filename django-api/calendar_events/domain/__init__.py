from calendar_events.domain.errors import (
    DomainError,
    ErrorCode,
    EventNotFoundError,
    GatewayError,
    InvalidEventError,
    InvalidEventIdError,
    InvalidRecurrenceError,
)
from calendar_events.domain.models import Event, EventForm
from calendar_events.domain.value_objects import EventId, RepeatInfo, RepeatType, SeriesId

__all__ = [
    "Event",
    "EventForm",
    "EventId",
    "SeriesId",
    "RepeatInfo",
    "RepeatType",
    "DomainError",
    "ErrorCode",
    "EventNotFoundError",
    "GatewayError",
    "InvalidEventError",
    "InvalidEventIdError",
    "InvalidRecurrenceError",
]
