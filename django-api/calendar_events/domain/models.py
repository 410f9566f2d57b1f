"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in calendar_events/models.py (persistence layer).
"""

from collections.abc import Hashable
from dataclasses import dataclass, field, replace
from datetime import date, time
from typing import Self

from calendar_events.domain.value_objects import (
    DEFAULT_NOTIFICATION_TIME,
    EventId,
    RepeatInfo,
    SeriesId,
)


@dataclass(frozen=True)
class EventForm:
    """An event that has not been assigned an id yet."""

    title: str
    date: date
    start_time: time
    end_time: time
    description: str = ""
    location: str = ""
    category: str = ""
    repeat: RepeatInfo = field(default_factory=RepeatInfo.none)
    notification_time: int = DEFAULT_NOTIFICATION_TIME
    series_id: SeriesId | None = None

    def __post_init__(self) -> None:
        if self.start_time >= self.end_time:
            raise ValueError("start time must be before end time")

    @property
    def series_key(self) -> Hashable | None:
        """Key shared by every member of this event's series.

        Events stored before series ids existed fall back to matching on the
        repeat rule plus the fields every occurrence copies from its seed.
        """
        if not self.repeat.is_recurring:
            return None
        if self.series_id is not None:
            return ("series", self.series_id)
        return (
            "structural",
            self.repeat,
            self.title,
            self.start_time,
            self.end_time,
            self.description,
            self.location,
            self.category,
            self.notification_time,
        )


@dataclass(frozen=True, kw_only=True)
class Event(EventForm):
    """Domain representation of a persisted Event."""

    id: EventId

    @classmethod
    def from_form(cls, event_id: EventId, form: EventForm) -> Self:
        return cls(
            id=event_id,
            title=form.title,
            date=form.date,
            start_time=form.start_time,
            end_time=form.end_time,
            description=form.description,
            location=form.location,
            category=form.category,
            repeat=form.repeat,
            notification_time=form.notification_time,
            series_id=form.series_id,
        )

    def to_form(self) -> EventForm:
        return EventForm(
            title=self.title,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            description=self.description,
            location=self.location,
            category=self.category,
            repeat=self.repeat,
            notification_time=self.notification_time,
            series_id=self.series_id,
        )

    def detached(self) -> Self:
        """Return a copy that no longer belongs to any series."""
        return replace(self, repeat=RepeatInfo.none(), series_id=None)
