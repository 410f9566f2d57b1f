"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Self
from uuid import UUID, uuid4

from calendar_events.domain.errors import InvalidRecurrenceError


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SeriesId:
    """Identifier shared by every occurrence expanded from one seed."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


class RepeatType(StrEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


NOTIFICATION_CHOICES = (1, 10, 60, 120, 1440)
DEFAULT_NOTIFICATION_TIME = 10


@dataclass(frozen=True)
class RepeatInfo:
    """Repeat rule attached to an event.

    ``RepeatInfo.none()`` (type none, interval 0) is the canonical
    "not recurring" value. A rule with ``interval < 1`` can be built so a
    form can hold it, but ``validate`` rejects it.
    """

    type: RepeatType = RepeatType.NONE
    interval: int = 0
    end_date: date | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, RepeatType):
            # Raises ValueError for unknown names.
            object.__setattr__(self, "type", RepeatType(self.type))

    @classmethod
    def none(cls) -> Self:
        return cls(type=RepeatType.NONE, interval=0)

    @property
    def is_recurring(self) -> bool:
        return self.type is not RepeatType.NONE

    def validate(self, start: date) -> Self:
        """Return the rule if it can be expanded from ``start``.

        Raises:
            InvalidRecurrenceError: If the interval is not positive or the
                end date falls before ``start``.
        """
        if not self.is_recurring:
            return self
        if isinstance(self.interval, bool) or not isinstance(self.interval, int) or self.interval < 1:
            raise InvalidRecurrenceError("interval must be a positive integer")
        if self.end_date is not None and self.end_date < start:
            raise InvalidRecurrenceError("end date precedes start")
        return self
