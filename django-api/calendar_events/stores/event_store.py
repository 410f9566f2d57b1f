"""Client-side snapshot of every event the UI can see.

The store is only ever replaced wholesale with the result of a successful
fetch, so readers always see the last known-good state.
"""

from collections.abc import Iterable

from calendar_events.domain import Event, EventId
from calendar_events.domain.queries import series_members, sort_events


class EventStore:
    """Single-writer cache of the remote event list."""

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events: tuple[Event, ...] = tuple(sort_events(events))
        self._version = 0

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    @property
    def version(self) -> int:
        """Number of times the snapshot has been replaced."""
        return self._version

    def replace(self, events: Iterable[Event]) -> None:
        self._events = tuple(sort_events(events))
        self._version += 1

    def get(self, event_id: EventId) -> Event | None:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def series_of(self, event: Event) -> list[Event]:
        """Return ``event``'s series as currently stored, including ``event``."""
        return series_members(self._events, event)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(self._events)
