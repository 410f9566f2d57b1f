"""Store interfaces (repository pattern).

Gateways must be swappable and return domain models. Each method is one
atomic call against the remote store: a batch either succeeds as a whole or
raises a single error.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from calendar_events.domain import Event, EventForm, EventId


class EventGateway(ABC):
    """Interface to the remote event store."""

    @abstractmethod
    def fetch_events(self) -> list[Event]:
        """Return all events ordered by date and start time."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event:
        """Return one event.

        Raises:
            EventNotFoundError: If no event has ``event_id``.
        """
        ...

    @abstractmethod
    def create_event(self, form: EventForm) -> Event:
        """Persist one event; the store assigns its id."""
        ...

    @abstractmethod
    def create_events(self, forms: Sequence[EventForm]) -> list[Event]:
        """Persist a batch of events in one request."""
        ...

    @abstractmethod
    def update_event(self, event: Event) -> Event:
        """Replace a stored event.

        Raises:
            EventNotFoundError: If no event has ``event.id``.
        """
        ...

    @abstractmethod
    def update_events(self, events: Sequence[Event]) -> list[Event]:
        """Replace a batch of stored events.

        Raises:
            EventNotFoundError: If any id is absent; nothing is updated.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> None:
        """Remove one event.

        Raises:
            EventNotFoundError: If no event has ``event_id``.
        """
        ...

    @abstractmethod
    def delete_events(self, event_ids: Sequence[EventId]) -> None:
        """Remove a batch of events.

        Raises:
            EventNotFoundError: If any id is absent; nothing is deleted.
        """
        ...
