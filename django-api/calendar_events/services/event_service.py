"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (gateways and the snapshot store)
- Validate domain invariants
- Perform orchestration and error mapping
- Return outcomes the UI can act on

Every mutation is sent to the gateway, and only after it succeeds is the
store refreshed with a full fetch. On failure the store keeps its last
good snapshot and the error comes back in the outcome; nothing is retried.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from calendar_events.domain import (
    DomainError,
    Event,
    EventForm,
    EventId,
    InvalidEventError,
    InvalidRecurrenceError,
    SeriesId,
)
from calendar_events.domain.recurrence import (
    DEFAULT_HORIZON_YEARS,
    DEFAULT_MAX_OCCURRENCES,
    expand,
)
from calendar_events.stores import EventGateway, EventStore

logger = logging.getLogger(__name__)

SERIES_FIELDS = frozenset(
    {
        "title",
        "start_time",
        "end_time",
        "description",
        "location",
        "category",
        "notification_time",
    }
)


class NoticeStatus(StrEnum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """User-visible status message; how it is shown is up to the UI."""

    title: str
    status: NoticeStatus


@dataclass(frozen=True)
class Outcome:
    """Completion signal returned by every service operation."""

    ok: bool
    notice: Notice
    error: DomainError | None = None
    refreshed: bool = True

    @classmethod
    def success(cls, title: str, status: NoticeStatus = NoticeStatus.SUCCESS, refreshed: bool = True) -> "Outcome":
        return cls(ok=True, notice=Notice(title, status), refreshed=refreshed)

    @classmethod
    def failure(cls, title: str, error: DomainError) -> "Outcome":
        return cls(ok=False, notice=Notice(title, NoticeStatus.ERROR), error=error, refreshed=False)


class EventService:
    """Orchestrates create, update and delete requests for single events and series."""

    def __init__(
        self,
        gateway: EventGateway,
        store: EventStore,
        on_save: Callable[[], Any] | None = None,
        horizon_years: int = DEFAULT_HORIZON_YEARS,
        max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._on_save = on_save
        self._horizon_years = horizon_years
        self._max_occurrences = max_occurrences

    @classmethod
    def from_settings(cls, gateway: EventGateway, store: EventStore, **kwargs: Any) -> "EventService":
        from calendar_events.conf import get_setting

        kwargs.setdefault("horizon_years", get_setting("RECURRENCE_HORIZON_YEARS"))
        kwargs.setdefault("max_occurrences", get_setting("MAX_OCCURRENCES"))
        return cls(gateway, store, **kwargs)

    @property
    def events(self) -> tuple[Event, ...]:
        """Current snapshot for the UI."""
        return self._store.events

    def fetch_events(self) -> Outcome:
        """Replace the store with the remote event list."""
        try:
            events = self._gateway.fetch_events()
        except DomainError as exc:
            logger.error("Error fetching events: %s", exc)
            return Outcome.failure("Failed to load events", exc)
        self._store.replace(events)
        logger.debug("Store refreshed with %d events (version %d)", len(events), self._store.version)
        return Outcome.success("Events refreshed", NoticeStatus.INFO)

    def load(self) -> Outcome:
        outcome = self.fetch_events()
        if not outcome.ok:
            return outcome
        return Outcome.success("Events loaded", NoticeStatus.INFO)

    def save_event(self, data: Event | EventForm) -> Outcome:
        """Create a new event, or update exactly one existing event.

        Updating a single event always detaches it from its series, whether
        or not any of its other fields changed.
        """
        if isinstance(data, Event):
            return self._mutate(
                lambda: self._gateway.update_event(data.detached()),
                success="Event updated",
                failure="Failed to save event",
                notify_save=True,
            )
        if data.repeat.is_recurring:
            return self.save_repeating_events(data)
        return self._mutate(
            lambda: self._gateway.create_event(data),
            success="Event added",
            failure="Failed to save event",
            notify_save=True,
        )

    def save_repeating_events(self, seed: EventForm) -> Outcome:
        """Expand ``seed`` and create every occurrence in one batch request."""
        if isinstance(seed, Event):
            seed = seed.to_form()
        try:
            seed.repeat.validate(seed.date)
        except InvalidRecurrenceError as exc:
            logger.warning("Rejected repeating event %r: %s", seed.title, exc.message)
            return Outcome.failure(exc.message, exc)

        if seed.repeat.is_recurring and seed.series_id is None:
            seed = replace(seed, series_id=SeriesId.new())
        occurrences = expand(
            seed,
            horizon_years=self._horizon_years,
            max_occurrences=self._max_occurrences,
        )
        logger.info("Saving %d occurrences of %r", len(occurrences), seed.title)
        return self._mutate(
            lambda: self._gateway.create_events(occurrences),
            success="Repeating events added",
            failure="Failed to save repeating events",
            notify_save=True,
        )

    def update_repeating_events(self, events: Sequence[Event]) -> Outcome:
        """Send already-edited occurrences in one batch update."""
        return self._mutate(
            lambda: self._gateway.update_events(list(events)),
            success="Repeating events updated",
            failure="Failed to update repeating events",
        )

    def update_series(self, target: Event, **changes: Any) -> Outcome:
        """Apply ``changes`` to every occurrence in ``target``'s series.

        Only fields every occurrence copies from its seed can be changed;
        dates, ids and the repeat rule stay as stored. Any other change, or one
        that puts the start at or after the end, is rejected before anything
        is sent.
        """
        unknown = sorted(set(changes) - SERIES_FIELDS)
        if unknown:
            return self._reject(target, f"Cannot apply {unknown} to a whole series")
        members = self._store.series_of(target) or [target]
        try:
            edited = [replace(event, **changes) for event in members]
        except ValueError as exc:
            return self._reject(target, str(exc))
        return self.update_repeating_events(edited)

    def delete_event(self, event_id: EventId) -> Outcome:
        """Delete exactly one event; the rest of its series is untouched."""
        return self._mutate(
            lambda: self._gateway.delete_event(event_id),
            success="Event deleted",
            failure="Failed to delete event",
            status=NoticeStatus.INFO,
        )

    def delete_repeating_events(self, event_ids: Sequence[EventId]) -> Outcome:
        return self._mutate(
            lambda: self._gateway.delete_events(list(event_ids)),
            success="Repeating events deleted",
            failure="Failed to delete repeating events",
            status=NoticeStatus.INFO,
        )

    def delete_series(self, target: Event) -> Outcome:
        """Delete every occurrence in ``target``'s series in one request."""
        members = self._store.series_of(target) or [target]
        return self.delete_repeating_events([event.id for event in members])

    def _reject(self, target: Event, message: str) -> Outcome:
        error = InvalidEventError(message)
        logger.warning("Rejected series update of %r: %s", target.title, message)
        return Outcome.failure(message, error)

    def _mutate(
        self,
        call: Callable[[], Any],
        *,
        success: str,
        failure: str,
        status: NoticeStatus = NoticeStatus.SUCCESS,
        notify_save: bool = False,
    ) -> Outcome:
        try:
            call()
        except DomainError as exc:
            logger.error("%s: %s", failure, exc)
            return Outcome.failure(failure, exc)

        refreshed = self.fetch_events().ok
        if not refreshed:
            logger.warning("%s, but the event list could not be refreshed", success)
        if notify_save and self._on_save is not None:
            self._on_save()
        return Outcome.success(success, status, refreshed=refreshed)
