"""Pytest configuration and shared fixtures."""

from collections.abc import Sequence
from datetime import date, time

import pytest
from rest_framework.test import APIClient

from calendar_events.domain import (
    DomainError,
    Event,
    EventForm,
    EventId,
    EventNotFoundError,
    RepeatInfo,
    RepeatType,
)
from calendar_events.stores import EventGateway, EventStore


class InMemoryGateway(EventGateway):
    """Gateway double that keeps events in a dict and records every call."""

    def __init__(self, events: Sequence[Event] = ()) -> None:
        self.rows: dict[EventId, Event] = {event.id: event for event in events}
        self.calls: list[str] = []
        self.fail_with: DomainError | None = None
        self.fail_on: set[str] | None = None

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None and (self.fail_on is None or name in self.fail_on):
            raise self.fail_with

    def _require(self, event_id: EventId) -> None:
        if event_id not in self.rows:
            raise EventNotFoundError(str(event_id))

    def fetch_events(self) -> list[Event]:
        self._call("fetch_events")
        return list(self.rows.values())

    def get_event(self, event_id: EventId) -> Event:
        self._call("get_event")
        self._require(event_id)
        return self.rows[event_id]

    def create_event(self, form: EventForm) -> Event:
        self._call("create_event")
        event = Event.from_form(EventId.new(), form)
        self.rows[event.id] = event
        return event

    def create_events(self, forms: Sequence[EventForm]) -> list[Event]:
        self._call("create_events")
        created = [Event.from_form(EventId.new(), form) for form in forms]
        self.rows.update((event.id, event) for event in created)
        return created

    def update_event(self, event: Event) -> Event:
        self._call("update_event")
        self._require(event.id)
        self.rows[event.id] = event
        return event

    def update_events(self, events: Sequence[Event]) -> list[Event]:
        self._call("update_events")
        for event in events:
            self._require(event.id)
        self.rows.update((event.id, event) for event in events)
        return list(events)

    def delete_event(self, event_id: EventId) -> None:
        self._call("delete_event")
        self._require(event_id)
        del self.rows[event_id]

    def delete_events(self, event_ids: Sequence[EventId]) -> None:
        self._call("delete_events")
        for event_id in event_ids:
            self._require(event_id)
        for event_id in event_ids:
            del self.rows[event_id]


def make_form(**overrides) -> EventForm:
    values = {
        "title": "Team sync",
        "date": date(2024, 10, 15),
        "start_time": time(9, 0),
        "end_time": time(10, 0),
        "description": "Weekly planning",
        "location": "Room 1",
        "category": "work",
    }
    values.update(overrides)
    return EventForm(**values)


def make_event(**overrides) -> Event:
    event_id = overrides.pop("id", None) or EventId.new()
    return Event.from_form(event_id, make_form(**overrides))


def weekly(interval: int = 1, end_date: date | None = None) -> RepeatInfo:
    return RepeatInfo(type=RepeatType.WEEKLY, interval=interval, end_date=end_date)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def store() -> EventStore:
    return EventStore()
