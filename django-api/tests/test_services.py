"""Unit tests for EventService.

These test orchestration, series detachment and error mapping.
Run with: pytest tests/test_services.py -v
"""

from dataclasses import replace
from datetime import date, time
from unittest.mock import Mock

import pytest

from calendar_events.domain import (
    ErrorCode,
    EventId,
    GatewayError,
    InvalidEventError,
    InvalidRecurrenceError,
    RepeatInfo,
    RepeatType,
)
from calendar_events.services.event_service import EventService, NoticeStatus
from calendar_events.stores import EventStore
from calendar_events.stores.django_store import DjangoEventGateway
from conftest import InMemoryGateway, make_event, make_form, weekly


@pytest.fixture
def on_save() -> Mock:
    return Mock()


@pytest.fixture
def service(gateway, store, on_save) -> EventService:
    return EventService(gateway, store, on_save=on_save)


def three_week_seed(**overrides):
    return make_form(repeat=weekly(end_date=date(2024, 10, 29)), **overrides)


class TestFetch:
    """Tests for loading the snapshot."""

    def test_load_replaces_store(self, gateway, store, service):
        event = make_event()
        gateway.rows[event.id] = event

        outcome = service.load()

        assert outcome.ok
        assert outcome.notice.status is NoticeStatus.INFO
        assert store.events == (event,)
        assert service.events == (event,)

    def test_fetch_failure_keeps_previous_snapshot(self, gateway, store, service):
        previous = make_event()
        store.replace([previous])
        gateway.fail_with = GatewayError("boom")

        outcome = service.fetch_events()

        assert not outcome.ok
        assert outcome.error.code is ErrorCode.GATEWAY_ERROR
        assert store.events == (previous,)


class TestCreate:
    """Tests for creating single and repeating events."""

    def test_save_event_creates_single_event(self, gateway, store, service, on_save):
        outcome = service.save_event(make_form())

        assert outcome.ok
        assert outcome.notice.title == "Event added"
        assert gateway.calls == ["create_event", "fetch_events"]
        assert len(store) == 1
        on_save.assert_called_once_with()

    def test_save_event_routes_recurring_form_to_batch_create(self, gateway, store, service):
        outcome = service.save_event(three_week_seed())

        assert outcome.ok
        assert gateway.calls == ["create_events", "fetch_events"]
        assert len(store) == 3

    def test_save_repeating_events_creates_series_in_one_request(self, gateway, store, service, on_save):
        outcome = service.save_repeating_events(
            make_form(repeat=weekly(end_date=date(2024, 12, 31)))
        )

        assert outcome.ok
        assert outcome.notice.title == "Repeating events added"
        assert gateway.calls.count("create_events") == 1
        assert len(store) == 12
        assert len({event.series_id for event in store}) == 1
        assert len({event.id for event in store}) == 12
        on_save.assert_called_once_with()

    def test_zero_interval_is_rejected_without_gateway_call(self, gateway, store, service, on_save):
        outcome = service.save_repeating_events(make_form(repeat=weekly(interval=0)))

        assert not outcome.ok
        assert isinstance(outcome.error, InvalidRecurrenceError)
        assert outcome.notice.title == "interval must be a positive integer"
        assert gateway.calls == []
        assert len(store) == 0
        on_save.assert_not_called()

    def test_batch_failure_reports_one_error(self, gateway, store, service, on_save):
        gateway.fail_with = GatewayError("rejected")

        outcome = service.save_repeating_events(three_week_seed())

        assert not outcome.ok
        assert outcome.notice.title == "Failed to save repeating events"
        assert outcome.notice.status is NoticeStatus.ERROR
        assert gateway.calls == ["create_events"]
        assert len(store) == 0
        on_save.assert_not_called()

    def test_refresh_failure_after_mutation_is_flagged(self, gateway, store, service):
        gateway.fail_with = GatewayError("unavailable")
        gateway.fail_on = {"fetch_events"}

        outcome = service.save_event(make_form())

        assert outcome.ok
        assert not outcome.refreshed
        assert len(store) == 0

    def test_horizon_settings_bound_open_ended_series(self, gateway, store):
        service = EventService(gateway, store, max_occurrences=4)

        service.save_repeating_events(make_form(repeat=RepeatInfo(type=RepeatType.DAILY, interval=1)))

        assert len(store) == 4

    def test_zero_occurrence_cap_still_creates_seed(self, gateway, store):
        service = EventService(gateway, store, max_occurrences=0)

        outcome = service.save_repeating_events(three_week_seed())

        assert outcome.ok
        assert [event.date for event in store] == [date(2024, 10, 15)]


class TestUpdate:
    """Tests for single and whole-series updates."""

    def test_single_edit_detaches_occurrence(self, gateway, store, service):
        gateway.rows.update((event.id, event) for event in (make_event(title="Dentist"), make_event(title="Gym")))
        service.save_repeating_events(three_week_seed())
        first, second, third = [event for event in store if event.repeat.is_recurring]

        outcome = service.save_event(replace(second, title="Moved sync"))

        assert outcome.ok
        assert outcome.notice.title == "Event updated"
        edited = store.get(second.id)
        assert edited.title == "Moved sync"
        assert edited.repeat == RepeatInfo.none()
        assert edited.series_id is None
        assert store.get(first.id).repeat.type is RepeatType.WEEKLY
        assert store.get(third.id).repeat.type is RepeatType.WEEKLY
        assert len(store) == 5

    def test_single_edit_detaches_even_without_changes(self, gateway, store, service):
        service.save_repeating_events(three_week_seed())
        target = store.events[0]

        service.save_event(target)

        assert store.get(target.id).repeat == RepeatInfo.none()
        assert len(store.series_of(store.events[1])) == 2

    def test_single_edit_of_missing_event_reports_not_found(self, gateway, store, service):
        event = make_event()
        store.replace([event])

        outcome = service.save_event(event)

        assert not outcome.ok
        assert outcome.error.code is ErrorCode.EVENT_NOT_FOUND
        assert store.events == (event,)

    def test_update_series_applies_change_to_every_member(self, gateway, store, service):
        other = make_event(title="Lunch")
        gateway.rows[other.id] = other
        service.save_repeating_events(three_week_seed())
        member = next(event for event in store if event.repeat.is_recurring)

        outcome = service.update_series(member, title="Renamed sync", start_time=time(8, 30))

        assert outcome.ok
        assert outcome.notice.title == "Repeating events updated"
        assert gateway.calls.count("update_events") == 1
        renamed = [event for event in store if event.title == "Renamed sync"]
        assert len(renamed) == 3
        assert all(event.start_time == time(8, 30) for event in renamed)
        assert store.get(other.id).title == "Lunch"

    def test_update_series_skips_detached_occurrences(self, gateway, store, service):
        service.save_repeating_events(three_week_seed())
        detached = store.events[1]
        service.save_event(detached)

        service.update_series(store.events[0], title="Renamed sync")

        assert store.get(detached.id).title == "Team sync"
        assert sum(event.title == "Renamed sync" for event in store) == 2

    def test_update_series_rejects_date_changes(self, gateway, store, service):
        service.save_repeating_events(three_week_seed())
        before = store.events

        outcome = service.update_series(store.events[0], date=date(2025, 1, 1))

        assert not outcome.ok
        assert outcome.error.code is ErrorCode.INVALID_EVENT
        assert outcome.notice.status is NoticeStatus.ERROR
        assert "update_events" not in gateway.calls
        assert store.events == before

    def test_update_series_rejects_start_after_end(self, gateway, store, service, on_save):
        service.save_repeating_events(three_week_seed())
        on_save.reset_mock()
        calls_before = list(gateway.calls)
        before = store.events

        outcome = service.update_series(store.events[0], start_time=time(11, 0))

        assert not outcome.ok
        assert isinstance(outcome.error, InvalidEventError)
        assert outcome.notice.title == "start time must be before end time"
        assert gateway.calls == calls_before
        assert store.events == before
        on_save.assert_not_called()

    def test_update_repeating_events_failure_keeps_snapshot(self, gateway, store, service):
        service.save_repeating_events(three_week_seed())
        before = store.events
        gateway.fail_with = GatewayError("rejected")

        outcome = service.update_repeating_events(list(before))

        assert not outcome.ok
        assert outcome.notice.title == "Failed to update repeating events"
        assert store.events == before


class TestDelete:
    """Tests for single and whole-series deletes."""

    def test_single_delete_keeps_siblings(self, gateway, store, service):
        service.save_repeating_events(three_week_seed())
        first, second, third = store.events

        outcome = service.delete_event(second.id)

        assert outcome.ok
        assert outcome.notice.status is NoticeStatus.INFO
        assert store.get(second.id) is None
        assert store.get(first.id) == first
        assert store.series_of(first) == [first, third]

    def test_delete_missing_event_reports_not_found(self, gateway, store, service):
        outcome = service.delete_event(EventId.new())

        assert not outcome.ok
        assert outcome.error.code is ErrorCode.EVENT_NOT_FOUND
        assert outcome.notice.title == "Failed to delete event"

    def test_delete_series_removes_members_in_one_request(self, gateway, store, service):
        standalone = make_event(title="Standalone")
        gateway.rows[standalone.id] = standalone
        service.save_repeating_events(three_week_seed())

        member = next(event for event in store if event.repeat.is_recurring)

        outcome = service.delete_series(member)

        assert outcome.ok
        assert outcome.notice.title == "Repeating events deleted"
        assert gateway.calls.count("delete_events") == 1
        assert store.events == (standalone,)

    def test_delete_series_leaves_other_series_alone(self, gateway, store, service):
        service.save_repeating_events(three_week_seed())
        service.save_repeating_events(three_week_seed())
        assert len(store) == 6

        service.delete_series(store.events[0])

        assert len(store) == 3


@pytest.mark.django_db
class TestServiceWithDjangoGateway:
    """The orchestrator against the ORM-backed gateway."""

    def test_series_lifecycle(self):
        store = EventStore()
        service = EventService(DjangoEventGateway(), store)
        service.save_event(make_form(title="Dentist"))
        service.save_event(make_form(title="Gym"))

        service.save_repeating_events(three_week_seed())
        series = [event for event in store if event.repeat.is_recurring]
        assert len(series) == 3

        edited = series[1]
        outcome = service.save_event(edited.detached())

        assert outcome.ok
        assert store.get(edited.id).repeat.type is RepeatType.NONE
        assert store.get(series[0].id).repeat.type is RepeatType.WEEKLY
        assert store.get(series[2].id).repeat.type is RepeatType.WEEKLY

        service.delete_series(store.get(series[0].id))
        assert sorted(event.title for event in store) == ["Dentist", "Gym", "Team sync"]

    def test_not_found_batch_leaves_store_untouched(self):
        store = EventStore()
        service = EventService(DjangoEventGateway(), store)
        service.save_repeating_events(three_week_seed())
        before = store.events

        outcome = service.delete_repeating_events([before[0].id, EventId.new()])

        assert not outcome.ok
        assert outcome.error.code is ErrorCode.EVENT_NOT_FOUND
        assert store.events == before
        assert len(DjangoEventGateway().fetch_events()) == 3


def test_from_settings_reads_app_settings(settings):
    settings.CALENDAR_EVENTS = {"MAX_OCCURRENCES": 2}
    gateway = InMemoryGateway()
    store = EventStore()
    service = EventService.from_settings(gateway, store)

    service.save_repeating_events(make_form(repeat=RepeatInfo(type=RepeatType.DAILY, interval=1)))

    assert len(store) == 2
