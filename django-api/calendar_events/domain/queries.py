"""Read-side helpers over an event snapshot: series lookup, calendar views, search and reminders."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from calendar_events.domain.models import Event, EventForm


def sort_events(events: Iterable[Event]) -> list[Event]:
    return sorted(events, key=lambda event: (event.date, event.start_time, str(event.id)))


def series_members(events: Iterable[Event], target: EventForm) -> list[Event]:
    """Return every event in ``target``'s series, in date order.

    A non-recurring target is a series of its own, so only events with the
    same id (if any) are returned.
    """
    key = target.series_key
    if key is None:
        target_id = getattr(target, "id", None)
        return [event for event in events if event.id == target_id]
    return sort_events(event for event in events if event.series_key == key)


def week_dates(day: date) -> list[date]:
    """Return the seven days of the Sunday-start week containing ``day``."""
    sunday = day - timedelta(days=(day.weekday() + 1) % 7)
    return [sunday + timedelta(days=offset) for offset in range(7)]


def events_for_week(events: Iterable[Event], day: date) -> list[Event]:
    days = week_dates(day)
    return sort_events(event for event in events if days[0] <= event.date <= days[-1])


def events_for_month(events: Iterable[Event], day: date) -> list[Event]:
    return sort_events(
        event for event in events if (event.date.year, event.date.month) == (day.year, day.month)
    )


def search_events(events: Iterable[Event], term: str) -> list[Event]:
    """Case-insensitive match on title, description and location."""
    needle = term.strip().lower()
    if not needle:
        return sort_events(events)
    return sort_events(
        event
        for event in events
        if needle in event.title.lower()
        or needle in event.description.lower()
        or needle in event.location.lower()
    )


def starts_at(event: EventForm) -> datetime:
    return datetime.combine(event.date, event.start_time)


def upcoming_notifications(
    events: Iterable[Event],
    now: datetime,
    notified_ids: Iterable = (),
) -> list[Event]:
    """Return events whose reminder window is open at ``now``.

    The window opens ``notification_time`` minutes before the start and
    closes when the event starts. Events already in ``notified_ids`` are skipped.
    """
    notified = set(notified_ids)
    due = []
    for event in events:
        if event.id in notified:
            continue
        start = starts_at(event)
        if start - timedelta(minutes=event.notification_time) <= now < start:
            due.append(event)
    return sort_events(due)
