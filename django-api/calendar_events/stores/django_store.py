"""Django ORM implementation of the EventGateway."""

import logging
from collections.abc import Sequence

from django.db import transaction

from calendar_events import models
from calendar_events.domain import (
    Event,
    EventForm,
    EventId,
    EventNotFoundError,
    RepeatInfo,
    SeriesId,
)
from calendar_events.stores.interfaces import EventGateway

logger = logging.getLogger(__name__)


def to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(value=row.id),
        title=row.title,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        description=row.description,
        location=row.location,
        category=row.category,
        repeat=RepeatInfo(
            type=row.repeat_type,
            interval=row.repeat_interval,
            end_date=row.repeat_end_date,
        ),
        notification_time=row.notification_time,
        series_id=SeriesId(value=row.series_id) if row.series_id else None,
    )


def _apply(row: models.Event, form: EventForm) -> models.Event:
    row.title = form.title
    row.date = form.date
    row.start_time = form.start_time
    row.end_time = form.end_time
    row.description = form.description
    row.location = form.location
    row.category = form.category
    row.repeat_type = form.repeat.type.value
    row.repeat_interval = form.repeat.interval
    row.repeat_end_date = form.repeat.end_date
    row.notification_time = form.notification_time
    row.series_id = form.series_id.value if form.series_id else None
    return row


class DjangoEventGateway(EventGateway):
    """SQL-backed event store using the Django ORM."""

    def fetch_events(self) -> list[Event]:
        return [to_domain(row) for row in models.Event.objects.all()]

    def create_event(self, form: EventForm) -> Event:
        row = _apply(models.Event(), form)
        row.save()
        return to_domain(row)

    def create_events(self, forms: Sequence[EventForm]) -> list[Event]:
        with transaction.atomic():
            created = [self.create_event(form) for form in forms]
        logger.info("Created %d events in one batch", len(created))
        return created

    def _get_row(self, event_id: EventId) -> models.Event:
        try:
            return models.Event.objects.get(pk=event_id.value)
        except models.Event.DoesNotExist:
            raise EventNotFoundError(str(event_id)) from None

    def get_event(self, event_id: EventId) -> Event:
        return to_domain(self._get_row(event_id))

    def update_event(self, event: Event) -> Event:
        row = _apply(self._get_row(event.id), event)
        row.save()
        return to_domain(row)

    def update_events(self, events: Sequence[Event]) -> list[Event]:
        with transaction.atomic():
            updated = [self.update_event(event) for event in events]
        logger.info("Updated %d events in one batch", len(updated))
        return updated

    def delete_event(self, event_id: EventId) -> None:
        self._get_row(event_id).delete()

    def delete_events(self, event_ids: Sequence[EventId]) -> None:
        with transaction.atomic():
            for event_id in event_ids:
                self.delete_event(event_id)
        logger.info("Deleted %d events in one batch", len(event_ids))
