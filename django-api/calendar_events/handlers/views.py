"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call the gateway for persistence
- Map domain errors to HTTP responses
- Never expose internal error details
"""

import logging

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from calendar_events.conf import get_setting
from calendar_events.domain import DomainError, ErrorCode, EventId, InvalidEventIdError
from calendar_events.handlers.serializers import (
    EventBatchSerializer,
    EventIdsSerializer,
    EventSerializer,
    event_from_data,
    form_from_data,
)
from calendar_events.signals import EVENTS_LIST_CACHE_KEY
from calendar_events.stores.django_store import DjangoEventGateway
from calendar_events.stores.interfaces import EventGateway

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RECURRENCE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.GATEWAY_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS[error.code],
    )


def parse_event_id(value: str) -> EventId:
    try:
        return EventId.from_string(value)
    except ValueError:
        raise InvalidEventIdError() from None


class EventGatewayView(APIView):
    """Base view giving handlers access to the configured gateway."""

    gateway_class: type[EventGateway] = DjangoEventGateway

    def get_gateway(self) -> EventGateway:
        return self.gateway_class()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            logger.info("Request failed: %s", exc)
            return error_response(exc)
        return super().handle_exception(exc)


class EventListView(EventGatewayView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        payload = cache.get(EVENTS_LIST_CACHE_KEY)
        if payload is None:
            events = self.get_gateway().fetch_events()
            payload = {"events": EventSerializer(events, many=True).data}
            cache.set(EVENTS_LIST_CACHE_KEY, payload, get_setting("LIST_CACHE_TIMEOUT"))
        return Response(payload)

    def post(self, request: Request) -> Response:
        serializer = EventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = self.get_gateway().create_event(form_from_data(serializer.validated_data))
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(EventGatewayView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = self.get_gateway().get_event(parse_event_id(event_id))
        return Response(EventSerializer(event).data)

    def put(self, request: Request, event_id: str) -> Response:
        target = parse_event_id(event_id)
        serializer = EventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = self.get_gateway().update_event(event_from_data(serializer.validated_data, target))
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        self.get_gateway().delete_event(parse_event_id(event_id))
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventBatchView(EventGatewayView):
    """Handler for POST/PUT/DELETE /api/events-list"""

    def post(self, request: Request) -> Response:
        serializer = EventBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        forms = [form_from_data(data) for data in serializer.validated_data["events"]]
        events = self.get_gateway().create_events(forms)
        return Response(
            {"events": EventSerializer(events, many=True).data},
            status=status.HTTP_201_CREATED,
        )

    def put(self, request: Request) -> Response:
        serializer = EventBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        events = [event_from_data(data) for data in serializer.validated_data["events"]]
        updated = self.get_gateway().update_events(events)
        return Response({"events": EventSerializer(updated, many=True).data})

    def delete(self, request: Request) -> Response:
        serializer = EventIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event_ids = [EventId(value=value) for value in serializer.validated_data["event_ids"]]
        self.get_gateway().delete_events(event_ids)
        return Response(status=status.HTTP_204_NO_CONTENT)
