"""EventGateway implementation that talks to the REST API over HTTP."""

import logging
from collections.abc import Sequence
from typing import Any

import requests

from calendar_events.conf import get_setting
from calendar_events.domain import ErrorCode, Event, EventForm, EventId, EventNotFoundError, GatewayError
from calendar_events.handlers.serializers import EventSerializer, event_from_data
from calendar_events.stores.interfaces import EventGateway

logger = logging.getLogger(__name__)


class HttpEventGateway(EventGateway):
    """Client for the ``/events`` and ``/events-list`` endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or get_setting("API_BASE_URL")).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else get_setting("API_TIMEOUT")

    def _request(self, method: str, path: str, target: str | None = None, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise GatewayError(f"Request to {path} failed") from exc

        if response.status_code == 404 and self._names_missing_event(response):
            raise EventNotFoundError(target or path)
        if not response.ok:
            logger.error("%s %s returned %s", method, url, response.status_code)
            raise GatewayError(
                f"Request to {path} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _names_missing_event(response: requests.Response) -> bool:
        """True when a 404 comes from the API itself rather than an unknown URL."""
        try:
            body = response.json()
        except ValueError:
            return False
        return isinstance(body, dict) and body.get("code") == ErrorCode.EVENT_NOT_FOUND.value

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError("Response body is not valid JSON") from exc

    def _decode(self, payload: Any) -> Event:
        serializer = EventSerializer(data=payload)
        if not serializer.is_valid():
            logger.error("Malformed event in response: %s", serializer.errors)
            raise GatewayError("Malformed event in response")
        return event_from_data(serializer.validated_data)

    def _decode_list(self, response: requests.Response) -> list[Event]:
        body = self._json(response)
        if not isinstance(body, dict) or not isinstance(body.get("events"), list):
            raise GatewayError("Response has no event list")
        return [self._decode(item) for item in body["events"]]

    def fetch_events(self) -> list[Event]:
        return self._decode_list(self._request("GET", "events"))

    def get_event(self, event_id: EventId) -> Event:
        response = self._request("GET", f"events/{event_id}", target=str(event_id))
        return self._decode(self._json(response))

    def create_event(self, form: EventForm) -> Event:
        response = self._request("POST", "events", json=EventSerializer(form).data)
        return self._decode(self._json(response))

    def create_events(self, forms: Sequence[EventForm]) -> list[Event]:
        payload = {"events": EventSerializer(forms, many=True).data}
        return self._decode_list(self._request("POST", "events-list", json=payload))

    def update_event(self, event: Event) -> Event:
        response = self._request(
            "PUT",
            f"events/{event.id}",
            target=str(event.id),
            json=EventSerializer(event).data,
        )
        return self._decode(self._json(response))

    def update_events(self, events: Sequence[Event]) -> list[Event]:
        payload = {"events": EventSerializer(events, many=True).data}
        return self._decode_list(self._request("PUT", "events-list", json=payload))

    def delete_event(self, event_id: EventId) -> None:
        self._request("DELETE", f"events/{event_id}", target=str(event_id))

    def delete_events(self, event_ids: Sequence[EventId]) -> None:
        payload = {"eventIds": [str(event_id) for event_id in event_ids]}
        self._request("DELETE", "events-list", json=payload)
