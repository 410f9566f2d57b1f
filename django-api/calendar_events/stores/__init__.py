from calendar_events.stores.event_store import EventStore
from calendar_events.stores.interfaces import EventGateway

__all__ = ["EventGateway", "EventStore"]
