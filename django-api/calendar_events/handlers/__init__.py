from calendar_events.handlers.views import EventBatchView, EventDetailView, EventListView

__all__ = ["EventListView", "EventDetailView", "EventBatchView"]
