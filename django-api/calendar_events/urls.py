from django.urls import path

from calendar_events.handlers import EventBatchView, EventDetailView, EventListView

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events-list", EventBatchView.as_view(), name="event-batch"),
]
