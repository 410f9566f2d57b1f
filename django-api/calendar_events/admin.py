from django.contrib import admin

from calendar_events.models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "date", "start_time", "end_time", "category", "repeat_type"]
    list_filter = ["repeat_type", "category"]
    search_fields = ["title", "description", "location"]
    date_hierarchy = "date"
