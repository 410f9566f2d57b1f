"""App settings, read from ``settings.CALENDAR_EVENTS`` with defaults."""

from typing import Any

from django.conf import settings

from calendar_events.domain.recurrence import DEFAULT_HORIZON_YEARS, DEFAULT_MAX_OCCURRENCES

DEFAULTS: dict[str, Any] = {
    "RECURRENCE_HORIZON_YEARS": DEFAULT_HORIZON_YEARS,
    "MAX_OCCURRENCES": DEFAULT_MAX_OCCURRENCES,
    "LIST_CACHE_TIMEOUT": 300,
    "API_BASE_URL": "http://localhost:8000/api",
    "API_TIMEOUT": 10,
}


def get_setting(name: str) -> Any:
    overrides = getattr(settings, "CALENDAR_EVENTS", {})
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
