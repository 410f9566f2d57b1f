"""Expansion of a seed event into the dated occurrences of its series.

Monthly and yearly steps are always measured from the seed date, and a
day-of-month the target month does not have is clamped to that month's last
day: a series seeded on Jan 31 runs Jan 31, Feb 29, Mar 31, Apr 30 and so on,
and a yearly series seeded on Feb 29 falls on Feb 28 in non-leap years.
"""

import logging
from dataclasses import replace
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from calendar_events.domain.models import Event, EventForm
from calendar_events.domain.value_objects import RepeatInfo, RepeatType

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_YEARS = 2
DEFAULT_MAX_OCCURRENCES = 1000


def _step(rule: RepeatInfo, n: int) -> timedelta | relativedelta:
    """Offset of the n-th occurrence from the seed date."""
    count = n * rule.interval
    if rule.type is RepeatType.DAILY:
        return timedelta(days=count)
    if rule.type is RepeatType.WEEKLY:
        return timedelta(weeks=count)
    if rule.type is RepeatType.MONTHLY:
        return relativedelta(months=count)
    if rule.type is RepeatType.YEARLY:
        return relativedelta(years=count)
    raise ValueError(f"Cannot step a {rule.type.value} rule")


def occurrence_dates(
    start: date,
    rule: RepeatInfo,
    *,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
) -> list[date]:
    """Return every date of the series, seed date first.

    The sequence ends at the rule's end date (inclusive), at ``start`` plus
    ``horizon_years`` (inclusive), or after ``max_occurrences`` dates,
    whichever comes first.

    Raises:
        InvalidRecurrenceError: If the rule does not validate against ``start``.
    """
    rule.validate(start)
    if not rule.is_recurring:
        return [start]

    # The seed date is always an occurrence, whatever the ceilings say.
    limit = start + relativedelta(years=max(horizon_years, 0))
    if rule.end_date is not None:
        limit = min(limit, rule.end_date)
    max_occurrences = max(max_occurrences, 1)

    dates: list[date] = []
    n = 0
    while len(dates) < max_occurrences:
        current = start + _step(rule, n)
        if current > limit:
            break
        dates.append(current)
        n += 1
    return dates


def expand(
    seed: EventForm,
    *,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
) -> list[EventForm]:
    """Expand ``seed`` into one EventForm per occurrence.

    A non-recurring seed comes back as a single-element list holding the seed
    itself. Recurring occurrences copy every field of the seed except the
    date, including its series id, so the same seed always expands to the
    same forms. Callers that need a fresh series stamp it on the seed first.
    Ids are assigned when the forms are created remotely.
    """
    if not seed.repeat.is_recurring:
        return [seed]

    dates = occurrence_dates(
        seed.date,
        seed.repeat,
        horizon_years=horizon_years,
        max_occurrences=max_occurrences,
    )
    if isinstance(seed, Event):
        seed = seed.to_form()
    logger.debug(
        "Expanded %s rule (interval %s) from %s into %d occurrences",
        seed.repeat.type.value,
        seed.repeat.interval,
        seed.date,
        len(dates),
    )
    return [replace(seed, date=day) for day in dates]
