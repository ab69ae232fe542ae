"""Service for resolving the time axis shared by a week's day-columns."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone, tzinfo

from weekgrid.domain.models import CalendarEvent, TimeWindow
from weekgrid.services.timeparse import (
    event_interval,
    hour_label,
    hours_between,
    start_of_day,
)

logger = logging.getLogger(__name__)

PADDING_HOURS = 4  # e.g. an event 3pm-9pm shows 11am-1am
MIN_WINDOW_HOURS = 12
MAX_WINDOW_HOURS = 36
DAY_START_HOUR = 6
DAY_END_HOUR = 3  # next day
DEFAULT_WINDOW_HOURS = 21


def default_window(day: date, tz: tzinfo = timezone.utc) -> TimeWindow:
    """Return the 6 AM to 3 AM (next day) window used for an empty week."""
    start = start_of_day(day, tz).replace(hour=DAY_START_HOUR)
    end = start_of_day(day + timedelta(days=1), tz).replace(hour=DAY_END_HOUR)
    return TimeWindow(start=start, end=end, total_rows=DEFAULT_WINDOW_HOURS)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def resolve_week_window(
    events: list[CalendarEvent],
    week_start: date,
    week_end: date,
    tz: tzinfo = timezone.utc,
) -> TimeWindow:
    """Return one time window for the week from *week_start* to *week_end* inclusive.

    The window spans every event touching the week, padded by
    ``PADDING_HOURS`` on both sides.  ``total_rows`` is the padded length in
    whole hours, clamped to ``[MIN_WINDOW_HOURS, MAX_WINDOW_HOURS]``.  Events
    with unparsable timestamps are ignored; a week with no usable events gets
    :func:`default_window`.
    """
    range_start = start_of_day(week_start, tz)
    range_end = start_of_day(week_end + timedelta(days=1), tz)

    min_start: datetime | None = None
    max_end: datetime | None = None
    for event in events:
        interval = event_interval(event)
        if interval is None:
            continue
        start, end = interval
        if end < range_start or start >= range_end:
            continue
        if min_start is None or start < min_start:
            min_start = start
        if max_end is None or end > max_end:
            max_end = end

    if min_start is None or max_end is None:
        logger.debug("No events in week of %s; using default window", week_start)
        return default_window(week_start, tz)

    padding = timedelta(hours=PADDING_HOURS)
    win_start = min_start - padding
    win_end = max_end + padding
    total_rows = min(
        MAX_WINDOW_HOURS,
        max(MIN_WINDOW_HOURS, _round_half_up(hours_between(win_start, win_end))),
    )
    return TimeWindow(start=win_start, end=win_end, total_rows=total_rows)


def axis_labels(window: TimeWindow, tz: tzinfo = timezone.utc) -> list[str]:
    """Return one hour label per row of *window*, starting at its start."""
    return [
        hour_label((window.start + timedelta(hours=row)).astimezone(tz).hour)
        for row in range(window.total_rows)
    ]
