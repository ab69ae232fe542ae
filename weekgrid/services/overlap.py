"""Predicates deciding where an event is visible."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

from weekgrid.domain.models import CalendarEvent
from weekgrid.services.timeparse import end_of_day, event_interval, start_of_day


def overlaps_day(
    event: CalendarEvent, day_key: date, tz: tzinfo = timezone.utc
) -> bool:
    """Return True if *event* touches the calendar day *day_key* in *tz*.

    Both day edges are inclusive, so an event ending exactly at midnight still
    belongs to the day it ends on.
    """
    interval = event_interval(event)
    if interval is None:
        return False
    start, end = interval
    return start <= end_of_day(day_key, tz) and end >= start_of_day(day_key, tz)


def overlaps_window(
    event: CalendarEvent, win_start: datetime, win_end: datetime
) -> bool:
    """Return True if *event* has a non-zero visible extent inside the window.

    Touching an edge (ending exactly at ``win_start``) does not count, and
    neither does a zero-duration event.
    """
    interval = event_interval(event)
    if interval is None:
        return False
    return has_visible_extent(*interval, win_start, win_end)


def has_visible_extent(
    start: datetime, end: datetime, win_start: datetime, win_end: datetime
) -> bool:
    return end > win_start and start < win_end and end > start


def events_for_day(
    events: list[CalendarEvent],
    day_key: date,
    win_start: datetime,
    win_end: datetime,
    tz: tzinfo = timezone.utc,
) -> list[CalendarEvent]:
    """Return the events of one day-column, in input order."""
    return [
        event
        for event in events
        if overlaps_day(event, day_key, tz)
        and overlaps_window(event, win_start, win_end)
    ]
