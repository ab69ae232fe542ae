"""Timestamp parsing and wall-clock helpers shared by the layout services."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone, tzinfo

import dateparser
from dateutil.parser import isoparse

from weekgrid.domain.models import CalendarEvent

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


def parse_instant(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken as UTC, and every result is converted to UTC so
    that subtracting two instants gives real elapsed time even across a DST
    change.  Returns ``None`` for anything that is not a usable instant
    instead of raising.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError):
            logger.debug("Ignoring unparsable timestamp %r", value)
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        logger.debug("Ignoring out-of-range timestamp %r", value)
        return None


def event_interval(event: CalendarEvent) -> tuple[datetime, datetime] | None:
    """Return ``(start, end)`` for *event*, or ``None`` if either side is unparsable.

    An end before the start collapses to a zero-duration interval at start.
    """
    start = parse_instant(event.start)
    end = parse_instant(event.end)
    if start is None or end is None:
        return None
    if end < start:
        end = start
    return start, end


def parse_anchor(raw: str | None, now: datetime) -> date:
    """Parse a free-text anchor date ("2025-06-04", "next friday") with dateparser.

    ``None`` or blank text means the date of *now*.  Raises ``ValueError`` when
    the text holds no recognisable date.
    """
    if raw is None or not raw.strip():
        return now.date()
    settings = {
        "PREFER_DATES_FROM": "current_period",
        "RELATIVE_BASE": now.replace(tzinfo=None),
        "RETURN_AS_TIMEZONE_AWARE": False,
    }
    result = dateparser.parse(raw, settings=settings)
    if result is None:
        raise ValueError("Could not parse anchor date")
    return result.date()


def start_of_day(day: date, tz: tzinfo = timezone.utc) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: tzinfo = timezone.utc) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def format_clock(moment: datetime, tz: tzinfo = timezone.utc) -> str:
    """Format *moment* as ``h:mm AM`` in *tz*, e.g. ``3:00 PM``."""
    local = moment.astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def hour_label(hour: int) -> str:
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour < 12:
        return f"{hour} AM"
    return f"{hour - 12} PM"
