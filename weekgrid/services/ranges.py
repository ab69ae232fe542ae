"""Service for resolving the fetch range of a calendar view.

Every range is widened by a buffer of whole days on both sides so that paging
to the neighbouring period can render from data that is already loaded.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo

from dateutil.relativedelta import relativedelta

from weekgrid.domain.models import CalendarViewType, DateRange
from weekgrid.services.timeparse import end_of_day, start_of_day

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_DAYS = 7
DAYS_PER_WEEK = 7


def _as_date(anchor: date | datetime, tz: tzinfo) -> date:
    if isinstance(anchor, datetime):
        if anchor.tzinfo is not None:
            anchor = anchor.astimezone(tz)
        return anchor.date()
    return anchor


def _shift(moment: datetime, delta: timedelta) -> datetime:
    """Add *delta* to *moment*, stopping at the datetime range limits."""
    try:
        return moment + delta
    except OverflowError:
        limit = datetime.max if delta > timedelta(0) else datetime.min
        return limit.replace(tzinfo=moment.tzinfo)


def week_bounds(anchor: date | datetime, tz: tzinfo = timezone.utc) -> tuple[date, date]:
    """Return the Monday and Sunday of the week containing *anchor*.

    The last week of year 9999 ends on ``date.max``.
    """
    day = _as_date(anchor, tz)
    monday = day - timedelta(days=day.weekday())
    return monday, monday + min(timedelta(days=DAYS_PER_WEEK - 1), date.max - monday)


def week_days(week_start: date) -> list[date]:
    return [week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def _period_bounds(view: CalendarViewType, day: date) -> tuple[date, date]:
    if view == CalendarViewType.YEAR:
        return date(day.year, 1, 1), date(day.year, 12, 31)
    if view == CalendarViewType.WEEK:
        return week_bounds(day)
    if view == CalendarViewType.DAY:
        return day, day
    return day.replace(day=1), day + relativedelta(day=31)


def resolve_range(
    view: CalendarViewType | str,
    anchor: date | datetime,
    buffer_days: int = DEFAULT_BUFFER_DAYS,
    tz: tzinfo = timezone.utc,
) -> DateRange:
    """Return the interval to fetch for *view* around *anchor*.

    The period runs from midnight of its first day to the last instant of its
    last day in *tz*, then is widened by *buffer_days* at each end.  An
    unrecognised view falls back to the month view.
    """
    try:
        view = CalendarViewType(view)
    except ValueError:
        logger.warning("Unknown calendar view %r; using month range", view)
        view = CalendarViewType.MONTH

    first, last = _period_bounds(view, _as_date(anchor, tz))
    buffer = timedelta(days=max(buffer_days, 0))
    return DateRange(
        start=_shift(start_of_day(first, tz), -buffer),
        end=_shift(end_of_day(last, tz), buffer),
    )
