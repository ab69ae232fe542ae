"""Service composing the week window, day filter and layout engine."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

from weekgrid.domain.models import CalendarEvent, DayColumn, WeekLayout
from weekgrid.services.layout import DEFAULT_MAX_VISIBLE_IN_GROUP, layout_day
from weekgrid.services.overlap import events_for_day
from weekgrid.services.ranges import week_bounds, week_days
from weekgrid.services.window import axis_labels, resolve_week_window


def column_key(day: date, events: list[CalendarEvent]) -> str:
    """Return a key that changes whenever the set of events in a column does."""
    return f"{day.isoformat()}-{','.join(sorted(e.id for e in events))}"


def build_week_layout(
    events: list[CalendarEvent],
    anchor: date | datetime,
    max_visible_in_group: int = DEFAULT_MAX_VISIBLE_IN_GROUP,
    today: date | None = None,
    tz: tzinfo = timezone.utc,
) -> WeekLayout:
    """Lay out the Monday-to-Sunday week containing *anchor*.

    All seven columns share one time window.  *today*, when given, marks the
    matching column; nothing here reads the clock.
    """
    week_start, week_end = week_bounds(anchor, tz)
    window = resolve_week_window(events, week_start, week_end, tz=tz)

    columns: list[DayColumn] = []
    for day in week_days(week_start):
        visible = events_for_day(events, day, window.start, window.end, tz)
        columns.append(
            DayColumn(
                day=day,
                is_today=day == today,
                key=column_key(day, visible),
                layout=layout_day(
                    visible,
                    window.start,
                    window.end,
                    max_visible_in_group=max_visible_in_group,
                    tz=tz,
                ),
            )
        )

    return WeekLayout(window=window, axis_labels=axis_labels(window, tz), days=columns)
