"""Layout engine for a single day-column of the week view.

Events are swept into clusters of transitively overlapping intervals.  Small
clusters (one or two events) are placed side by side; larger clusters become a
single stack group that lists its events inline, and whatever does not fit in
the group is collapsed into a "+N more" summary.  Vertical positions are in
rows (one row per hour from the window start), horizontal ones in percent of
the column width.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo

from weekgrid.domain.models import (
    CalendarEvent,
    CollapsedSummary,
    DayLayout,
    EventPosition,
    EventStatus,
    StackGroup,
)
from weekgrid.services.overlap import has_visible_extent
from weekgrid.services.timeparse import (
    event_interval,
    format_clock,
    hours_between,
    parse_instant,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_VISIBLE_IN_GROUP = 6
STACK_MODE_THRESHOLD = 3

# Lower index is shown first when a stack group is ordered by status.
_PRIORITY_ORDER = [
    EventStatus.CONFIRMED,
    EventStatus.HOLD,
    EventStatus.PLANNED,
    EventStatus.CANCELLED,
]


def _priority_rank(status: EventStatus) -> int:
    try:
        return _PRIORITY_ORDER.index(status)
    except ValueError:
        return len(_PRIORITY_ORDER)


@dataclass(frozen=True)
class _Span:
    """An event with its interval clamped to the window."""

    event: CalendarEvent
    start: datetime
    end: datetime
    raw_start: datetime

    @property
    def duration(self) -> float:
        return (self.end - self.start).total_seconds()


def _visible_spans(
    events: list[CalendarEvent], win_start: datetime, win_end: datetime
) -> list[_Span]:
    spans: list[_Span] = []
    for event in events:
        interval = event_interval(event)
        if interval is None:
            continue
        start, end = interval
        if not has_visible_extent(start, end, win_start, win_end):
            continue
        spans.append(
            _Span(
                event=event,
                start=max(start, win_start),
                end=min(end, win_end),
                raw_start=start,
            )
        )
    spans.sort(key=lambda s: (s.start, -s.duration, s.raw_start, s.event.id))
    return spans


def build_clusters(spans: list[_Span]) -> list[list[_Span]]:
    """Split start-sorted *spans* into clusters of transitively overlapping spans.

    A span starting at or after the running end of the current cluster opens
    a new one, so back-to-back events are never clustered together.
    """
    clusters: list[list[_Span]] = []
    current: list[_Span] = []
    cluster_end: datetime | None = None

    for span in spans:
        if current and span.start < cluster_end:
            current.append(span)
            cluster_end = max(cluster_end, span.end)
        else:
            if current:
                clusters.append(current)
            current = [span]
            cluster_end = span.end
    if current:
        clusters.append(current)
    return clusters


def _standard_positions(cluster: list[_Span], win_start: datetime) -> list[EventPosition]:
    # Columns go left to right in start order.
    width = 100 / len(cluster)
    return [
        EventPosition(
            event=span.event,
            top=hours_between(win_start, span.start),
            height=hours_between(span.start, span.end),
            left=index * width,
            width=width,
        )
        for index, span in enumerate(cluster)
    ]


def layout_day(
    day_events: list[CalendarEvent],
    win_start: datetime,
    win_end: datetime,
    max_visible_in_group: int = DEFAULT_MAX_VISIBLE_IN_GROUP,
    prioritize_status: bool = False,
    tz: tzinfo = timezone.utc,
) -> DayLayout:
    """Lay out one day's events inside the window ``[win_start, win_end]``.

    Every event with a visible extent in the window lands in exactly one of
    ``standard``, a ``stack_groups[i].events`` list or a
    ``collapsed[j].events`` list.  Events without a visible extent (outside
    the window, zero duration, unparsable timestamps) are left out.

    Stack groups list their events by start time; with *prioritize_status*
    confirmed events come first, then holds, planned and cancelled ones, so
    the collapsed tail holds the least important events.  Group labels are
    formatted in *tz*.
    """
    layout = DayLayout()
    win_start = parse_instant(win_start)
    win_end = parse_instant(win_end)
    if win_start is None or win_end is None or win_end <= win_start:
        return layout
    limit = max(max_visible_in_group, 0)

    clusters = build_clusters(_visible_spans(day_events, win_start, win_end))
    for cluster in clusters:
        if len(cluster) < STACK_MODE_THRESHOLD:
            layout.standard.extend(_standard_positions(cluster, win_start))
            continue

        group_start = cluster[0].start
        group_end = max(span.end for span in cluster)
        ordered = cluster
        if prioritize_status:
            ordered = sorted(cluster, key=lambda s: _priority_rank(s.event.status))
        inline, overflow = ordered[:limit], ordered[limit:]

        layout.stack_groups.append(
            StackGroup(
                events=[span.event for span in inline],
                top=hours_between(win_start, group_start),
                height=hours_between(group_start, group_end),
                label_start=format_clock(group_start, tz),
                label_end=format_clock(group_end, tz),
            )
        )
        if overflow:
            overflow_start = min(span.start for span in overflow)
            overflow_end = max(span.end for span in overflow)
            layout.collapsed.append(
                CollapsedSummary(
                    events=[span.event for span in overflow],
                    top=hours_between(win_start, overflow_start),
                    height=hours_between(overflow_start, overflow_end),
                    stack_index=len(layout.stack_groups) - 1,
                )
            )

    logger.debug(
        "Laid out %d clusters: %d standard, %d stacked groups, %d collapsed",
        len(clusters),
        len(layout.standard),
        len(layout.stack_groups),
        len(layout.collapsed),
    )
    return layout
