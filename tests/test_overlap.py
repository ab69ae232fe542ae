"""Tests for the day and window visibility predicates."""

from __future__ import annotations

from datetime import date, datetime, timezone

from dateutil import tz as dateutil_tz

from weekgrid.domain.models import CalendarEvent
from weekgrid.services.overlap import events_for_day, overlaps_day, overlaps_window

WIN_START = datetime(2025, 6, 7, 11, 0, tzinfo=timezone.utc)
WIN_END = datetime(2025, 6, 8, 1, 0, tzinfo=timezone.utc)


def _make_event(event_id: str, start: str, end: str) -> CalendarEvent:
    return CalendarEvent(id=event_id, start=start, end=end)


# ---------------------------------------------------------------------------
# overlaps_day
# ---------------------------------------------------------------------------


def test_event_spanning_midnight_belongs_to_both_days():
    """Mon 23:00 - Tue 02:00 shows in the Monday and Tuesday columns."""
    event = _make_event("late", "2025-06-02T23:00:00Z", "2025-06-03T02:00:00Z")
    assert overlaps_day(event, date(2025, 6, 2))
    assert overlaps_day(event, date(2025, 6, 3))
    assert not overlaps_day(event, date(2025, 6, 1))
    assert not overlaps_day(event, date(2025, 6, 4))


def test_day_edges_are_inclusive():
    event = _make_event("eve", "2025-06-02T20:00:00Z", "2025-06-03T00:00:00Z")
    assert overlaps_day(event, date(2025, 6, 2))
    assert overlaps_day(event, date(2025, 6, 3))


def test_multi_day_event_touches_every_day():
    event = _make_event("tour", "2025-06-02T10:00:00Z", "2025-06-05T10:00:00Z")
    for day in (2, 3, 4, 5):
        assert overlaps_day(event, date(2025, 6, day))


def test_overlaps_day_uses_zone_calendar_day():
    """02:00 UTC Tuesday is Monday evening in New York."""
    new_york = dateutil_tz.gettz("America/New_York")
    event = _make_event("nyc", "2025-06-03T02:00:00Z", "2025-06-03T03:00:00Z")
    assert overlaps_day(event, date(2025, 6, 2), new_york)
    assert not overlaps_day(event, date(2025, 6, 3), new_york)


def test_overlaps_day_false_for_unparsable_event():
    event = _make_event("bad", "tbd", "2025-06-03T03:00:00Z")
    assert not overlaps_day(event, date(2025, 6, 3))


# ---------------------------------------------------------------------------
# overlaps_window
# ---------------------------------------------------------------------------


def test_partial_overlap_is_visible():
    event = _make_event("early", "2025-06-07T09:00:00Z", "2025-06-07T12:00:00Z")
    assert overlaps_window(event, WIN_START, WIN_END)


def test_ending_at_window_start_is_not_visible():
    event = _make_event("graze", "2025-06-07T06:00:00Z", "2025-06-07T11:00:00Z")
    assert not overlaps_window(event, WIN_START, WIN_END)


def test_starting_at_window_end_is_not_visible():
    event = _make_event("graze", "2025-06-08T01:00:00Z", "2025-06-08T03:00:00Z")
    assert not overlaps_window(event, WIN_START, WIN_END)


def test_zero_duration_event_is_not_visible():
    event = _make_event("blip", "2025-06-07T15:00:00Z", "2025-06-07T15:00:00Z")
    assert not overlaps_window(event, WIN_START, WIN_END)


def test_inverted_event_is_not_visible():
    event = _make_event("backwards", "2025-06-07T15:00:00Z", "2025-06-07T13:00:00Z")
    assert not overlaps_window(event, WIN_START, WIN_END)


def test_unparsable_event_is_not_visible():
    event = _make_event("bad", "2025-06-07T15:00:00Z", "eventually")
    assert not overlaps_window(event, WIN_START, WIN_END)


# ---------------------------------------------------------------------------
# events_for_day
# ---------------------------------------------------------------------------


def test_events_for_day_applies_both_filters_in_order():
    events = [
        _make_event("b", "2025-06-07T18:00:00Z", "2025-06-07T19:00:00Z"),
        _make_event("outside", "2025-06-07T06:00:00Z", "2025-06-07T10:00:00Z"),
        _make_event("friday", "2025-06-06T18:00:00Z", "2025-06-06T19:00:00Z"),
        _make_event("a", "2025-06-07T15:00:00Z", "2025-06-07T16:00:00Z"),
    ]
    result = events_for_day(events, date(2025, 6, 7), WIN_START, WIN_END)
    assert [e.id for e in result] == ["b", "a"]
