"""FastAPI application — HTTP surface of the calendar layout engine."""

from __future__ import annotations

import logging
from datetime import date, datetime

from fastapi import FastAPI, HTTPException, Query

from weekgrid.domain.models import (
    CalendarViewType,
    DateRange,
    DayLayout,
    DayLayoutRequest,
    TimeWindow,
    WeekLayout,
    WeekLayoutRequest,
    WeekRequest,
)
from weekgrid.logging import configure_logging
from weekgrid.services.layout import layout_day
from weekgrid.services.overlap import overlaps_day
from weekgrid.services.ranges import DEFAULT_BUFFER_DAYS, resolve_range, week_bounds
from weekgrid.services.timeparse import parse_anchor
from weekgrid.services.week import build_week_layout
from weekgrid.services.window import resolve_week_window
from weekgrid.settings import get_settings

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_title)


def _anchor_date(raw: str | None) -> date:
    """Resolve a request's anchor text, turning parse failures into a 400."""
    try:
        return parse_anchor(raw, datetime.now(settings.tz))
    except ValueError as exc:
        logger.info("Rejected anchor %r", raw)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/range", response_model=DateRange)
def get_range(
    view: CalendarViewType = CalendarViewType.MONTH,
    anchor: str | None = None,
    buffer_days: int = Query(default=DEFAULT_BUFFER_DAYS, ge=0),
) -> DateRange:
    """Return the buffered fetch range for a calendar view."""
    return resolve_range(view, _anchor_date(anchor), buffer_days, tz=settings.tz)


@app.post("/week/window", response_model=TimeWindow)
def get_week_window(payload: WeekRequest) -> TimeWindow:
    """Return the time axis shared by the week containing the anchor."""
    week_start, week_end = week_bounds(_anchor_date(payload.anchor), tz=settings.tz)
    return resolve_week_window(payload.events, week_start, week_end, tz=settings.tz)


@app.post("/week/layout", response_model=WeekLayout)
def get_week_layout(payload: WeekLayoutRequest) -> WeekLayout:
    """Return the window and all seven day-column layouts for a week."""
    return build_week_layout(
        payload.events,
        _anchor_date(payload.anchor),
        max_visible_in_group=payload.max_visible_in_group,
        today=payload.today,
        tz=settings.tz,
    )


@app.post("/day/layout", response_model=DayLayout)
def get_day_layout(payload: DayLayoutRequest) -> DayLayout:
    """Lay out one day-column inside an explicit window."""
    if payload.window_end <= payload.window_start:
        raise HTTPException(
            status_code=400, detail="window_end must be after window_start"
        )

    events = payload.events
    if payload.day is not None:
        events = [e for e in events if overlaps_day(e, payload.day, settings.tz)]

    return layout_day(
        events,
        payload.window_start,
        payload.window_end,
        max_visible_in_group=payload.max_visible_in_group,
        prioritize_status=payload.prioritize_status,
        tz=settings.tz,
    )
