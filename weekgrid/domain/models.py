"""Domain models for the calendar layout engine."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

try:
    from enum import StrEnum
except ImportError:  # pragma: no cover - fallback for older Python runtimes

    class StrEnum(str, Enum):
        pass


class EventStatus(StrEnum):
    CONFIRMED = "confirmed"
    HOLD = "hold"
    PLANNED = "planned"
    CANCELLED = "cancelled"


class EventColor(StrEnum):
    EMERALD = "emerald"
    AMBER = "amber"
    ROSE = "rose"
    BLUE = "blue"


class CalendarViewType(StrEnum):
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


_STATUS_TO_COLOR = {
    EventStatus.CONFIRMED: EventColor.EMERALD,
    EventStatus.HOLD: EventColor.AMBER,
    EventStatus.CANCELLED: EventColor.ROSE,
    EventStatus.PLANNED: EventColor.BLUE,
}


def get_event_color(status: EventStatus | str) -> EventColor:
    """Map an event status to its display color token (blue when unknown)."""
    return _STATUS_TO_COLOR.get(status, EventColor.BLUE)


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class CalendarEvent(BaseModel):
    """An event as supplied by the data layer.

    ``start`` and ``end`` are kept as received.  A timestamp that cannot be
    parsed is still a valid input: the layout services simply leave the event
    out of their computations.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    start: str | datetime
    end: str | datetime
    status: EventStatus = EventStatus.PLANNED
    project_title: str | None = None
    location: str | None = None
    client_name: str | None = None

    @computed_field
    @property
    def color(self) -> EventColor:
        return get_event_color(self.status)


class DateRange(BaseModel):
    start: datetime
    end: datetime


class TimeWindow(BaseModel):
    """The vertical time axis shared by every day-column of a week."""

    start: datetime
    end: datetime
    total_rows: int = Field(ge=12, le=36)


class EventPosition(BaseModel):
    """Standard placement: ``top``/``height`` in rows, ``left``/``width`` in %."""

    event: CalendarEvent
    top: float
    height: float
    left: float
    width: float


class StackGroup(BaseModel):
    events: list[CalendarEvent] = Field(default_factory=list)
    top: float
    height: float
    label_start: str
    label_end: str


class CollapsedSummary(BaseModel):
    """Overflow of the stack group at ``stack_index`` ("+N more")."""

    events: list[CalendarEvent]
    top: float
    height: float
    stack_index: int


class DayLayout(BaseModel):
    standard: list[EventPosition] = Field(default_factory=list)
    stack_groups: list[StackGroup] = Field(default_factory=list)
    collapsed: list[CollapsedSummary] = Field(default_factory=list)


class DayColumn(BaseModel):
    day: date
    is_today: bool = False
    key: str
    layout: DayLayout


class WeekLayout(BaseModel):
    window: TimeWindow
    axis_labels: list[str] = Field(default_factory=list)
    days: list[DayColumn] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class WeekRequest(BaseModel):
    events: list[CalendarEvent] = Field(default_factory=list)
    anchor: str | None = None


class WeekLayoutRequest(WeekRequest):
    max_visible_in_group: int = Field(default=6, ge=1)
    today: date | None = None


class DayLayoutRequest(BaseModel):
    events: list[CalendarEvent] = Field(default_factory=list)
    window_start: datetime
    window_end: datetime
    day: date | None = None
    max_visible_in_group: int = Field(default=6, ge=1)
    prioritize_status: bool = False

    @field_validator("window_start", "window_end")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
