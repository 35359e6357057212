from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from timegrid.models.layout import AxisTick, DayLayout, PositionedSlot, SkippedSlot
from timegrid.models.slot import TIME_PATTERN, DayWindow, Weekday, parse_time_to_minutes


def validate_time_value(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    return value


class ScheduleRecord(BaseModel):
    """One schedule entry as the portal API sends it.

    Times are kept as plain strings so a bad entry reaches the layout engine
    and comes back as skipped instead of failing the whole request.
    """

    scheduleId: str | None = None
    startTime: str | None = None
    endTime: str | None = None
    dayOfWeek: str | None = None
    isBreakPeriod: bool = False
    subjectName: str | None = None
    teacherName: str | None = None
    breakType: str | None = None


class WindowParams(BaseModel):
    windowStart: str | None = None
    windowEnd: str | None = None

    @field_validator("windowStart", "windowEnd")
    @classmethod
    def validate_time(cls, value: str | None) -> str | None:
        return validate_time_value(value)

    def resolve(self, default: DayWindow) -> DayWindow:
        start = parse_time_to_minutes(self.windowStart) if self.windowStart else default.start_minutes
        end = parse_time_to_minutes(self.windowEnd) if self.windowEnd else default.end_minutes
        return DayWindow(start, end)


class LayoutOptions(BaseModel):
    window: WindowParams | None = None
    now: str | None = None
    currentDay: Weekday | None = None
    columnHeightPx: int | None = Field(default=None, ge=1, le=100_000)

    @field_validator("now")
    @classmethod
    def validate_now(cls, value: str | None) -> str | None:
        return validate_time_value(value)


class DayLayoutRequest(LayoutOptions):
    day: Weekday
    slots: list[ScheduleRecord] = Field(default_factory=list)


class WeekLayoutRequest(LayoutOptions):
    slots: list[ScheduleRecord] = Field(default_factory=list)


class PositionedSlotOut(BaseModel):
    id: str
    startTime: str
    endTime: str
    dayOfWeek: Weekday
    isBreakPeriod: bool
    subjectName: str
    teacherName: str
    breakType: str | None = None
    column: int
    numColumns: int
    topPercent: float
    heightPercent: float
    leftPercent: float
    widthPercent: float
    isOngoing: bool = False
    compact: bool = False
    ultraShort: bool = False

    @classmethod
    def from_positioned(
        cls,
        item: PositionedSlot,
        *,
        is_ongoing: bool = False,
        compact: bool = False,
        ultra_short: bool = False,
    ) -> "PositionedSlotOut":
        slot = item.slot
        return cls(
            id=slot.id,
            startTime=slot.start_time,
            endTime=slot.end_time,
            dayOfWeek=slot.day_of_week,
            isBreakPeriod=slot.is_break,
            subjectName=slot.subject_name,
            teacherName=slot.teacher_name,
            breakType=slot.break_type,
            column=item.column,
            numColumns=item.num_columns,
            topPercent=item.top_percent,
            heightPercent=item.height_percent,
            leftPercent=item.left_percent,
            widthPercent=item.width_percent,
            isOngoing=is_ongoing,
            compact=compact,
            ultraShort=ultra_short,
        )


class SkippedSlotOut(BaseModel):
    index: int | None = None
    scheduleId: str | None = None
    reason: str

    @classmethod
    def from_skipped(cls, item: SkippedSlot) -> "SkippedSlotOut":
        return cls(index=item.index, scheduleId=item.slot_id, reason=item.reason.value)


class IndicatorOut(BaseModel):
    now: str
    nowPercent: float
    visible: bool
    tickIndex: int | None = None


class WindowOut(BaseModel):
    windowStart: str
    windowEnd: str

    @classmethod
    def from_window(cls, window: DayWindow) -> "WindowOut":
        return cls(windowStart=window.start_time, windowEnd=window.end_time)


class DayLayoutResponse(BaseModel):
    day: Weekday
    window: WindowOut
    slots: list[PositionedSlotOut]
    skipped: list[SkippedSlotOut]
    skippedCount: int
    clusterCount: int
    maxColumns: int
    indicator: IndicatorOut | None = None


class WeekLayoutResponse(BaseModel):
    window: WindowOut
    days: list[DayLayoutResponse]
    unassigned: list[SkippedSlotOut] = Field(default_factory=list)


class AxisTickOut(BaseModel):
    index: int
    minutes: int
    label: str
    topPercent: float
    isHourLine: bool

    @classmethod
    def from_tick(cls, tick: AxisTick) -> "AxisTickOut":
        return cls(
            index=tick.index,
            minutes=tick.minutes,
            label=tick.label,
            topPercent=tick.top_percent,
            isHourLine=tick.is_hour_line,
        )


class AxisResponse(BaseModel):
    window: WindowOut
    step: int
    ticks: list[AxisTickOut]


def day_layout_summary(layout: DayLayout) -> dict:
    return {
        "skippedCount": layout.skipped_count,
        "clusterCount": layout.cluster_count,
        "maxColumns": layout.max_columns,
    }
