from datetime import datetime

from fastapi import APIRouter, Depends, Query

from timegrid.api.deps import get_app_settings
from timegrid.core.config import Settings
from timegrid.core.exceptions import ConfigurationError, InvalidWindowError, SlotLimitExceededError
from timegrid.models.layout import DayLayout
from timegrid.models.slot import TIME_PATTERN, DayWindow, Weekday, minutes_to_time, parse_time_to_minutes
from timegrid.schemas.timetable import (
    AxisResponse,
    AxisTickOut,
    DayLayoutRequest,
    DayLayoutResponse,
    IndicatorOut,
    LayoutOptions,
    PositionedSlotOut,
    ScheduleRecord,
    SkippedSlotOut,
    WeekLayoutRequest,
    WeekLayoutResponse,
    WindowOut,
    WindowParams,
    day_layout_summary,
)
from timegrid.services.day_layout import layout_records, layout_week
from timegrid.services.time_axis import axis_ticks, label_density
from timegrid.services.time_indicator import (
    compute_indicator,
    current_tick_index,
    indicator_visible,
    is_ongoing,
    minutes_of_day,
    weekday_for,
)

router = APIRouter()


def _check_slot_limit(slots: list[ScheduleRecord], settings: Settings) -> None:
    if len(slots) > settings.max_slots_per_request:
        raise SlotLimitExceededError(len(slots), settings.max_slots_per_request)


def _resolve_window(params: WindowParams | None, settings: Settings) -> DayWindow:
    try:
        default = settings.default_window()
    except (ValueError, InvalidWindowError) as exc:
        raise ConfigurationError(
            f"Configured day window {settings.day_window_start}-{settings.day_window_end} is invalid"
        ) from exc
    if params is None:
        return default
    return params.resolve(default)


def _indicator(now_minutes: int, window: DayWindow, settings: Settings) -> IndicatorOut:
    return IndicatorOut(
        now=minutes_to_time(now_minutes),
        nowPercent=compute_indicator(now_minutes, window.start_minutes, window.end_minutes),
        visible=indicator_visible(now_minutes, window),
        tickIndex=current_tick_index(now_minutes, window, settings.grid_step_minutes),
    )


def _day_response(
    layout: DayLayout,
    options: LayoutOptions,
    settings: Settings,
    actual_day: Weekday | None,
) -> DayLayoutResponse:
    now_minutes = parse_time_to_minutes(options.now) if options.now else None
    show_indicator = now_minutes is not None and actual_day == layout.day
    column_height = options.columnHeightPx or settings.day_column_height_px

    slots: list[PositionedSlotOut] = []
    for item in layout.positioned:
        hint = label_density(
            item,
            column_height,
            compact_threshold_px=settings.compact_slot_height_px,
            ultra_short_minutes=settings.ultra_short_minutes,
        )
        ongoing = now_minutes is not None and is_ongoing(item.slot, now_minutes, layout.day, actual_day)
        slots.append(
            PositionedSlotOut.from_positioned(
                item,
                is_ongoing=ongoing,
                compact=hint.compact,
                ultra_short=hint.ultra_short,
            )
        )

    return DayLayoutResponse(
        day=layout.day,
        window=WindowOut.from_window(layout.window),
        slots=slots,
        skipped=[SkippedSlotOut.from_skipped(item) for item in layout.skipped],
        indicator=_indicator(now_minutes, layout.window, settings) if show_indicator else None,
        **day_layout_summary(layout),
    )


@router.post("/day-layout", response_model=DayLayoutResponse)
def day_layout(
    payload: DayLayoutRequest,
    settings: Settings = Depends(get_app_settings),
):
    _check_slot_limit(payload.slots, settings)
    window = _resolve_window(payload.window, settings)
    records = [slot.model_dump() for slot in payload.slots]
    layout = layout_records(records, window, payload.day)
    # Without an explicit current day, "now" refers to the day being shown.
    return _day_response(layout, payload, settings, payload.currentDay or payload.day)


@router.post("/week-layout", response_model=WeekLayoutResponse)
def week_layout(
    payload: WeekLayoutRequest,
    settings: Settings = Depends(get_app_settings),
):
    _check_slot_limit(payload.slots, settings)
    window = _resolve_window(payload.window, settings)
    records = [slot.model_dump() for slot in payload.slots]
    week = layout_week(records, window)
    return WeekLayoutResponse(
        window=WindowOut.from_window(window),
        days=[_day_response(layout, payload, settings, payload.currentDay) for layout in week.days],
        unassigned=[SkippedSlotOut.from_skipped(item) for item in week.unassigned],
    )


@router.get("/indicator", response_model=IndicatorOut)
def now_indicator(
    now: str | None = Query(default=None, pattern=TIME_PATTERN.pattern),
    window_start: str | None = Query(default=None, alias="windowStart", pattern=TIME_PATTERN.pattern),
    window_end: str | None = Query(default=None, alias="windowEnd", pattern=TIME_PATTERN.pattern),
    settings: Settings = Depends(get_app_settings),
):
    window = _resolve_window(WindowParams(windowStart=window_start, windowEnd=window_end), settings)
    now_minutes = parse_time_to_minutes(now) if now else minutes_of_day(datetime.now())
    return _indicator(now_minutes, window, settings)


@router.get("/today")
def today() -> dict:
    current = datetime.now()
    day: Weekday | None = weekday_for(current)
    return {
        "day": day.value if day is not None else None,
        "now": minutes_to_time(minutes_of_day(current)),
    }


@router.get("/axis", response_model=AxisResponse)
def time_axis(
    window_start: str | None = Query(default=None, alias="windowStart", pattern=TIME_PATTERN.pattern),
    window_end: str | None = Query(default=None, alias="windowEnd", pattern=TIME_PATTERN.pattern),
    step: int | None = Query(default=None, ge=1, le=240),
    settings: Settings = Depends(get_app_settings),
):
    window = _resolve_window(WindowParams(windowStart=window_start, windowEnd=window_end), settings)
    step_minutes = step or settings.grid_step_minutes
    return AxisResponse(
        window=WindowOut.from_window(window),
        step=step_minutes,
        ticks=[AxisTickOut.from_tick(tick) for tick in axis_ticks(window, step_minutes)],
    )
