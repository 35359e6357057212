from __future__ import annotations

from datetime import date, datetime

from timegrid.models.slot import WEEKDAYS, DayWindow, TimeSlot, Weekday


def compute_indicator(now_minutes: int, window_start: int, window_end: int) -> float:
    """Position of "now" in percent of the window, clamped to its edges."""
    window = DayWindow(window_start, window_end)
    clamped = window.clamp(now_minutes)
    return (clamped - window.start_minutes) / window.total_minutes * 100


def indicator_visible(now_minutes: int, window: DayWindow) -> bool:
    return window.contains(now_minutes)


def is_ongoing(
    slot: TimeSlot,
    now_minutes: int,
    displayed_day: Weekday | None,
    actual_day: Weekday | None,
) -> bool:
    if displayed_day is None or displayed_day != actual_day:
        return False
    return slot.start_minutes <= now_minutes < slot.end_minutes


def weekday_for(value: date) -> Weekday | None:
    # Sunday has no timetable column.
    index = value.weekday()
    if index < len(WEEKDAYS):
        return WEEKDAYS[index]
    return None


def minutes_of_day(value: datetime) -> int:
    return value.hour * 60 + value.minute


def current_tick_index(now_minutes: int, window: DayWindow, step_minutes: int = 15) -> int | None:
    if not window.contains(now_minutes):
        return None
    return (now_minutes - window.start_minutes) // step_minutes
