from __future__ import annotations

from timegrid.models.layout import PositionedSlot
from timegrid.models.slot import DayWindow, TimeSlot


def clip_to_window(slot: TimeSlot, window: DayWindow) -> tuple[int, int] | None:
    clipped_start = max(slot.start_minutes, window.start_minutes)
    clipped_end = min(slot.end_minutes, window.end_minutes)
    if clipped_end <= clipped_start:
        return None
    return clipped_start, clipped_end


def minutes_to_percent(minutes: int, window: DayWindow) -> float:
    return (minutes - window.start_minutes) / window.total_minutes * 100


def position_slot(
    slot: TimeSlot,
    window: DayWindow,
    column: int,
    num_columns: int,
) -> PositionedSlot | None:
    """Rectangle for ``slot`` in percent of the day column, or ``None`` when
    the slot lies entirely outside the window.

    Clipping only shapes the rectangle; ``slot`` itself keeps its real times.
    """
    clipped = clip_to_window(slot, window)
    if clipped is None:
        return None
    clipped_start, clipped_end = clipped

    width_percent = 100 / num_columns
    return PositionedSlot(
        slot=slot,
        column=column,
        num_columns=num_columns,
        top_percent=minutes_to_percent(clipped_start, window),
        height_percent=(clipped_end - clipped_start) / window.total_minutes * 100,
        left_percent=column * width_percent,
        width_percent=width_percent,
    )
