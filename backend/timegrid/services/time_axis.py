from __future__ import annotations

import math
from collections.abc import Iterable

from timegrid.models.layout import AxisTick, PositionedSlot, SlotLabelHint
from timegrid.models.slot import DayWindow, TimeSlot, minutes_to_time
from timegrid.services.geometry import minutes_to_percent
from timegrid.services.overlap_grouper import sort_slots


def axis_ticks(window: DayWindow, step_minutes: int = 15) -> list[AxisTick]:
    if step_minutes < 1:
        raise ValueError("step_minutes must be at least 1")
    ticks: list[AxisTick] = []
    offset = 0
    while offset <= window.total_minutes:
        minutes = window.start_minutes + offset
        ticks.append(
            AxisTick(
                index=len(ticks),
                minutes=minutes,
                label=minutes_to_time(minutes),
                top_percent=minutes_to_percent(minutes, window),
                is_hour_line=minutes % 60 == 0,
            )
        )
        offset += step_minutes
    return ticks


def label_density(
    positioned: PositionedSlot,
    column_height_px: float,
    compact_threshold_px: float = 64,
    ultra_short_minutes: int = 15,
) -> SlotLabelHint:
    """How much text fits in a slot's box.

    Pixel height is only a hint for the caller's label choice; it has no
    effect on layout.
    """
    pixel_height = positioned.height_percent / 100 * column_height_px
    return SlotLabelHint(
        compact=pixel_height < compact_threshold_px,
        ultra_short=positioned.slot.duration_minutes < ultra_short_minutes,
    )


def minutes_at_position(fraction: float, window: DayWindow, snap_minutes: int = 15) -> int:
    """Minute of day at a vertical position given as a fraction of the column."""
    fraction = max(0.0, min(1.0, fraction))
    offset = math.floor(fraction * window.total_minutes / snap_minutes + 0.5) * snap_minutes
    return window.clamp(window.start_minutes + offset)


def slot_at(slots: Iterable[TimeSlot], minutes: int) -> TimeSlot | None:
    for slot in sort_slots(slots):
        if slot.start_minutes <= minutes < slot.end_minutes:
            return slot
    return None


def preset_range(
    start_minutes: int,
    window: DayWindow,
    end_minutes: int | None = None,
    default_minutes: int = 30,
    min_minutes: int = 15,
) -> tuple[int, int]:
    start = window.clamp(start_minutes)
    if end_minutes is None:
        end = window.clamp(start + default_minutes)
    else:
        end = window.clamp(end_minutes)
    if end <= start:
        end = window.clamp(start + min_minutes)
    return start, end
