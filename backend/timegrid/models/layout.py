from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from timegrid.models.slot import DayWindow, TimeSlot, Weekday


class SkipReason(str, Enum):
    malformed = "malformed"
    out_of_window = "out_of_window"


@dataclass(frozen=True)
class Cluster:
    slots: tuple[TimeSlot, ...]

    @property
    def start_minutes(self) -> int:
        return self.slots[0].start_minutes

    @property
    def end_minutes(self) -> int:
        return max(slot.end_minutes for slot in self.slots)

    def __len__(self) -> int:
        return len(self.slots)


@dataclass(frozen=True)
class ColumnAssignment:
    # One column per slot, in the order the slots were assigned.
    columns: tuple[int, ...] = ()
    num_columns: int = 1

    def column_at(self, position: int) -> int:
        return self.columns[position]


@dataclass(frozen=True)
class PositionedSlot:
    slot: TimeSlot
    column: int
    num_columns: int
    top_percent: float
    height_percent: float
    left_percent: float
    width_percent: float

    @property
    def bottom_percent(self) -> float:
        return self.top_percent + self.height_percent


@dataclass(frozen=True)
class SkippedSlot:
    index: int | None
    slot_id: str | None
    reason: SkipReason


@dataclass(frozen=True)
class SlotLabelHint:
    compact: bool
    ultra_short: bool


@dataclass(frozen=True)
class AxisTick:
    index: int
    minutes: int
    label: str
    top_percent: float
    is_hour_line: bool


@dataclass(frozen=True)
class DayLayout:
    day: Weekday | None
    window: DayWindow
    positioned: tuple[PositionedSlot, ...] = ()
    skipped: tuple[SkippedSlot, ...] = ()
    cluster_count: int = 0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def max_columns(self) -> int:
        if not self.positioned:
            return 0
        return max(item.num_columns for item in self.positioned)

    @property
    def is_empty(self) -> bool:
        return not self.positioned


@dataclass(frozen=True)
class WeekLayout:
    window: DayWindow
    days: tuple[DayLayout, ...]
    unassigned: tuple[SkippedSlot, ...] = ()

    def for_day(self, day: Weekday) -> DayLayout:
        for layout in self.days:
            if layout.day == day:
                return layout
        raise KeyError(day)
