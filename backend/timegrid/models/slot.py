from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from timegrid.core.exceptions import InvalidWindowError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(value: int) -> str:
    hours = value // 60
    minutes = value % 60
    return f"{hours:02d}:{minutes:02d}"


class Weekday(str, Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"


WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)


class SlotKind(str, Enum):
    subject = "subject"
    break_period = "break"


@dataclass(frozen=True)
class TimeSlot:
    """One class period or break on a single day.

    Times are minutes of day on a half-open ``[start_minutes, end_minutes)``
    interval. ``id`` is assigned once when the slot is built and is the only
    key used to look the slot up afterwards.
    """

    id: str
    start_minutes: int
    end_minutes: int
    day_of_week: Weekday
    kind: SlotKind = SlotKind.subject
    subject_name: str = ""
    teacher_name: str = ""
    break_type: str | None = None

    @property
    def start_time(self) -> str:
        return minutes_to_time(self.start_minutes)

    @property
    def end_time(self) -> str:
        return minutes_to_time(self.end_minutes)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def is_break(self) -> bool:
        return self.kind is SlotKind.break_period

    @property
    def is_valid(self) -> bool:
        return self.end_minutes > self.start_minutes

    @property
    def title(self) -> str:
        if self.is_break:
            return self.break_type or "Break"
        return self.subject_name

    def overlaps(self, other: TimeSlot) -> bool:
        return max(self.start_minutes, other.start_minutes) < min(self.end_minutes, other.end_minutes)


@dataclass(frozen=True)
class DayWindow:
    """Visible time range of a day column, in minutes of day."""

    start_minutes: int
    end_minutes: int

    def __post_init__(self) -> None:
        if self.end_minutes <= self.start_minutes:
            raise InvalidWindowError(self.start_minutes, self.end_minutes)

    @classmethod
    def from_times(cls, start: str, end: str) -> DayWindow:
        return cls(parse_time_to_minutes(start), parse_time_to_minutes(end))

    @property
    def total_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def start_time(self) -> str:
        return minutes_to_time(self.start_minutes)

    @property
    def end_time(self) -> str:
        return minutes_to_time(self.end_minutes)

    def clamp(self, minutes: int) -> int:
        return max(self.start_minutes, min(self.end_minutes, minutes))

    def contains(self, minutes: int) -> bool:
        return self.start_minutes <= minutes <= self.end_minutes
