from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from timegrid.models.layout import SkippedSlot, SkipReason
from timegrid.models.slot import SlotKind, TimeSlot, Weekday, parse_time_to_minutes

DAY_SHORT_MAP = {
    "Mon": Weekday.monday,
    "Tue": Weekday.tuesday,
    "Wed": Weekday.wednesday,
    "Thu": Weekday.thursday,
    "Fri": Weekday.friday,
    "Sat": Weekday.saturday,
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntakeResult:
    slots: tuple[TimeSlot, ...]
    skipped: tuple[SkippedSlot, ...]


def normalize_day(value: Any) -> Weekday | None:
    if isinstance(value, Weekday):
        return value
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if cleaned in DAY_SHORT_MAP:
        return DAY_SHORT_MAP[cleaned]
    try:
        return Weekday(cleaned.capitalize())
    except ValueError:
        return None


def record_field(record: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in record:
        return record[camel]
    return record.get(snake)


def _parse_minutes(value: Any) -> int | None:
    if not isinstance(value, str):
        return None
    try:
        return parse_time_to_minutes(value.strip())
    except ValueError:
        return None


def fallback_slot_id(index: int) -> str:
    return f"slot-{index}"


def slot_from_record(record: Mapping[str, Any], index: int) -> TimeSlot | None:
    """Build a ``TimeSlot`` from one raw schedule record.

    Returns ``None`` when the record cannot be laid out: a missing or
    unparsable time, an unknown day, or an end that does not follow the start.
    """
    start = _parse_minutes(record_field(record, "startTime", "start_time"))
    end = _parse_minutes(record_field(record, "endTime", "end_time"))
    day = normalize_day(record_field(record, "dayOfWeek", "day_of_week"))
    if start is None or end is None or day is None or end <= start:
        return None

    raw_id = record_field(record, "scheduleId", "schedule_id")
    slot_id = str(raw_id).strip() if raw_id not in (None, "") else ""
    is_break = bool(record_field(record, "isBreakPeriod", "is_break_period"))
    break_type = record_field(record, "breakType", "break_type")

    return TimeSlot(
        id=slot_id or fallback_slot_id(index),
        start_minutes=start,
        end_minutes=end,
        day_of_week=day,
        kind=SlotKind.break_period if is_break else SlotKind.subject,
        subject_name=record_field(record, "subjectName", "subject_name") or "",
        teacher_name=record_field(record, "teacherName", "teacher_name") or "",
        break_type=break_type if is_break else None,
    )


def intake_slots(records: Iterable[Mapping[str, Any]]) -> IntakeResult:
    slots: list[TimeSlot] = []
    skipped: list[SkippedSlot] = []
    seen_ids: set[str] = set()

    for index, record in enumerate(records):
        slot = slot_from_record(record, index) if isinstance(record, Mapping) else None
        if slot is None:
            raw_id = record_field(record, "scheduleId", "schedule_id") if isinstance(record, Mapping) else None
            skipped.append(
                SkippedSlot(
                    index=index,
                    slot_id=str(raw_id) if raw_id not in (None, "") else None,
                    reason=SkipReason.malformed,
                )
            )
            logger.debug("Dropped malformed schedule record at index %d", index)
            continue
        if slot.id in seen_ids:
            suffix = index
            unique_id = f"{slot.id}#{suffix}"
            while unique_id in seen_ids:
                suffix += 1
                unique_id = f"{slot.id}#{suffix}"
            logger.debug("Duplicate schedule id %s at index %d renamed to %s", slot.id, index, unique_id)
            slot = replace(slot, id=unique_id)
        seen_ids.add(slot.id)
        slots.append(slot)

    return IntakeResult(slots=tuple(slots), skipped=tuple(skipped))


def slots_for_day(slots: Iterable[TimeSlot], day: Weekday) -> list[TimeSlot]:
    return [slot for slot in slots if slot.day_of_week == day]
