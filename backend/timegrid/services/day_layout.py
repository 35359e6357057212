from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from timegrid.models.layout import DayLayout, PositionedSlot, SkippedSlot, SkipReason, WeekLayout
from timegrid.models.slot import WEEKDAYS, DayWindow, TimeSlot, Weekday
from timegrid.services.column_assigner import assign_columns
from timegrid.services.geometry import position_slot
from timegrid.services.overlap_grouper import group_overlapping
from timegrid.services.slot_intake import intake_slots, normalize_day, record_field, slots_for_day

logger = logging.getLogger(__name__)


def layout_day(
    slots: Iterable[TimeSlot],
    window: DayWindow,
    day: Weekday | None = None,
    *,
    prior_skips: Sequence[SkippedSlot] = (),
) -> DayLayout:
    """Lay out one day's slots inside ``window``.

    Slots are grouped into overlap clusters, given first-fit columns and turned
    into percent rectangles. Slots that cannot be shown are reported in
    ``DayLayout.skipped`` instead of raising.
    """
    candidates = slots_for_day(slots, day) if day is not None else list(slots)
    skipped: list[SkippedSlot] = list(prior_skips)

    valid: list[TimeSlot] = []
    for slot in candidates:
        if slot.is_valid:
            valid.append(slot)
        else:
            skipped.append(SkippedSlot(index=None, slot_id=slot.id, reason=SkipReason.malformed))
            logger.debug("Dropped slot %s with end %s not after start %s", slot.id, slot.end_time, slot.start_time)

    clusters = group_overlapping(valid)
    positioned: list[PositionedSlot] = []
    for cluster in clusters:
        assignment = assign_columns(cluster)
        for slot, column in zip(cluster.slots, assignment.columns):
            item = position_slot(slot, window, column, assignment.num_columns)
            if item is None:
                skipped.append(SkippedSlot(index=None, slot_id=slot.id, reason=SkipReason.out_of_window))
                logger.debug(
                    "Slot %s (%s-%s) is outside window %s-%s",
                    slot.id,
                    slot.start_time,
                    slot.end_time,
                    window.start_time,
                    window.end_time,
                )
                continue
            positioned.append(item)

    if skipped:
        logger.info(
            "Skipped %d slot(s) for %s",
            len(skipped),
            day.value if day is not None else "day",
        )

    return DayLayout(
        day=day,
        window=window,
        positioned=tuple(positioned),
        skipped=tuple(skipped),
        cluster_count=len(clusters),
    )


def layout_records(
    records: Iterable[Mapping[str, Any]],
    window: DayWindow,
    day: Weekday,
) -> DayLayout:
    """Parse raw schedule records and lay out the ones that fall on ``day``.

    Malformed records on ``day``, and records whose day cannot be read at all,
    are reported as skipped.
    """
    records = list(records)
    intake = intake_slots(records)
    prior_skips = [
        skip for skip in intake.skipped if _record_day(records, skip) in (day, None)
    ]
    return layout_day(intake.slots, window, day, prior_skips=prior_skips)


def layout_week(records: Iterable[Mapping[str, Any]], window: DayWindow) -> WeekLayout:
    records = list(records)
    intake = intake_slots(records)
    days = tuple(
        layout_day(
            intake.slots,
            window,
            day,
            prior_skips=[skip for skip in intake.skipped if _record_day(records, skip) == day],
        )
        for day in WEEKDAYS
    )
    unassigned = tuple(skip for skip in intake.skipped if _record_day(records, skip) is None)
    if unassigned:
        logger.info("Skipped %d schedule record(s) with no usable day", len(unassigned))
    return WeekLayout(window=window, days=days, unassigned=unassigned)


def _record_day(records: Sequence[Any], skip: SkippedSlot) -> Weekday | None:
    if skip.index is None or skip.index >= len(records):
        return None
    record = records[skip.index]
    if not isinstance(record, Mapping):
        return None
    return normalize_day(record_field(record, "dayOfWeek", "day_of_week"))
