from __future__ import annotations

from collections.abc import Iterable

from timegrid.models.layout import Cluster
from timegrid.models.slot import TimeSlot


def slot_sort_key(slot: TimeSlot) -> tuple[int, int]:
    return (slot.start_minutes, slot.end_minutes)


def sort_slots(slots: Iterable[TimeSlot]) -> list[TimeSlot]:
    # sorted() is stable, so equal intervals keep their input order.
    return sorted(slots, key=slot_sort_key)


def group_overlapping(slots: Iterable[TimeSlot]) -> list[Cluster]:
    """Split a day's slots into maximal runs of transitively overlapping slots.

    A slot joins the open cluster when it starts before the latest end seen so
    far in that cluster. A slot starting exactly at that end opens a new one.
    """
    clusters: list[Cluster] = []
    current: list[TimeSlot] = []
    running_max_end = -1

    for slot in sort_slots(slots):
        if not current or slot.start_minutes < running_max_end:
            current.append(slot)
            running_max_end = max(running_max_end, slot.end_minutes)
        else:
            clusters.append(Cluster(slots=tuple(current)))
            current = [slot]
            running_max_end = slot.end_minutes

    if current:
        clusters.append(Cluster(slots=tuple(current)))
    return clusters
