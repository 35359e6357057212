from __future__ import annotations

from collections.abc import Sequence

from timegrid.models.layout import Cluster, ColumnAssignment
from timegrid.models.slot import TimeSlot


def assign_columns(cluster: Cluster | Sequence[TimeSlot]) -> ColumnAssignment:
    """First-fit lane assignment for one time-sorted cluster.

    Each slot goes to the lowest column whose last occupant has ended by the
    slot's start; a new column is opened only when none is free. Processing in
    start order makes the column count equal to the peak number of slots
    running at once. ``columns[i]`` is the column of the i-th slot.
    """
    slots = cluster.slots if isinstance(cluster, Cluster) else tuple(cluster)
    column_end_times: list[int] = []
    columns: list[int] = []

    for slot in slots:
        assigned_column = -1
        for index, column_end in enumerate(column_end_times):
            if column_end <= slot.start_minutes:
                assigned_column = index
                break
        if assigned_column == -1:
            assigned_column = len(column_end_times)
            column_end_times.append(slot.end_minutes)
        else:
            column_end_times[assigned_column] = slot.end_minutes
        columns.append(assigned_column)

    return ColumnAssignment(columns=tuple(columns), num_columns=max(1, len(column_end_times)))


def max_concurrency(slots: Sequence[TimeSlot]) -> int:
    """Largest number of slots active at the same instant.

    Ends sort before starts at the same minute, matching half-open intervals.
    """
    events: list[tuple[int, int]] = []
    for slot in slots:
        events.append((slot.start_minutes, 1))
        events.append((slot.end_minutes, -1))
    events.sort()

    active = 0
    peak = 0
    for _, delta in events:
        active += delta
        peak = max(peak, active)
    return peak
