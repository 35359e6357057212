import random

from timegrid.models import DayWindow, TimeSlot, Weekday
from timegrid.services.column_assigner import assign_columns, max_concurrency
from timegrid.services.overlap_grouper import group_overlapping

from conftest import make_slot


def random_day(seed, count=25):
    rng = random.Random(seed)
    slots = []
    for index in range(count):
        start = rng.randrange(7 * 60, 18 * 60, 5)
        length = rng.choice([10, 15, 30, 40, 45, 60, 90, 120])
        slots.append(TimeSlot(f"s{index}", start, start + length, Weekday.monday))
    return slots


def test_single_slot_uses_one_column():
    assignment = assign_columns([make_slot("A", "09:00", "10:00")])
    assert assignment.num_columns == 1
    assert assignment.columns == (0,)


def test_empty_cluster_reports_one_column():
    assert assign_columns([]).num_columns == 1


def test_overlapping_pair_gets_two_columns():
    cluster = group_overlapping([make_slot("A", "09:00", "10:00"), make_slot("B", "09:30", "10:30")])[0]
    assignment = assign_columns(cluster)

    assert assignment.num_columns == 2
    assert assignment.columns == (0, 1)


def test_three_mutually_overlapping_slots_get_three_columns():
    slots = [
        make_slot("A", "09:00", "11:00"),
        make_slot("B", "09:30", "10:30"),
        make_slot("C", "10:00", "10:45"),
    ]
    assignment = assign_columns(group_overlapping(slots)[0])

    assert assignment.num_columns == 3
    assert sorted(assignment.columns) == [0, 1, 2]


def test_identical_intervals_never_share_a_column():
    slots = [make_slot("A", "09:00", "10:00"), make_slot("B", "09:00", "10:00")]
    assignment = assign_columns(group_overlapping(slots)[0])

    assert assignment.num_columns == 2
    assert assignment.columns[0] != assignment.columns[1]


def test_repeated_ids_still_get_their_own_columns():
    slots = [make_slot("A", "09:00", "10:00") for _ in range(3)]
    assignment = assign_columns(slots)

    assert assignment.columns == (0, 1, 2)
    assert assignment.num_columns == 3


def test_freed_column_is_reused_first():
    # B frees column 1 exactly when D starts, so D reuses it instead of opening column 2
    slots = [
        make_slot("A", "09:00", "09:30"),
        make_slot("B", "09:10", "10:00"),
        make_slot("C", "09:40", "11:00"),
        make_slot("D", "10:00", "10:30"),
    ]
    assignment = assign_columns(group_overlapping(slots)[0])

    assert assignment.columns == (0, 1, 0, 1)
    assert assignment.num_columns == 2


def test_chain_cluster_is_not_over_allocated():
    # A-B overlap and B-C overlap but A-C do not: two columns suffice
    slots = [
        make_slot("A", "09:00", "10:00"),
        make_slot("B", "09:45", "10:45"),
        make_slot("C", "10:30", "11:30"),
    ]
    assignment = assign_columns(group_overlapping(slots)[0])

    assert assignment.num_columns == 2
    assert assignment.column_at(0) == assignment.column_at(2) == 0


def test_max_concurrency_treats_touching_slots_as_sequential():
    slots = [make_slot("A", "09:00", "10:00"), make_slot("B", "10:00", "11:00")]
    assert max_concurrency(slots) == 1
    assert max_concurrency([]) == 0


def test_columns_never_hold_overlapping_slots():
    for seed in range(20):
        for cluster in group_overlapping(random_day(seed)):
            assignment = assign_columns(cluster)
            by_column = {}
            for position, slot in enumerate(cluster.slots):
                by_column.setdefault(assignment.column_at(position), []).append(slot)
            for column_slots in by_column.values():
                for index, first in enumerate(column_slots):
                    for second in column_slots[index + 1:]:
                        assert not first.overlaps(second)


def test_column_count_matches_peak_concurrency():
    for seed in range(20):
        for cluster in group_overlapping(random_day(seed)):
            assert assign_columns(cluster).num_columns == max_concurrency(cluster.slots)


def test_window_does_not_affect_column_assignment():
    # columns are computed on real times, before any clipping
    window = DayWindow.from_times("09:30", "10:00")
    slots = [make_slot("A", "09:00", "09:20"), make_slot("B", "09:10", "10:00")]
    assert window.total_minutes == 30
    assert assign_columns(group_overlapping(slots)[0]).num_columns == 2
