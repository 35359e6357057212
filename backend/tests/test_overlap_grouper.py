from timegrid.services.overlap_grouper import group_overlapping, sort_slots

from conftest import make_slot


def cluster_ids(clusters):
    return [[slot.id for slot in cluster.slots] for cluster in clusters]


def test_empty_day_has_no_clusters():
    assert group_overlapping([]) == []


def test_overlapping_pair_forms_one_cluster():
    slots = [make_slot("A", "09:00", "10:00"), make_slot("B", "09:30", "10:30")]
    assert cluster_ids(group_overlapping(slots)) == [["A", "B"]]


def test_touching_slots_form_separate_clusters():
    slots = [make_slot("A", "09:00", "10:00"), make_slot("B", "10:00", "11:00")]
    assert cluster_ids(group_overlapping(slots)) == [["A"], ["B"]]


def test_chain_of_overlaps_is_grouped_transitively():
    # A-B and B-C overlap, A and C do not
    slots = [
        make_slot("C", "10:30", "11:30"),
        make_slot("A", "09:00", "10:00"),
        make_slot("B", "09:45", "10:45"),
    ]
    clusters = group_overlapping(slots)

    assert cluster_ids(clusters) == [["A", "B", "C"]]
    assert clusters[0].start_minutes == 540
    assert clusters[0].end_minutes == 690


def test_long_slot_keeps_cluster_open():
    slots = [
        make_slot("long", "09:00", "12:00"),
        make_slot("short", "09:00", "09:30"),
        make_slot("late", "11:00", "11:30"),
        make_slot("after", "12:00", "12:30"),
    ]
    assert cluster_ids(group_overlapping(slots)) == [["short", "long", "late"], ["after"]]


def test_sort_breaks_ties_by_end_then_input_order():
    slots = [
        make_slot("second", "09:00", "10:00"),
        make_slot("shorter", "09:00", "09:30"),
        make_slot("third", "09:00", "10:00"),
        make_slot("earliest", "08:00", "12:00"),
    ]
    assert [slot.id for slot in sort_slots(slots)] == ["earliest", "shorter", "second", "third"]


def test_grouping_is_independent_of_input_order():
    slots = [
        make_slot("A", "09:00", "10:00"),
        make_slot("B", "09:30", "10:30"),
        make_slot("C", "13:00", "14:00"),
    ]
    assert group_overlapping(slots) == group_overlapping(list(reversed(slots)))
