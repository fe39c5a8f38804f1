from rides.models import Ride
from rides.policy import CONSOLIDATION_WINDOW_MINUTES, MAX_PASSENGERS, HeapPolicy
from scheduling.heap import MinHeap

ROUTE = (420, 6969)


def route_ride(ride_id, hhmmss, passengers, route=ROUTE):
    return Ride(ride_id, hhmmss, passengers, *route)


def assert_heap_order(heap):
    for i in range(2, heap.count + 1):
        assert heap.slots[i].scheduled_time >= heap.slots[i // 2].scheduled_time


def test_rides_five_minutes_apart_share_a_vehicle(heap, diagnostics):
    first = route_ride(42, "08:00:02", ["pass2"])
    second = route_ride(44, "08:05:00", ["p5", "p6"])

    assert heap.insert(first)
    assert heap.insert(second)

    assert heap.count == 1
    assert heap.peek() is first
    # the vehicle leaves at the later of the two times
    assert first.time_str == "08:05:00"
    assert first.passengers == ["pass2", "p5", "p6"]
    assert not heap.has_ride(second)
    assert diagnostics.messages("consolidate")


def test_earlier_ride_merging_keeps_later_time(heap):
    later = route_ride(1, "08:09:00", ["A"])
    earlier = route_ride(2, "08:01:00", ["B"])

    heap.insert(later)
    heap.insert(earlier)

    assert heap.count == 1
    assert later.time_str == "08:09:00"
    assert later.passengers == ["A", "B"]


def test_rides_eleven_minutes_apart_stay_separate(heap):
    first = route_ride(1, "08:00:00", ["A"])
    second = route_ride(2, "08:11:00", ["B"])

    heap.insert(first)
    heap.insert(second)

    assert heap.count == 2
    assert first.time_str == "08:00:00"
    assert first.passengers == ["A"]
    assert second.time_str == "08:11:00"
    assert second.passengers == ["B"]


def test_window_edge_is_inclusive(heap):
    first = route_ride(1, "08:00:00", ["A"])
    second = route_ride(2, f"08:{CONSOLIDATION_WINDOW_MINUTES:02d}:00", ["B"])

    heap.insert(first)
    heap.insert(second)

    assert heap.count == 1


def test_window_applies_in_both_directions(heap):
    first = route_ride(1, "08:10:00", ["A"])
    second = route_ride(2, "08:00:01", ["B"])

    heap.insert(first)
    heap.insert(second)

    assert heap.count == 1


def test_different_route_is_not_merged(heap):
    first = route_ride(1, "08:00:00", ["A"])
    same_start = route_ride(2, "08:01:00", ["B"], route=(420, 500))
    reversed_route = route_ride(3, "08:02:00", ["C"], route=(6969, 420))

    heap.insert(first)
    heap.insert(same_start)
    heap.insert(reversed_route)

    assert heap.count == 3
    assert first.passengers == ["A"]


def test_full_vehicle_falls_back_to_a_new_slot(heap):
    full = route_ride(1, "08:00:00", [f"P{i}" for i in range(MAX_PASSENGERS)])
    extra = route_ride(2, "08:03:00", ["Late Comer"])

    assert heap.insert(full)
    assert heap.insert(extra)

    assert heap.count == 2
    assert len(full.passengers) == MAX_PASSENGERS
    assert full.time_str == "08:00:00"
    assert heap.has_ride(extra)


def test_too_many_new_passengers_falls_back_to_a_new_slot(heap):
    existing = route_ride(1, "08:00:00", ["A", "B", "C", "D"])
    group = route_ride(2, "08:02:00", ["E", "F", "G"])

    heap.insert(existing)
    heap.insert(group)

    assert heap.count == 2
    assert existing.passengers == ["A", "B", "C", "D"]


def test_scan_skips_full_vehicle_and_uses_the_next_one(heap):
    full = route_ride(1, "08:00:00", [f"P{i}" for i in range(MAX_PASSENGERS)])
    second = route_ride(2, "08:03:00", ["Q"])
    third = route_ride(3, "08:05:00", ["R"])

    heap.insert(full)
    heap.insert(second)
    heap.insert(third)

    assert heap.count == 2
    assert second.passengers == ["Q", "R"]
    assert second.time_str == "08:05:00"
    assert len(full.passengers) == MAX_PASSENGERS


def test_first_matching_slot_wins(heap):
    a = route_ride(1, "08:00:00", ["A"])
    b = route_ride(2, "08:20:00", ["B"])
    # within 10 minutes of both a and b
    c = route_ride(3, "08:10:00", ["C"])

    heap.insert(a)
    heap.insert(b)
    heap.insert(c)

    assert heap.count == 2
    assert heap.slots[1] is a
    assert a.passengers == ["A", "C"]
    assert b.passengers == ["B"]


def test_merge_that_delays_the_root_restores_heap_order(heap):
    root = route_ride(1, "08:00:00", ["A"])
    other = Ride(2, "08:05:00", ["B"], 1, 2)
    far = Ride(3, "08:30:00", ["C"], 3, 4)
    joiner = route_ride(4, "08:10:00", ["D"])

    for ride in (root, other, far, joiner):
        assert heap.insert(ride)

    assert heap.count == 3
    assert root.time_str == "08:10:00"
    assert heap.peek() is other
    assert_heap_order(heap)


def test_duplicate_id_is_rejected_before_merging(heap):
    first = route_ride(1, "08:00:00", ["A"])
    same_id = route_ride(1, "08:01:00", ["B"])

    heap.insert(first)

    assert not heap.insert(same_id)
    assert first.passengers == ["A"]


def test_full_heap_refuses_even_a_mergeable_ride():
    heap = MinHeap(policy=HeapPolicy(max_capacity=1))
    first = route_ride(1, "08:00:00", ["A"])
    second = route_ride(2, "08:02:00", ["B"])

    heap.insert(first)

    assert not heap.insert(second)
    assert first.passengers == ["A"]


def test_consolidation_can_be_switched_off():
    heap = MinHeap(policy=HeapPolicy(enable_consolidation=False))
    first = route_ride(1, "08:00:00", ["A"])
    second = route_ride(2, "08:05:00", ["B"])

    heap.insert(first)
    heap.insert(second)

    assert heap.count == 2
    assert first.passengers == ["A"]


def test_reinserting_a_merged_ride_merges_it_again(heap):
    """
    A merged ride keeps no slot of its own, so the same object offered again
    is treated as a fresh request for the same vehicle.
    """
    first = route_ride(1, "08:00:00", ["A"])
    joiner = route_ride(2, "08:03:00", ["B"])

    heap.insert(first)
    heap.insert(joiner)
    assert not heap.has_ride(joiner)

    assert heap.insert(joiner)

    assert heap.count == 1
    assert first.passengers == ["A", "B", "B"]
