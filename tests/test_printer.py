import pytest

from scheduling.printer import HeapPrinter, format_array, format_rides, format_tree


def test_format_array_lists_every_slot(heap, ride1, ride2):
    heap.insert(ride2)
    heap.insert(ride1)

    lines = format_array(heap.slots).splitlines()

    assert len(lines) == len(heap.slots)
    assert lines[0] == "0: Ride ID = null, Ride Timestamp = null"
    assert lines[1] == "1: Ride ID = 1, Ride Timestamp = 01:00:00"
    assert lines[2] == "2: Ride ID = 2, Ride Timestamp = 02:00:00"


def test_format_tree_draws_levels(ride1, ride2, ride3):
    lines = format_tree([None, ride1, ride2, ride3], label="id").splitlines()

    assert len(lines) == 2
    assert lines[0].strip() == "1"
    assert lines[1].split() == ["2", "3"]
    # the root sits between its children
    assert lines[1].index("2") < lines[0].index("1") < lines[1].index("3")


def test_format_tree_by_time(heap, default_rides):
    heap.insert_all(default_rides)

    diagram = format_tree(heap.slots, label="time")

    assert diagram.splitlines()[0].strip() == "01:00:00"
    for ride in default_rides:
        assert ride.time_str in diagram


def test_format_tree_of_nothing():
    assert format_tree([]) == ""


def test_format_tree_rejects_unknown_label(ride1):
    with pytest.raises(ValueError):
        format_tree([None, ride1], label="passengers")


def test_format_rides_skips_empty_slots(ride1, ride2):
    text = format_rides([None, ride1, None, ride2])

    assert text.count("--- Ride") == 2
    assert "--- Ride 001 -------" in text


def test_heap_printer_output(heap, default_rides, capsys):
    heap.insert_all(default_rides)
    printer = HeapPrinter(heap)

    printer.print_times()
    printer.print_ids()
    printer.print_array()
    printer.print_all()

    out = capsys.readouterr().out
    assert "Printing Heap..." in out
    assert "01:00:00" in out
    assert "4: Ride ID = 4, Ride Timestamp = 04:00:00" in out
    assert "--- Ride 004 -------" in out


def test_printer_does_not_mutate_heap(heap, default_rides, capsys):
    heap.insert_all(default_rides)
    before = heap.slots

    HeapPrinter(heap).print_all()

    assert heap.slots == before
    assert heap.count == 4
