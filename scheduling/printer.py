"""
Purpose: Console renderings of a ride heap (presentation only).
What it does:
- format_array: one line per slot, index 0 included
- format_tree: the slots drawn level by level as a heap diagram, labelled by id or time
- print_* helpers write those renderings to stdout
- HeapPrinter binds the helpers to one MinHeap

Rule: Read-only. Nothing here may mutate the sequence or heap it is given.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from rides.models import Ride

from .heap import MinHeap

EMPTY_LABEL = "null"

Slots = Sequence[Optional[Ride]]


def _label(ride: Optional[Ride], label: str) -> str:
    if ride is None:
        return EMPTY_LABEL
    if label == "id":
        return str(ride.id)
    if label == "time":
        return ride.time_str
    raise ValueError(f"Unknown label '{label}', expected 'id' or 'time'")


def format_array(slots: Slots) -> str:
    lines = []
    for index, ride in enumerate(slots):
        ride_id = EMPTY_LABEL if ride is None else ride.id
        timestamp = EMPTY_LABEL if ride is None else ride.time_str
        lines.append(f"{index}: Ride ID = {ride_id}, Ride Timestamp = {timestamp}")
    return "\n".join(lines)


def format_tree(slots: Slots, label: str = "time") -> str:
    """
    Draws slots[1:] as a heap diagram. Every value is right-aligned in a column as
    wide as the longest label, and the gap between subtrees halves on each level.
    """
    if not slots:
        return ""

    values = [_label(ride, label) for ride in slots]
    levels = int(math.log2(len(values))) + 1
    max_length = max(len(value) for value in values)

    lines: List[str] = []
    current = 1
    for level in range(levels):
        if current >= len(values):
            break

        level_width = 2 ** level
        subtree_spacing = (max_length + 2) * (2 ** (levels - level - 1)) - 1
        child_spacing = subtree_spacing - max_length + 1

        parts = [" " * (subtree_spacing // 2)]
        for _ in range(level_width):
            if current >= len(values):
                break
            parts.append(values[current].rjust(max_length))
            parts.append(" " * child_spacing)
            current += 1

        lines.append("".join(parts).rstrip())

    return "\n".join(lines)


def format_rides(slots: Slots) -> str:
    return "\n".join(str(ride) for ride in slots if ride is not None)


def print_array(slots: Slots) -> None:
    print(format_array(slots))


def print_ids(slots: Slots) -> None:
    print("\nPrinting Heap...\n")
    print(format_tree(slots, label="id"))
    print()


def print_times(slots: Slots) -> None:
    print("\nPrinting Heap...\n")
    print(format_tree(slots, label="time"))
    print()


def print_all(slots: Slots) -> None:
    print(format_rides(slots))


class HeapPrinter:
    """
    Prints a MinHeap. Works on a snapshot of the slots on every call.
    """

    def __init__(self, heap: MinHeap):
        self.heap = heap

    def print_array(self) -> None:
        print_array(self.heap.slots)

    def print_ids(self) -> None:
        print_ids(self.heap.slots)

    def print_times(self) -> None:
        print_times(self.heap.slots)

    def print_all(self) -> None:
        print_all(self.heap.slots)
