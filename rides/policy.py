"""
Purpose: Central configuration for the ride heap (single source of truth).
What it does:

Stores the fixed limits of the ride-share fleet:

MAX_CAPACITY = 20 (rides the heap can hold, backing length 21)

MAX_PASSENGERS = 6 (seats per vehicle)

CONSOLIDATION_WINDOW_MINUTES = 10 (how close two rides must be to share a vehicle)

Defines a HeapPolicy object so callers can pass the tunable parts explicitly.

Rule: No logic here. Just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass

# Number of vehicles (rides) the company has available.
MAX_CAPACITY: int = 20

# Seats per vehicle.
MAX_PASSENGERS: int = 6

# Two rides on the same route within this many minutes share one vehicle.
CONSOLIDATION_WINDOW_MINUTES: int = 10


@dataclass(frozen=True)
class HeapPolicy:
    """
    Tunable settings for a MinHeap instance.

    Notes:
    - max_capacity is the number of rides, not the backing length.
      Slot 0 is reserved, so the backing sequence is max_capacity + 1 long.
    - enable_consolidation switches the "attempt merge, else admit" step of insert.
    """

    # --- Capacity ---
    max_capacity: int = MAX_CAPACITY

    # --- Ride consolidation ---
    enable_consolidation: bool = True

    @property
    def backing_length(self) -> int:
        return self.max_capacity + 1

    def validate(self) -> None:
        """
        Basic sanity checks. MinHeap calls this once at construction.
        """
        if isinstance(self.max_capacity, bool) or not isinstance(self.max_capacity, int):
            raise ValueError("max_capacity must be an integer")

        if self.max_capacity < 1:
            raise ValueError("max_capacity must be >= 1")


def default_policy() -> HeapPolicy:
    """
    Convenience factory for the default policy.
    """
    p = HeapPolicy()
    p.validate()
    return p
