"""
Purpose: Fixed-capacity minimum heap of Ride requests, ordered by scheduled time.
What it does:
- Owns a 1-based backing list (slot 0 is always empty) so that
  parent(i) = i // 2, left(i) = 2i, right(i) = 2i + 1
- insert(): "attempt merge, else admit". A ride on the same route as an existing
  ride within CONSOLIDATION_WINDOW_MINUTES shares that vehicle instead of taking a slot.
- remove() by identity or id, peek(), has_ride(), is_empty()
- heapify() on an externally built 0-based or 1-based list, and heap sort

Lifecycle:
  EMPTY -> POPULATED (insert / heapify)
  POPULATED -> EMPTY (remove down to zero)
  POPULATED -> SORTED (sort). The slots then hold a flat ascending list.
  SORTED -> POPULATED (heapify only). insert/remove are refused while SORTED.

Rule: Every rejection is a False / None / unchanged-input result plus a diagnostic.
Nothing in here raises for bad input. Only a bad HeapPolicy fails fast.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from rides.models import InvalidRideError, Ride
from rides.policy import CONSOLIDATION_WINDOW_MINUTES, HeapPolicy, default_policy

from .diagnostics import Diagnostics, NullDiagnostics

logger = logging.getLogger(__name__)


class HeapState(Enum):
    EMPTY = "EMPTY"
    POPULATED = "POPULATED"
    SORTED = "SORTED"


class MinHeap:
    """
    Minimum heap of rides. slots[1] is always the ride with the earliest time.

    Not thread safe: one owner at a time.
    """

    def __init__(self, policy: Optional[HeapPolicy] = None, diagnostics: Optional[Diagnostics] = None):
        self.policy = policy or default_policy()
        self.policy.validate()
        self.diagnostics = diagnostics or NullDiagnostics()

        self._slots: List[Optional[Ride]] = [None] * self.policy.backing_length
        self._count = 0
        self._sorted = False

    # --- Structural queries ---

    @property
    def capacity(self) -> int:
        return self.policy.max_capacity

    @property
    def count(self) -> int:
        return self._count

    @property
    def slots(self) -> Tuple[Optional[Ride], ...]:
        """
        Read-only snapshot of the backing list (index 0 included).
        """
        return tuple(self._slots)

    @property
    def state(self) -> HeapState:
        if self._count == 0:
            return HeapState.EMPTY
        if self._sorted:
            return HeapState.SORTED
        return HeapState.POPULATED

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Ride]:
        for index in range(1, self._count + 1):
            yield self._slots[index]

    def __contains__(self, ride: object) -> bool:
        return self.has_ride(ride)

    def is_empty(self) -> bool:
        return self._count == 0

    def peek(self) -> Optional[Ride]:
        """
        The earliest ride, without removing it. None when empty.
        """
        return self._slots[1]

    def get_index(self, ride: object) -> int:
        """
        Slot index of ride (matched by identity or id), or -1 if it is not in the heap.
        """
        if not isinstance(ride, Ride):
            return -1

        for index in range(1, self._count + 1):
            if ride.same_ride(self._slots[index]):
                return index
        return -1

    def has_ride(self, ride: object) -> bool:
        return self.get_index(ride) != -1

    # --- Public API: mutation ---

    def insert(self, ride: Optional[Ride]) -> bool:
        """
        Adds ride to the heap, or folds it into an existing ride on the same route.
        Returns False, leaving the heap untouched, if the ride is missing or invalid,
        the heap is full, the ride (or its id) is already here, or the heap is SORTED.
        """
        if not isinstance(ride, Ride) or not ride.is_valid:
            self._debug("Unable to insert ride! The passed ride was missing or invalid...", "insert")
            return False

        if self._sorted:
            self._debug(f"Unable to insert ride {ride.id}! The heap is sorted, call heapify() first...", "insert")
            return False

        if self._count >= self.capacity:
            self._debug(
                f"Unable to insert the passed ride! Maximum ride limit has been reached... "
                f"Ride ID: {ride.id}, Ride Time: {ride.time_str}, Max Capacity: {self.capacity}",
                "insert",
            )
            return False

        if self.has_ride(ride):
            self._debug(
                f"Unable to insert ride! Ride was already contained in the heap... "
                f"Ride ID: {ride.id}, Ride Time: {ride.time_str}",
                "insert",
            )
            return False

        # phase 1: attempt merge
        if self.policy.enable_consolidation and self._consolidate(ride):
            return True

        # phase 2: admit into the next free slot
        self._debug(f"Attempting to insert ride... \n {ride}", "insert")
        self._count += 1
        self._slots[self._count] = ride
        self._up_heap(self._count)
        return True

    def insert_all(self, rides: Optional[Sequence[Optional[Ride]]]) -> bool:
        """
        Inserts every valid ride of a 0-based or 1-based list, skipping empty/invalid entries.

        The whole batch is refused up front if the list is missing, empty, longer than
        capacity + 1, or holds no valid ride. After that each ride goes through insert();
        returns True only if every one of them was admitted or consolidated.
        """
        if rides is None:
            self._debug("Unable to add ride! The passed ride array was either null or empty...", "insert")
            return False

        if len(rides) < 1 or len(rides) > self.policy.backing_length:
            self._debug(
                f"Unable to add rides! Invalid array length... Length: {len(rides)}, "
                f"Max length: {self.policy.backing_length}",
                "insert",
            )
            return False

        valid = [ride for ride in rides if isinstance(ride, Ride) and ride.is_valid]
        if not valid:
            self._debug("Unable to add rides! The passed array did not contain a valid ride...", "insert")
            return False

        if self._sorted:
            self._debug("Unable to add rides! The heap is sorted, call heapify() first...", "insert")
            return False

        inserted_all = True
        for ride in valid:
            if not self.insert(ride):
                inserted_all = False
        return inserted_all

    def remove(self, ride: Optional[Ride]) -> bool:
        """
        Removes ride (matched by identity or id) from the heap.
        The last ride takes its slot and is sifted into place.
        """
        if ride is None:
            self._debug("Unable to remove ride! The passed ride was null...", "remove")
            return False

        if self._sorted:
            self._debug("Unable to remove ride! The heap is sorted, call heapify() first...", "remove")
            return False

        index = self.get_index(ride)
        if index == -1:
            self._debug(
                f"Unable to remove the passed ride from the heap! Ride was not found... "
                f"RideID = {getattr(ride, 'id', None)}",
                "remove",
            )
            return False

        self._debug(f"Removing ride... RideID = {ride.id}, Index = {index}", "remove")

        last = self._count
        if index != last:
            self._swap(index, last)

        self._slots[last] = None
        self._count -= 1

        if index <= self._count:
            self._sift(index)
        return True

    def heapify(self, ride_count: Optional[int] = None, rides: Optional[Sequence[Optional[Ride]]] = None) -> Optional[List[Optional[Ride]]]:
        """
        Puts a list of rides in heap order and adopts it as this heap's backing list.

        With no arguments the heap's own slots are rebuilt (e.g. after sort()).
        With arguments, rides may be 0-based (index 0 occupied, shifted right here)
        or 1-based. Slots 1..ride_count must then hold valid rides with distinct ids
        and nothing may sit past ride_count. On any rejection the input is returned
        unchanged and the heap is left as it was.

        Starts at the last node that can have children and works back to the root,
        down-heaping at each node.
        """
        if ride_count is None and rides is None:
            return self._rebuild()

        if rides is None:
            self._debug("Unable to heapify! The passed ride array was null...", "heapify")
            return rides

        if isinstance(ride_count, bool) or not isinstance(ride_count, int) or ride_count < 1:
            self._debug(
                f"Invalid ride count passed! Must be at least 1 ride in the heap to heapify... RideCount: {ride_count}",
                "heapify",
            )
            return rides

        if len(rides) > self.policy.backing_length:
            self._debug(
                f"Unable to heapify! The passed array is too large... Length: {len(rides)}, "
                f"Max length: {self.policy.backing_length}",
                "heapify",
            )
            return rides

        candidate = self._to_one_based(rides)
        if candidate is None or not self._is_heapable(candidate, ride_count):
            return rides

        candidate.extend([None] * (self.policy.backing_length - len(candidate)))

        self._slots = candidate
        self._count = ride_count
        self._sorted = False

        for index in range(ride_count // 2, 0, -1):
            self._down_heap(index)

        return list(self._slots)

    def sort(self) -> List[Optional[Ride]]:
        """
        Heap sort. Returns the backing list with slots 1..count in ascending time order.

        count is unchanged afterwards, but the heap becomes SORTED: call heapify()
        before inserting or removing again. Rides with equal times come out in no
        particular order.
        """
        if self._count < 2:
            return list(self._slots)

        # move the minimum to the end of a shrinking range, leaving a descending run
        for last in range(self._count, 1, -1):
            self._swap(1, last)
            self._down_heap(1, size=last - 1)

        self._reverse(1, self._count)
        self._sorted = True
        return list(self._slots)

    # --- Heap mechanics ---

    def _consolidate(self, ride: Ride) -> bool:
        """
        Folds ride into the first existing ride (ascending slot order) on the same
        route within the consolidation window that has room for its passengers.
        The survivor takes the later of the two times.

        The folded ride never takes a slot, so its id is not tracked afterwards:
        inserting that same object again is a new request and merges its passengers again.
        """
        for index in range(1, self._count + 1):
            existing = self._slots[index]

            if not existing.same_route(ride):
                continue
            if existing.minutes_between(ride) > CONSOLIDATION_WINDOW_MINUTES:
                continue

            if not existing.add_passenger(ride.passengers):
                self._debug(
                    f"Ride {existing.id} has no room for the passengers of ride {ride.id}, checking other rides...",
                    "consolidate",
                )
                continue

            if ride.compare_to(existing) > 0:
                existing.reschedule(ride.scheduled_time)

            self._sift(index)
            self._debug(
                f"Merged ride {ride.id} into ride {existing.id}... "
                f"Ride Time: {existing.time_str}, Passengers: {len(existing.passengers)}",
                "consolidate",
            )
            return True

        return False

    def _rebuild(self) -> Optional[List[Optional[Ride]]]:
        if self._count < 1:
            self._debug("Invalid ride count! Must be at least 1 ride in the heap to heapify... RideCount: 0", "heapify")
            return list(self._slots)

        for index in range(self._count // 2, 0, -1):
            self._down_heap(index)

        self._sorted = False
        return list(self._slots)

    def _to_one_based(self, rides: Sequence[Optional[Ride]]) -> Optional[List[Optional[Ride]]]:
        candidate = list(rides)
        if not candidate or candidate[0] is None:
            return candidate

        # 0-based input: shift every element one position to the right
        candidate.insert(0, None)
        while len(candidate) > self.policy.backing_length and candidate[-1] is None:
            candidate.pop()

        if len(candidate) > self.policy.backing_length:
            self._debug("Unable to heapify! The shifted array no longer fits in the heap...", "heapify")
            return None
        return candidate

    def _is_heapable(self, candidate: List[Optional[Ride]], ride_count: int) -> bool:
        if ride_count > len(candidate) - 1:
            self._debug(
                f"Unable to heapify! Ride count exceeds the passed array... RideCount: {ride_count}, "
                f"Slots: {len(candidate) - 1}",
                "heapify",
            )
            return False

        seen_ids = set()
        for index in range(1, ride_count + 1):
            ride = candidate[index]
            if not isinstance(ride, Ride) or not ride.is_valid:
                self._debug(f"Unable to heapify! Missing or invalid ride at index {index}...", "heapify")
                return False
            if ride.id in seen_ids:
                self._debug(f"Unable to heapify! Duplicate ride id {ride.id} at index {index}...", "heapify")
                return False
            seen_ids.add(ride.id)

        if any(ride is not None for ride in candidate[ride_count + 1:]):
            self._debug(f"Unable to heapify! Rides found past index {ride_count}...", "heapify")
            return False
        return True

    def _sift(self, index: int) -> None:
        # the ride at index may now belong above or below its current slot
        self._up_heap(index)
        self._down_heap(index)

    def _up_heap(self, index: int) -> int:
        """
        Moves the ride at index up while it is earlier than its parent.
        Returns the index it settled at.
        """
        child = index
        while child > 1:
            parent = child // 2
            if not self._is_smaller(child, parent):
                break
            self._swap(child, parent)
            child = parent
        return child

    def _down_heap(self, index: int, size: Optional[int] = None) -> None:
        """
        Moves the ride at index down, swapping with the earlier child, until it is
        no later than both children. Only indices up to size (default count) count as occupied.
        """
        size = self._count if size is None else size
        parent = index

        while True:
            left = parent * 2
            right = left + 1

            if left > size:
                return

            smallest = left
            if right <= size and self._is_smaller(right, left, size):
                smallest = right

            if not self._is_smaller(smallest, parent, size):
                return

            self._swap(smallest, parent)
            parent = smallest

    def _is_valid_index(self, index: int, size: Optional[int] = None) -> bool:
        size = self._count if size is None else size
        return 1 <= index <= size

    def _is_smaller(self, index1: int, index2: int, size: Optional[int] = None) -> bool:
        """
        True if the ride at index1 is earlier than the ride at index2.
        Out-of-range indices and invalid rides are never "smaller".
        """
        if not (self._is_valid_index(index1, size) and self._is_valid_index(index2, size)):
            return False

        try:
            return self._slots[index1].compare_to(self._slots[index2]) < 0
        except InvalidRideError:
            self._debug(f"Unable to compare rides at {index1} and {index2}! Invalid ride detected...", "compare")
            return False

    def _swap(self, index1: int, index2: int) -> bool:
        if not (self._is_valid_index(index1) and self._is_valid_index(index2)):
            self._debug(
                f"Unable to swap values! Index was out of bounds... Index1 = {index1}, Index2 = {index2}, "
                f"Count = {self._count}",
                "swap",
            )
            return False

        self._slots[index1], self._slots[index2] = self._slots[index2], self._slots[index1]
        return True

    def _reverse(self, left: int, right: int) -> None:
        while left < right:
            self._slots[left], self._slots[right] = self._slots[right], self._slots[left]
            left += 1
            right -= 1

    def _debug(self, message: str, origin: str) -> None:
        try:
            self.diagnostics.emit(message, origin)
        except Exception:
            # a broken sink must not change what the heap does
            logger.exception("Diagnostics sink failed while reporting from %s", origin)
