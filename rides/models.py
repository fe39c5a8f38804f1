"""
Purpose: Domain model for the Rides capability.
What it does:
- Defines the Ride request (id, scheduled time, passengers, start/end location ids)
- Validates every field once, at construction, and records the outcome in is_valid
- Orders rides by scheduled time only

Rule: No heap logic here. A Ride knows how to validate, compare and grow itself.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import List, Optional, Sequence, Union

from .policy import MAX_PASSENGERS

logger = logging.getLogger(__name__)

TimeLike = Union[time, datetime, str]
Passengers = Union[str, Sequence[str]]


class InvalidRideError(ValueError):
    """Raised when an invalid ride takes part in a time comparison."""
    pass


def parse_time(value: Optional[TimeLike]) -> Optional[time]:
    """
    Converts a "H:M:S" string (single digits allowed, e.g. "6:6:6"),
    a datetime or a time into a time of day.
    Returns None when the value is not a valid 24-hour time.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)

    if isinstance(value, time):
        return value.replace(microsecond=0)

    if not isinstance(value, str):
        return None

    parts = [part.strip() for part in value.strip().split(":")]
    if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
        return None

    hour, minute, second = (int(part) for part in parts)
    if not (0 <= hour < 24 and 0 <= minute < 60 and 0 <= second < 60):
        return None

    return time(hour, minute, second)


def is_valid_name(name: object) -> bool:
    """
    A passenger name must be a non-blank string holding exactly one name.
    """
    if not isinstance(name, str) or not name.strip():
        return False
    # a comma means several names were packed into one string
    return "," not in name


def _as_name_list(passengers: object) -> Optional[List[object]]:
    if isinstance(passengers, str):
        return [passengers]
    if isinstance(passengers, (list, tuple)):
        return list(passengers)
    return None


def _seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(eq=False)
class Ride:
    """
    A single ride request in the ride-share app.

    Identity and locations never change after construction. scheduled_time changes
    only through reschedule() and passengers only grow through add_passenger().
    A ride that fails validation stays invalid and must never enter a heap.
    """

    id: int
    scheduled_time: Optional[TimeLike]
    passengers: Passengers
    start_id: int
    end_id: int

    is_valid: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        raw_time = self.scheduled_time
        raw_passengers = self.passengers

        self.scheduled_time = parse_time(raw_time)
        self.passengers = []

        # validation order matters: the first failing rule is the one reported
        if not _is_positive_int(self.id):
            logger.debug("Unable to create ride! An invalid ride id was detected... id=%r", self.id)
            return

        if self.scheduled_time is None:
            logger.debug("Unable to create ride %s! An invalid time was detected... time=%r", self.id, raw_time)
            return

        names = _as_name_list(raw_passengers)
        if not names or len(names) > MAX_PASSENGERS or not all(is_valid_name(n) for n in names):
            logger.debug("Unable to create ride %s! At least one invalid passenger was detected...", self.id)
            return

        if not _is_positive_int(self.start_id):
            logger.debug("Unable to create ride %s! An invalid start id was detected... start_id=%r", self.id, self.start_id)
            return

        if not _is_positive_int(self.end_id):
            logger.debug("Unable to create ride %s! An invalid end id was detected... end_id=%r", self.id, self.end_id)
            return

        self.passengers = [n.strip() for n in names]
        self.is_valid = True

    # --- Ordering ---

    def compare_to(self, other: Ride) -> int:
        """
        Compares two rides by scheduled time only.
        Returns -1, 0 or 1. Equal times are not broken by any other field.
        Raises InvalidRideError if either ride is invalid.
        """
        if not isinstance(other, Ride) or not self.is_valid or not other.is_valid:
            raise InvalidRideError("Unable to compare rides! At least one invalid ride was detected...")

        mine = _seconds_of_day(self.scheduled_time)
        theirs = _seconds_of_day(other.scheduled_time)
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: Ride) -> bool:
        return self.compare_to(other) < 0

    def minutes_between(self, other: Ride) -> float:
        """
        Absolute distance between two rides' scheduled times, in minutes.
        """
        if not isinstance(other, Ride) or not self.is_valid or not other.is_valid:
            raise InvalidRideError("Unable to measure the time between rides! At least one invalid ride was detected...")

        return abs(_seconds_of_day(self.scheduled_time) - _seconds_of_day(other.scheduled_time)) / 60

    def same_ride(self, other: Optional[Ride]) -> bool:
        """
        True if other is this exact object or carries the same ride id.
        """
        if other is None:
            return False
        return other is self or other.id == self.id

    def same_route(self, other: Ride) -> bool:
        return self.start_id == other.start_id and self.end_id == other.end_id

    # --- Mutation (consolidation only) ---

    def add_passenger(self, passengers: Passengers) -> bool:
        """
        Appends one name or a list of names to this ride.
        All or nothing: if any name is invalid or the seats run out, the passenger
        list is left exactly as it was and False is returned.
        """
        if not self.is_valid:
            return False

        names = _as_name_list(passengers)
        if not names:
            return False

        if not all(is_valid_name(n) for n in names):
            logger.debug("Unable to add passengers to ride %s! One or more names were invalid...", self.id)
            return False

        if len(self.passengers) + len(names) > MAX_PASSENGERS:
            logger.debug(
                "Unable to add passengers to ride %s! Insufficient ride capacity... count=%d, adding=%d, max=%d",
                self.id, len(self.passengers), len(names), MAX_PASSENGERS,
            )
            return False

        self.passengers.extend(n.strip() for n in names)
        return True

    def reschedule(self, new_time: TimeLike) -> bool:
        """
        Moves this ride to new_time. Returns False (time unchanged) if new_time is not valid.
        """
        parsed = parse_time(new_time)
        if not self.is_valid or parsed is None:
            return False
        self.scheduled_time = parsed
        return True

    # --- Rendering ---

    @property
    def time_str(self) -> str:
        if self.scheduled_time is None:
            return "None"
        return self.scheduled_time.strftime("%H:%M:%S")

    def format_passengers(self) -> str:
        return "".join(f"{p}\n" for p in self.passengers)

    def __str__(self) -> str:
        ride_id = self.id if isinstance(self.id, int) else 0
        return (
            f"--- Ride {ride_id:03d} -------\n"
            f"Time: {self.time_str}\n"
            f"Start ID: {self.start_id}\n"
            f"End ID: {self.end_id}\n"
            f"Passengers:\n{self.format_passengers()}"
            "--------------------"
        )
