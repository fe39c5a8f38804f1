"""
Rides domain package.

Public API:
- Domain model: Ride, InvalidRideError
- Configuration: HeapPolicy, default_policy and the fleet constants
- Input: load_rides, rides_from_frame

"""
from .models import Ride, InvalidRideError, parse_time
from .policy import (
    CONSOLIDATION_WINDOW_MINUTES,
    MAX_CAPACITY,
    MAX_PASSENGERS,
    HeapPolicy,
    default_policy,
)
from .loader import load_rides, rides_from_frame

__all__ = ["Ride",
           "InvalidRideError",
           "parse_time",
           "HeapPolicy",
           "default_policy",
           "MAX_CAPACITY",
           "MAX_PASSENGERS",
           "CONSOLIDATION_WINDOW_MINUTES",
           "load_rides",
           "rides_from_frame",
           ]
