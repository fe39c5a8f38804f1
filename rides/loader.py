"""
Purpose: Turns tabular ride requests (CSV / DataFrame) into Ride objects.
What it does:
- Reads a CSV with columns: ride_id, scheduled_time, passengers, start_id, end_id
- passengers is a "|" separated list of names (commas are not allowed in names)
- Builds one Ride per row, valid or not. The heap decides what to admit.

Rule: No heap logic, no validation beyond what Ride already does.
"""

from __future__ import annotations

from typing import List, Optional

import pandas as pd

from .models import Ride

REQUIRED_COLUMNS = ["ride_id", "scheduled_time", "passengers", "start_id", "end_id"]
PASSENGER_SEPARATOR = "|"


def _to_int(value) -> int:
    # pandas hands back floats/NaN for sparse integer columns
    if pd.isna(value):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_names(value) -> List[str]:
    if pd.isna(value):
        return []
    return [name for name in str(value).split(PASSENGER_SEPARATOR)]


def rides_from_frame(df: pd.DataFrame) -> List[Ride]:
    """
    Builds a Ride for every row of df.
    Raises ValueError if a required column is missing.
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Ride table is missing columns: {missing}")

    rides = []
    for _, row in df.iterrows():
        scheduled = row["scheduled_time"]
        rides.append(
            Ride(
                id=_to_int(row["ride_id"]),
                scheduled_time=None if pd.isna(scheduled) else str(scheduled),
                passengers=_to_names(row["passengers"]),
                start_id=_to_int(row["start_id"]),
                end_id=_to_int(row["end_id"]),
            )
        )
    return rides


def load_rides(path: str, limit: Optional[int] = None) -> List[Ride]:
    """
    Reads ride requests from a CSV file. limit keeps only the first N rows.
    """
    df = pd.read_csv(path, dtype={"scheduled_time": str, "passengers": str})
    if limit is not None:
        df = df.head(limit)
    return rides_from_frame(df)
