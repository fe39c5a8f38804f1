import pandas as pd
import numpy as np
from datetime import datetime, timedelta


def generate_mock_rides(num_rides=20, num_routes=6, output_file="raw_rides_generated.csv", seed=None):
    """
    Generates a dataset of ride requests designed to exercise the ride heap.
    A small, fixed number of routes (start/end pairs) and a narrow morning window
    make sure several requests land on the same route within 10 minutes of each
    other, which is what triggers ride consolidation.
    """
    rng = np.random.default_rng(seed)

    # 1. Generate fixed routes (start id, end id) to force consolidation opportunities
    routes = []
    for _ in range(num_routes):
        start_id = int(rng.integers(1, 500))
        end_id = int(rng.integers(500, 1000))
        routes.append((start_id, end_id))

    data = []
    base = datetime(2024, 1, 1, 7, 0, 0)

    # 2. Generate ride requests between 07:00 and 09:00
    for ride_index in range(num_rides):
        start_id, end_id = routes[int(rng.integers(0, num_routes))]
        scheduled = base + timedelta(seconds=int(rng.integers(0, 2 * 3600)))
        party_size = int(rng.choice([1, 2, 3], p=[0.6, 0.3, 0.1]))

        data.append({
            "ride_id": ride_index + 1,
            "scheduled_time": scheduled.strftime("%H:%M:%S"),
            "passengers": "|".join(f"Passenger {ride_index + 1}.{seat + 1}" for seat in range(party_size)),
            "start_id": start_id,
            "end_id": end_id,
        })

    # 3. Save to CSV
    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_rides} rides and saved to '{output_file}'")

    # Print a quick preview of consolidation density
    print("\nTop 5 Routes (Consolidation Potential):")
    counts = df.groupby(["start_id", "end_id"]).size().sort_values(ascending=False).head(5)
    for (start_id, end_id), count in counts.items():
        print(f"  {start_id} -> {end_id}: {count} rides")

    return df


if __name__ == "__main__":
    generate_mock_rides(num_rides=20, num_routes=6)
