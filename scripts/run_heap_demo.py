import argparse
import logging
from typing import List

from rides.loader import load_rides
from rides.models import Ride
from rides.policy import default_policy
from scheduling.diagnostics import LoggingDiagnostics
from scheduling.heap import MinHeap
from scheduling.printer import HeapPrinter


def sample_rides() -> List[Ride]:
    return [
        Ride(1, "01:00:00", ["Passenger 1"], 1, 2),
        Ride(2, "02:00:00", ["Passenger 2"], 2, 3),
        Ride(3, "03:00:00", ["Passenger 3"], 3, 4),
        Ride(4, "04:00:00", ["Passenger 4"], 4, 5),
        Ride(42, "08:00:02", "pass2", 420, 6969),
        Ride(44, "08:05:00", ["p5"], 420, 6969),
        Ride(78, "08:09:00", ["Test 20", "Test 21", "Test 22"], 420, 6969),
        Ride(89, "6:6:6", ["Test 17", "Test 18", "Test 19"], 80, 420000),
        Ride(99, "07:00:00", "Test 19", 420, 6969),
        Ride(1147, "10:10:10", "p2", 420, 500),
        Ride(2345, "10:15:15", "p3", 420, 500),
    ]


def run_demo(csv_path=None, limit=20):
    print("=== STARTING RIDE HEAP DEMO ===")

    # 1. Load Data
    rides = load_rides(csv_path, limit=limit) if csv_path else sample_rides()
    invalid = sum(1 for ride in rides if not ride.is_valid)
    print(f"Loaded {len(rides)} Rides ({invalid} invalid).\n")

    # 2. Configure System
    heap = MinHeap(policy=default_policy(), diagnostics=LoggingDiagnostics())
    printer = HeapPrinter(heap)

    # 3. Insert (consolidating where possible)
    admitted = 0
    for ride in rides:
        if heap.insert(ride):
            admitted += 1
    print(f"Accepted {admitted} / {len(rides)} requests into {heap.count} vehicles.")

    printer.print_ids()
    printer.print_times()

    next_ride = heap.peek()
    if next_ride is not None:
        print("--- Next Ride ---")
        print(next_ride)

    # 4. Drain in order
    heap.sort()
    print("\n--- Rides In Departure Order ---")
    printer.print_array()

    print("\n=== DEMO COMPLETE ===")
    return heap


def main(argv=None):
    parser = argparse.ArgumentParser(description="Load ride requests into a min-heap and print them in order.")
    parser.add_argument("csv", nargs="?", help="ride CSV (ride_id, scheduled_time, passengers, start_id, end_id)")
    parser.add_argument("--limit", type=int, default=20, help="maximum number of rows to read")
    parser.add_argument("--verbose", action="store_true", help="show heap diagnostics")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    run_demo(args.csv, limit=args.limit)


if __name__ == "__main__":
    main()
