"""Example usage of TrafficTracker."""

import logging
import sys
from pathlib import Path

# Add src to path so we can import bikeflow
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bikeflow import ANY_TIME, TrafficTracker, save_traffic_map

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

OUTPUT_PATH = "traffic_map.html"
TOP_N = 10


def parse_time(text: str) -> int:
    """Parse "HH:MM" (24-hour) into minutes since midnight."""
    hours, minutes = text.split(":")
    value = int(hours) * 60 + int(minutes)
    if not 0 <= value < 24 * 60:
        raise ValueError(f"Time out of range: {text}")
    return value


def print_traffic(time_filter: int = ANY_TIME):
    """
    Load Bluebikes data, print the busiest stations and write an HTML map.

    Args:
        time_filter: Minutes since midnight, or ANY_TIME for all trips.
    """
    try:
        tracker = TrafficTracker(load_data=True)
    except Exception as e:
        logger.error(f"Failed to load data: {e}", exc_info=True)
        print(f"Error: {e}")
        sys.exit(1)

    snapshot = tracker.get_snapshot(time_filter)

    print(f"\n{'='*70}")
    print(f"Trips at {snapshot.time_label}: {snapshot.trip_count}")
    print(f"{'='*70}\n")

    busiest = sorted(snapshot.markers, key=lambda m: m.traffic.total_traffic, reverse=True)[:TOP_N]
    for marker in busiest:
        traffic = marker.traffic
        print(
            f"  {traffic.station.name[:40]:40s} {traffic.total_traffic:6d} trips  "
            f"({traffic.departures} out, {traffic.arrivals} in)"
        )

    save_traffic_map(snapshot, OUTPUT_PATH)
    print(f"\nMap written to {OUTPUT_PATH}\n")


if __name__ == "__main__":
    if len(sys.argv) > 1:
        # Command line mode: pass a time of day, e.g. 17:30
        try:
            print_traffic(parse_time(sys.argv[1]))
        except ValueError as e:
            print(f"Error: {e}")
            print("Pass a time as HH:MM, e.g. 08:30")
            sys.exit(1)
    else:
        print_traffic()
