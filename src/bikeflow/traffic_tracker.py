"""Main bike-share traffic tracker class."""

import logging
from datetime import datetime
from typing import List, Optional

import pandas as pd

from .models import ANY_TIME, Station, StationMarker, StationTraffic, TrafficSnapshot, Trip
from .data_loader import BikeShareLoader
from .scales import flow_bucket, radius_scale
from .traffic import compute_station_traffic, filter_trips_by_time, time_filter_label

logger = logging.getLogger(__name__)


class TrafficTracker:
    """
    Computes station traffic for a bike-share system.

    This class provides methods to:
    - Find stations by name or ID
    - Count arrivals and departures per station, optionally around a time of day
    - Build render-ready snapshots with marker sizes and flow colors
    """

    def __init__(self, load_data: bool = True, stations_url: Optional[str] = None, trips_url: Optional[str] = None):
        """
        Initialize the tracker.

        Args:
            load_data: If True, download station and trip data on init. If False, must call
                      load_data_from_files() or load_data_from_url() manually.
            stations_url: Station JSON URL (defaults to the Bluebikes snapshot).
            trips_url: Trip CSV URL (defaults to the Bluebikes March 2024 trips).
        """
        self.loader = BikeShareLoader()

        if load_data:
            self.load_data_from_url(stations_url, trips_url)

    def load_data_from_url(self, stations_url: Optional[str] = None, trips_url: Optional[str] = None) -> None:
        """Download station and trip data."""
        try:
            self.loader.load_from_url(stations_url, trips_url)
        except Exception as e:
            logger.debug(f"Tracker load aborted: {e}")
            raise

    def load_data_from_files(self, stations_path: str, trips_path: str) -> None:
        """
        Load station and trip data from local files.

        Args:
            stations_path: Path to the GBFS station_information JSON.
            trips_path: Path to the trip CSV.
        """
        self.loader.load_from_files(stations_path, trips_path)

    @property
    def stations(self) -> List[Station]:
        return list(self.loader.stations.values())

    @property
    def trips(self) -> List[Trip]:
        return self.loader.trips

    def get_station(self, station_input: str) -> Station:
        """
        Get a station by ID or name.

        Args:
            station_input: Either a station ID (e.g., "A32000") or name (e.g., "MIT at Mass Ave").

        Returns:
            Station object.

        Raises:
            ValueError: If station not found.
        """
        try:
            return self.loader.get_station(station_input)
        except ValueError:
            pass

        stations = self.loader.find_stations_by_name(station_input)
        if not stations:
            raise ValueError(f"No station found matching '{station_input}'")

        return stations[0]

    def find_stations_by_name(self, name: str) -> List[Station]:
        """Find all stations matching a name (partial match)."""
        return self.loader.find_stations_by_name(name)

    def get_station_traffic(self, time_filter: int = ANY_TIME) -> List[StationTraffic]:
        """
        Count arrivals and departures for every station.

        Args:
            time_filter: Minutes since midnight, or ANY_TIME for all trips.

        Returns:
            StationTraffic per station, in source order. Counts are always
            computed from scratch against the unmodified station records.
        """
        trips = filter_trips_by_time(self.trips, time_filter)
        return compute_station_traffic(self.stations, trips)

    def get_snapshot(self, time_filter: int = ANY_TIME) -> TrafficSnapshot:
        """
        Build everything the map needs for a time filter value.

        Args:
            time_filter: Minutes since midnight, or ANY_TIME for all trips.

        Returns:
            TrafficSnapshot with one marker per station.
        """
        trips = filter_trips_by_time(self.trips, time_filter)
        traffic = compute_station_traffic(self.stations, trips)

        max_traffic = max((t.total_traffic for t in traffic), default=0)
        scale = radius_scale(max_traffic, time_filter)

        markers = [
            StationMarker(traffic=t, radius=scale(t.total_traffic), flow=flow_bucket(t))
            for t in traffic
        ]

        logger.debug(
            f"Snapshot for {time_filter_label(time_filter)}: {len(trips)} trips, "
            f"max traffic {max_traffic}"
        )

        return TrafficSnapshot(
            time_filter=time_filter,
            time_label=time_filter_label(time_filter),
            trip_count=len(trips),
            max_traffic=max_traffic,
            markers=markers,
            last_updated=datetime.now(),
        )

    def traffic_dataframe(self, time_filter: int = ANY_TIME) -> pd.DataFrame:
        """Station traffic as a table, one row per station in source order."""
        rows = [
            {
                "station_id": t.station_id,
                "name": t.station.name,
                "latitude": t.latitude,
                "longitude": t.longitude,
                "arrivals": t.arrivals,
                "departures": t.departures,
                "total_traffic": t.total_traffic,
                "flow": flow_bucket(t),
            }
            for t in self.get_station_traffic(time_filter)
        ]
        columns = ["station_id", "name", "latitude", "longitude", "arrivals", "departures", "total_traffic", "flow"]
        df = pd.DataFrame(rows, columns=columns)

        max_traffic = int(df["total_traffic"].max()) if not df.empty else 0
        df["radius"] = radius_scale(max_traffic, time_filter).map_series(df["total_traffic"])
        return df
