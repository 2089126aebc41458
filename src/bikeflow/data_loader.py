"""Station and trip data loader for bike-share systems."""

import io
import json
import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd
import requests

from .models import Station, Trip

logger = logging.getLogger(__name__)

# Bluebikes station snapshot (GBFS station_information) and March 2024 trips
STATIONS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"
TRIPS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv"

REQUEST_TIMEOUT = 30  # Seconds

TRIP_DATE_COLUMNS = ["started_at", "ended_at"]
TRIP_ID_COLUMNS = ["start_station_id", "end_station_id"]


class BikeShareLoader:
    """Loads and indexes bike-share stations and trips."""

    def __init__(self):
        """Initialize the loader."""
        self.stations: Dict[str, Station] = {}  # station_id -> Station, in source order
        self.stations_by_name: Dict[str, List[str]] = {}  # name -> [station_ids]
        self.trips: List[Trip] = []

    def load_from_url(self, stations_url: Optional[str] = None, trips_url: Optional[str] = None) -> None:
        """
        Download and load station and trip data.

        Current data is only replaced once both documents have been fetched
        and parsed; on any failure the previous stations and trips are kept.
        """
        stations_url = stations_url or STATIONS_URL
        trips_url = trips_url or TRIPS_URL

        logger.info(f"Downloading station data from {stations_url}")
        try:
            response = requests.get(stations_url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            stations, stations_by_name = self._parse_stations(response.json())
        except Exception as e:
            logger.error(f"Failed to load station data: {e}")
            raise

        logger.info(f"Downloading trip data from {trips_url}")
        try:
            response = requests.get(trips_url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            trips = self._parse_trips(response.text)
        except Exception as e:
            logger.error(f"Failed to load trip data: {e}")
            raise

        self._set_data(stations, stations_by_name, trips)

    def load_from_files(self, stations_path: str, trips_path: str) -> None:
        """Load station JSON and trip CSV from local files."""
        logger.info("Loading bike-share data from local files")
        try:
            with open(stations_path, "r", encoding="utf-8") as f:
                stations, stations_by_name = self._parse_stations(json.load(f))
            with open(trips_path, "r", encoding="utf-8") as f:
                trips = self._parse_trips(f.read())
        except Exception as e:
            logger.error(f"Failed to load bike-share data: {e}")
            raise

        self._set_data(stations, stations_by_name, trips)

    def _set_data(self, stations: Dict[str, Station], stations_by_name: Dict[str, List[str]], trips: List[Trip]) -> None:
        self.stations = stations
        self.stations_by_name = stations_by_name
        self.trips = trips
        logger.info(f"Loaded {len(self.stations)} stations and {len(self.trips)} trips")

    @staticmethod
    def _parse_stations(payload: dict) -> Tuple[Dict[str, Station], Dict[str, List[str]]]:
        """Parse a GBFS station_information document into Station objects and a name index."""
        stations: Dict[str, Station] = {}
        stations_by_name: Dict[str, List[str]] = {}

        for entry in payload["data"]["stations"]:
            station_id = str(entry["short_name"])
            capacity = entry.get("capacity")
            station = Station(
                station_id=station_id,
                name=entry.get("name", station_id),
                latitude=float(entry["lat"]),
                longitude=float(entry["lon"]),
                capacity=int(capacity) if capacity is not None else None,
            )
            stations[station_id] = station
            stations_by_name.setdefault(station.name, []).append(station_id)

        return stations, stations_by_name

    @staticmethod
    def _parse_trips(csv_content: str) -> List[Trip]:
        """Parse trip CSV content into Trip objects."""
        df = pd.read_csv(
            io.StringIO(csv_content),
            dtype={column: str for column in TRIP_ID_COLUMNS + ["ride_id", "bike_type"]},
        )

        missing = [c for c in TRIP_DATE_COLUMNS + TRIP_ID_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Trip data is missing columns: {', '.join(missing)}")

        for column in TRIP_DATE_COLUMNS:
            # Rows may differ in fractional-second precision
            df[column] = pd.to_datetime(df[column], format="ISO8601")
            if df[column].isna().any():
                raise ValueError(f"Trip data has empty {column} values")

        # Empty cells come back as NaN; normalise them to None
        df = df.astype(object).where(df.notna(), None)

        has_member = "is_member" in df.columns
        trips = []
        for row in df.itertuples(index=False):
            trips.append(
                Trip(
                    start_station_id=row.start_station_id,
                    end_station_id=row.end_station_id,
                    started_at=row.started_at.to_pydatetime(),
                    ended_at=row.ended_at.to_pydatetime(),
                    ride_id=getattr(row, "ride_id", None),
                    bike_type=getattr(row, "bike_type", None),
                    is_member=_parse_member(row.is_member) if has_member else None,
                )
            )

        logger.debug(f"Parsed {len(trips)} trips")
        return trips

    def get_station(self, station_id: str) -> Station:
        """Get station by station_id."""
        if station_id not in self.stations:
            raise ValueError(f"Station {station_id} not found")
        return self.stations[station_id]

    def find_stations_by_name(self, name: str) -> List[Station]:
        """Find stations by name (partial match)."""
        results = []
        name_lower = name.lower()

        for station_name, station_ids in self.stations_by_name.items():
            if name_lower in station_name.lower():
                for station_id in station_ids:
                    results.append(self.stations[station_id])

        return results

    def clear(self) -> None:
        """Clear all loaded data to free memory."""
        self.stations = {}
        self.stations_by_name = {}
        self.trips = []
        logger.info("Cleared bike-share data from memory")


def _parse_member(value) -> Optional[bool]:
    """Bluebikes encodes membership as 1/0; some exports use member/casual."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "member")
    return bool(int(value))
