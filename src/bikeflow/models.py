"""Data models for bike-share station traffic."""

from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime

# Time filter value meaning "no filter, count trips at any time of day"
ANY_TIME = -1


@dataclass(frozen=True)
class Station:
    """Represents a bike-share dock location."""
    station_id: str  # The system's short_name, e.g. "A32000"
    name: str
    latitude: float
    longitude: float
    capacity: Optional[int] = None


@dataclass(frozen=True)
class Trip:
    """Represents a single bike rental."""
    start_station_id: Optional[str]
    end_station_id: Optional[str]
    started_at: datetime
    ended_at: datetime
    ride_id: Optional[str] = None
    bike_type: Optional[str] = None  # e.g. "classic_bike", "electric_bike"
    is_member: Optional[bool] = None


@dataclass(frozen=True)
class StationTraffic:
    """Arrivals and departures counted at a station over a set of trips."""
    station: Station
    arrivals: int = 0
    departures: int = 0

    @property
    def total_traffic(self) -> int:
        return self.arrivals + self.departures

    @property
    def station_id(self) -> str:
        return self.station.station_id

    @property
    def latitude(self) -> float:
        return self.station.latitude

    @property
    def longitude(self) -> float:
        return self.station.longitude

    @property
    def departure_ratio(self) -> float:
        """Share of traffic that is departures (0 for a station with no traffic)."""
        if self.total_traffic == 0:
            return 0.0
        return self.departures / self.total_traffic


@dataclass
class StationMarker:
    """A station's traffic with the values used to draw it."""
    traffic: StationTraffic
    radius: float  # Pixels
    flow: float  # One of 0, 0.5, 1


@dataclass
class TrafficSnapshot:
    """Everything needed to render the map for one time filter value."""
    time_filter: int  # ANY_TIME or minutes since midnight
    time_label: str
    trip_count: int
    max_traffic: int
    markers: List[StationMarker]
    last_updated: datetime
