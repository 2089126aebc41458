"""bikeflow - Bike-share station traffic maps."""

__version__ = "0.1.0"

from .models import ANY_TIME, Station, Trip, StationTraffic, StationMarker, TrafficSnapshot
from .traffic import compute_station_traffic, filter_trips_by_time, format_time, time_filter_label
from .scales import SqrtScale, QuantizeScale, radius_scale, flow_bucket
from .data_loader import BikeShareLoader
from .traffic_tracker import TrafficTracker
from .map_renderer import build_traffic_map, save_traffic_map

__all__ = [
    "TrafficTracker",
    "BikeShareLoader",
    "ANY_TIME",
    "Station",
    "Trip",
    "StationTraffic",
    "StationMarker",
    "TrafficSnapshot",
    "compute_station_traffic",
    "filter_trips_by_time",
    "format_time",
    "time_filter_label",
    "SqrtScale",
    "QuantizeScale",
    "radius_scale",
    "flow_bucket",
    "build_traffic_map",
    "save_traffic_map",
]
