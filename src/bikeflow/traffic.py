"""Trip aggregation and time-of-day filtering."""

import logging
from collections import Counter
from datetime import datetime
from typing import List, Sequence

from .models import ANY_TIME, Station, StationTraffic, Trip

logger = logging.getLogger(__name__)

# Trips starting or ending within this many minutes of the filter are kept
TIME_WINDOW_MINUTES = 60

MINUTES_PER_DAY = 24 * 60


def compute_station_traffic(stations: Sequence[Station], trips: Sequence[Trip]) -> List[StationTraffic]:
    """
    Count arrivals and departures per station.

    Args:
        stations: Station identity records.
        trips: Trips to count.

    Returns:
        One new StationTraffic per station, in input order. Stations that no
        trip references get zero counts, and trips referencing unknown
        stations are ignored for that side.
    """
    departures = Counter(trip.start_station_id for trip in trips)
    arrivals = Counter(trip.end_station_id for trip in trips)

    return [
        StationTraffic(
            station=station,
            arrivals=arrivals.get(station.station_id, 0),
            departures=departures.get(station.station_id, 0),
        )
        for station in stations
    ]


def minutes_since_midnight(moment: datetime) -> int:
    """Time-of-day component of a datetime, in minutes."""
    return moment.hour * 60 + moment.minute


def validate_time_filter(time_filter: int) -> None:
    """Raise ValueError unless time_filter is ANY_TIME or a minute of the day."""
    if time_filter != ANY_TIME and not 0 <= time_filter < MINUTES_PER_DAY:
        raise ValueError(
            f"Time filter must be {ANY_TIME} or between 0 and {MINUTES_PER_DAY - 1}, got {time_filter}"
        )


def filter_trips_by_time(trips: List[Trip], time_filter: int) -> List[Trip]:
    """
    Keep trips that start or end within TIME_WINDOW_MINUTES of time_filter.

    Only the time of day is compared and the window does not wrap around
    midnight: 23:59 and 00:00 are 1439 minutes apart.

    Args:
        trips: Trips to filter.
        time_filter: Minutes since midnight, or ANY_TIME to disable filtering.

    Returns:
        The input list itself when the filter is inactive, otherwise a new list.
    """
    validate_time_filter(time_filter)
    if time_filter == ANY_TIME:
        return trips

    filtered = [
        trip
        for trip in trips
        if abs(minutes_since_midnight(trip.started_at) - time_filter) <= TIME_WINDOW_MINUTES
        or abs(minutes_since_midnight(trip.ended_at) - time_filter) <= TIME_WINDOW_MINUTES
    ]
    logger.debug(f"Kept {len(filtered)} of {len(trips)} trips around minute {time_filter}")
    return filtered


def format_time(minutes: int) -> str:
    """Format minutes since midnight as a 12-hour clock time, e.g. "8:05 PM"."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minutes must be between 0 and {MINUTES_PER_DAY - 1}, got {minutes}")

    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def time_filter_label(time_filter: int) -> str:
    """Text shown next to the time slider."""
    if time_filter == ANY_TIME:
        return "any time"
    return format_time(time_filter)
