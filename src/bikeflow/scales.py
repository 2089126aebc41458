"""Numeric scales that turn station traffic into marker size and color."""

import math
from bisect import bisect_right
from typing import Sequence, Tuple

import numpy as np
import pandas as pd

from .models import ANY_TIME, StationTraffic

# Marker radius range in pixels
RADIUS_RANGE_ALL = (0.0, 25.0)
RADIUS_RANGE_FILTERED = (3.0, 50.0)  # Wider so sparse filtered data stays visible


class SqrtScale:
    """Square-root scale from a numeric domain to an output range."""

    def __init__(self, domain: Tuple[float, float], output_range: Tuple[float, float]):
        self.domain = domain
        self.range = output_range

    def __call__(self, value: float) -> float:
        d0, d1 = math.sqrt(self.domain[0]), math.sqrt(self.domain[1])
        r0, r1 = self.range

        # Empty domain (e.g. no traffic anywhere): everything maps to 0
        if d1 == d0:
            return 0.0

        return r0 + (math.sqrt(value) - d0) / (d1 - d0) * (r1 - r0)

    def map_series(self, values: pd.Series) -> pd.Series:
        """Apply the scale to a whole column."""
        d0, d1 = np.sqrt(self.domain[0]), np.sqrt(self.domain[1])
        r0, r1 = self.range

        if d1 == d0:
            return pd.Series(0.0, index=values.index)

        return r0 + (np.sqrt(values.astype(float)) - d0) / (d1 - d0) * (r1 - r0)


class QuantizeScale:
    """
    Maps a continuous domain onto a discrete range using equal-width segments.

    A value lying exactly on a threshold belongs to the upper segment.
    """

    def __init__(self, domain: Tuple[float, float], output_range: Sequence[float]):
        if not output_range:
            raise ValueError("Quantize scale needs at least one output value")

        self.domain = domain
        self.range = list(output_range)

        x0, x1 = domain
        n = len(self.range) - 1
        self.thresholds = [((i + 1) * x1 - (i - n) * x0) / (n + 1) for i in range(n)]

    def __call__(self, value: float) -> float:
        return self.range[bisect_right(self.thresholds, value)]


station_flow = QuantizeScale((0.0, 1.0), (0, 0.5, 1))


def radius_scale(max_traffic: int, time_filter: int = ANY_TIME) -> SqrtScale:
    """Radius scale for the current station set and time filter."""
    output_range = RADIUS_RANGE_ALL if time_filter == ANY_TIME else RADIUS_RANGE_FILTERED
    return SqrtScale((0, max_traffic or 0), output_range)


def flow_bucket(traffic: StationTraffic) -> float:
    """Departure ratio bucketed to 0 (mostly arrivals), 0.5 (balanced) or 1 (mostly departures)."""
    return station_flow(traffic.departure_ratio)
