"""Folium rendering of station traffic snapshots."""

import logging
from typing import Dict, Optional, Tuple

import folium

from .models import TrafficSnapshot

logger = logging.getLogger(__name__)

# Cambridge / Boston
MAP_CENTER = (42.36027, -71.09415)
MAP_ZOOM = 12
MIN_ZOOM = 5
MAX_ZOOM = 18

BIKE_LANE_SOURCES = {
    "Boston bike lanes": "https://bostonopendata-boston.opendata.arcgis.com/datasets/boston::existing-bike-network-2022.geojson",
    "Cambridge bike lanes": "https://data.cambridgema.gov/resource/82yq-6ksz.geojson",
}
BIKE_LANE_STYLE = {"color": "green", "weight": 4, "opacity": 0.5}

# Flow bucket -> fill color
FLOW_COLORS: Dict[float, str] = {
    0: "darkorange",  # Mostly arrivals
    0.5: "#a2875a",  # Balanced
    1: "steelblue",  # Mostly departures
}

MARKER_STROKE_COLOR = "white"
MARKER_STROKE_WEIGHT = 1
MARKER_OPACITY = 0.8


def flow_color(flow: float) -> str:
    """Fill color for a flow bucket."""
    if flow not in FLOW_COLORS:
        raise ValueError(f"Unknown flow bucket {flow}")
    return FLOW_COLORS[flow]


def marker_tooltip(arrivals: int, departures: int) -> str:
    return f"{arrivals + departures} trips ({departures} departures, {arrivals} arrivals)"


def build_traffic_map(
    snapshot: TrafficSnapshot,
    center: Tuple[float, float] = MAP_CENTER,
    zoom: int = MAP_ZOOM,
    include_bike_lanes: bool = True,
    bike_lane_sources: Optional[Dict[str, str]] = None,
) -> folium.Map:
    """
    Draw one circle per station on a slippy map.

    Args:
        snapshot: Snapshot from TrafficTracker.get_snapshot().
        center: Initial (latitude, longitude).
        zoom: Initial zoom level.
        include_bike_lanes: Overlay bike-lane GeoJSON layers. Folium fetches
            these at build time, so they need network access.
        bike_lane_sources: Layer name -> GeoJSON URL (defaults to BIKE_LANE_SOURCES).

    Returns:
        folium.Map ready to save or embed.
    """
    m = folium.Map(
        location=list(center),
        zoom_start=zoom,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles="OpenStreetMap",
    )

    if include_bike_lanes:
        for name, url in (bike_lane_sources or BIKE_LANE_SOURCES).items():
            folium.GeoJson(url, name=name, style_function=lambda _: dict(BIKE_LANE_STYLE)).add_to(m)
        folium.LayerControl(collapsed=True).add_to(m)

    for marker in snapshot.markers:
        traffic = marker.traffic
        color = flow_color(marker.flow)
        folium.CircleMarker(
            location=[traffic.latitude, traffic.longitude],
            radius=marker.radius,
            color=MARKER_STROKE_COLOR,
            weight=MARKER_STROKE_WEIGHT,
            fill=True,
            fill_color=color,
            fill_opacity=MARKER_OPACITY,
            tooltip=marker_tooltip(traffic.arrivals, traffic.departures),
            popup=traffic.station.name,
        ).add_to(m)

    m.get_root().html.add_child(folium.Element(_legend_html(snapshot)))

    logger.debug(f"Rendered {len(snapshot.markers)} station markers")
    return m


def save_traffic_map(snapshot: TrafficSnapshot, path: str, **kwargs) -> str:
    """Render a snapshot and write it to an HTML file. Returns the path."""
    m = build_traffic_map(snapshot, **kwargs)
    m.save(path)
    logger.info(f"Saved traffic map to {path}")
    return path


def _legend_html(snapshot: TrafficSnapshot) -> str:
    swatches = "".join(
        f'<div><span style="display:inline-block;width:12px;height:12px;border-radius:50%;'
        f'background:{FLOW_COLORS[flow]};margin-right:6px;"></span>{label}</div>'
        for flow, label in ((1, "More departures"), (0.5, "Balanced"), (0, "More arrivals"))
    )
    return f"""
    <div style="position: fixed; bottom: 30px; left: 30px; z-index: 9999;
                background: white; padding: 10px 12px; border-radius: 6px;
                box-shadow: 0 1px 4px rgba(0,0,0,0.3); font-family: sans-serif; font-size: 13px;">
        <div style="font-weight: bold; margin-bottom: 4px;">Trips at {snapshot.time_label}</div>
        <div style="margin-bottom: 6px;">{snapshot.trip_count} trips, busiest station {snapshot.max_traffic}</div>
        {swatches}
    </div>
    """
