#!/usr/bin/env python3
"""
Streamlit app for exploring bike-share station traffic by time of day.

Run with: streamlit run examples/app.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st
import streamlit.components.v1 as components

# Add src to path so we can import bikeflow
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bikeflow import ANY_TIME, TrafficTracker, build_traffic_map

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

MAP_HEIGHT = 650


@st.cache_resource
def initialize_tracker() -> TrafficTracker:
    """Load station and trip data once per server process."""
    logger.info("Loading bike-share data...")
    return TrafficTracker(load_data=True)


st.set_page_config(page_title="Bluebikes Traffic", layout="wide")
st.title("🚲 Bluebikes Station Traffic")

try:
    tracker = initialize_tracker()
except Exception as e:
    logger.error(f"Failed to load data: {e}", exc_info=True)
    st.error(f"Could not load station or trip data: {e}")
    st.stop()

time_filter = st.slider(
    "Filter by time (-1 = any time)",
    min_value=ANY_TIME,
    max_value=1439,
    value=ANY_TIME,
    step=1,
)

show_lanes = st.checkbox("Show bike lanes", value=True)

snapshot = tracker.get_snapshot(time_filter)
st.markdown(f"**Trips at {snapshot.time_label}:** {snapshot.trip_count}")

col_map, col_table = st.columns([3, 1])

with col_map:
    traffic_map = build_traffic_map(snapshot, include_bike_lanes=show_lanes)
    components.html(traffic_map.get_root().render(), height=MAP_HEIGHT)

with col_table:
    df = tracker.traffic_dataframe(time_filter)
    st.dataframe(
        df.sort_values("total_traffic", ascending=False)[["name", "departures", "arrivals", "total_traffic"]].head(20),
        hide_index=True,
    )
