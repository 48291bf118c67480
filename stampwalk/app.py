"""
Streamlit application for StampWalk.

This script defines the tabbed user interface of the town's tourism
companion: a map of the points of interest where stamps can be
collected on site, a route planner proposing themed sightseeing
courses from the user's position, and a stamp book showing progress.

The ledger and the last known location live in ``st.session_state``
and therefore last exactly as long as the browser session.

To run this app locally for development, install the package and
execute:

    streamlit run stampwalk/app.py
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Optional

import streamlit as st
from streamlit_folium import folium_static

# Ensure the package can be imported when run as a script via
# `streamlit run stampwalk/app.py`.
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from stampwalk.catalog import find_point, load_catalog
from stampwalk.config import get_settings
from stampwalk.geo import directions_url, format_distance, haversine_distance
from stampwalk.geocode import geocode_place
from stampwalk.ledger import CollectionError, CollectionResult, StampLedger
from stampwalk.location import LocationCache
from stampwalk.metrics import difficulty_label, format_time, schedule_plan
from stampwalk.models import Category, Coordinate, TransportMode
from stampwalk.planner import RouteConstraints, generate_plans
from stampwalk.visualisation import CATEGORY_SYMBOLS, create_spot_map

COLLECTION_MESSAGES = {
    CollectionError.NOT_COLLECTIBLE: "This spot has no stamp.",
    CollectionError.ALREADY_COLLECTED: "You already have this stamp.",
    CollectionError.LOCATION_UNAVAILABLE: "Your location is unavailable. Set your position in the sidebar.",
}


@st.cache_data
def _catalog(path: Optional[str]):
    return load_catalog(path)


def _session_state():
    settings = get_settings()
    if "ledger" not in st.session_state:
        st.session_state["ledger"] = StampLedger()
    if "location" not in st.session_state:
        st.session_state["location"] = LocationCache(max_age_s=settings.location_max_age_s)
    return st.session_state["ledger"], st.session_state["location"]


def location_sidebar(cache: LocationCache) -> Optional[Coordinate]:
    """Let the user set their position; returns the current fix, if any."""
    settings = get_settings()
    st.sidebar.header("Your position")
    current = cache.current()
    seed = current or settings.default_location
    lat = st.sidebar.number_input("Latitude", min_value=-90.0, max_value=90.0, value=seed.latitude, format="%.6f")
    lon = st.sidebar.number_input("Longitude", min_value=-180.0, max_value=180.0, value=seed.longitude, format="%.6f")
    if st.sidebar.button("Use this position"):
        cache.update(Coordinate(lat, lon))
    query = st.sidebar.text_input("...or search a place", value="")
    if st.sidebar.button("Search") and query.strip():
        found = geocode_place(query, settings.geocoder_user_agent)
        if found is None:
            cache.fail()
            st.sidebar.error("Place not found.")
        else:
            cache.update(found)
    current = cache.current()
    if current is None:
        st.sidebar.info("No position set. Routes start from the town centre.")
    else:
        st.sidebar.success(f"Position: {current.latitude:.5f}, {current.longitude:.5f}")
    return current


def _collection_message(result: CollectionResult) -> str:
    if result.ok:
        return f"Stamp collected! +{result.entry.stamp_value}"
    if result.error == CollectionError.TOO_FAR:
        return f"You are still {format_distance(result.distance_m)} away."
    return COLLECTION_MESSAGES[result.error]


def map_tab(catalog, ledger: StampLedger, location: Optional[Coordinate]) -> None:
    settings = get_settings()
    collected = {e.point_id for e in ledger.entries}
    fol_map = create_spot_map(catalog, location, radius_m=settings.collection_radius_m, collected=collected)
    folium_static(fol_map, width=700, height=450)

    for point in catalog:
        with st.expander(f"{CATEGORY_SYMBOLS[point.category]} {point.name}"):
            st.write(point.description)
            if location is not None:
                st.caption(format_distance(haversine_distance(location, point.coordinate)))
            if point.rating is not None:
                st.write(f"Rating: {point.rating:.1f}")
            if point.has_coupon:
                st.write("Coupon available")
            st.markdown(f"[Directions]({directions_url(point.coordinate, point.name)})")
            if point.is_collectible and st.button(f"Collect +{point.stamp_value} stamp", key=f"collect_{point.id}"):
                result = ledger.collect(point, location, settings.collection_radius_m)
                if result.ok:
                    st.success(_collection_message(result))
                else:
                    st.warning(_collection_message(result))


def routes_tab(catalog, start: Coordinate) -> None:
    with st.form("route_form"):
        st.subheader("Route options")
        mode = st.radio(
            "Transport",
            [TransportMode.WALKING, TransportMode.BICYCLE],
            format_func=lambda m: m.value.capitalize(),
            horizontal=True,
        )
        max_distance = st.slider("Maximum distance from you (km)", 1.0, 50.0, 10.0, 0.5)
        max_time = st.slider("Time available (minutes)", 30, 480, 240, 15)
        categories = st.multiselect(
            "Categories (empty = all)",
            list(Category),
            format_func=lambda c: f"{CATEGORY_SYMBOLS[c]} {c.value}",
        )
        include_stamps = st.checkbox("Include stamp rally course", value=True)
        st.form_submit_button("Find routes")

    constraints = RouteConstraints(
        max_distance_km=max_distance,
        max_time_minutes=max_time,
        category_filter=frozenset(categories),
        include_stamp_focus=include_stamps,
        transport_mode=mode,
    )
    plans = generate_plans(catalog, start, constraints)
    if not plans:
        st.info("No suggestions for these options.")
        return

    for i, plan in enumerate(plans):
        with st.expander(
            f"{plan.label} | {format_distance(plan.total_distance_km * 1000)} | "
            f"{format_time(plan.estimated_minutes)} | {difficulty_label(plan.difficulty)}",
            expanded=i == 0,
        ):
            st.write(f"Stamps on this route: {plan.total_stamp_value}")
            schedule = schedule_plan(plan.ordered_stops, start, datetime.now(), plan.transport_mode)
            st.table(
                [
                    {
                        "#": order,
                        "Spot": stop.point.name,
                        "Arrive": stop.arrival.strftime("%H:%M"),
                        "Leave": stop.departure.strftime("%H:%M"),
                    }
                    for order, stop in enumerate(schedule, start=1)
                ]
            )
            folium_static(create_spot_map([], start, route=plan.ordered_stops), width=700, height=400)


def _point_name(catalog, point_id: str) -> str:
    point = find_point(catalog, point_id)
    return point.name if point is not None else point_id


def stamps_tab(catalog, ledger: StampLedger) -> None:
    settings = get_settings()
    goal = settings.stamp_goal
    col_stamps, col_coupons = st.columns(2)
    col_stamps.metric("Stamps", f"{ledger.total_stamps}/{goal}")
    col_coupons.metric("Coupons", ledger.coupon_count(catalog))
    st.progress(ledger.progress(goal), text=f"{round(ledger.progress(goal) * 100)}% complete")
    if not ledger.entries:
        st.write("No stamps yet. Visit a spot and collect it from the map.")
        return
    st.table(
        [
            {
                "Spot": _point_name(catalog, e.point_id),
                "Stamps": e.stamp_value,
                "Collected": e.collected_at.strftime("%H:%M"),
            }
            for e in ledger.entries
        ]
    )


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    st.set_page_config(page_title="StampWalk", layout="wide")
    st.title("⛩️ StampWalk")
    catalog = _catalog(settings.catalog_path)
    ledger, cache = _session_state()
    location = location_sidebar(cache)

    tab_map, tab_routes, tab_stamps = st.tabs(["Map", "Routes", "Stamp book"])
    with tab_map:
        map_tab(catalog, ledger, location)
    with tab_routes:
        routes_tab(catalog, cache.current_or_default(settings.default_location))
    with tab_stamps:
        stamps_tab(catalog, ledger)


if __name__ == "__main__":
    main()
