"""
Map visualisation utilities for StampWalk.

This module builds an interactive map using the Folium library. It
renders a colour-coded marker for every point of interest, the user's
position with the stamp collection radius, and optionally a route plan
as numbered markers joined by a polyline. The map can be embedded in
the Streamlit app via ``streamlit_folium``.
"""

from __future__ import annotations

from typing import Collection, Optional, Sequence

import folium

from stampwalk.geo import STAMP_RADIUS_M
from stampwalk.models import Category, Coordinate, PointOfInterest

CATEGORY_COLOURS = {
    Category.SHRINE: "#c73e1d",
    Category.CAFE: "#daa520",
    Category.NATURE: "#4a5d23",
    Category.VIEWPOINT: "#2e4057",
    Category.CONVENIENCE: "#0066cc",
}

CATEGORY_SYMBOLS = {
    Category.SHRINE: "⛩️",
    Category.CAFE: "☕",
    Category.NATURE: "🌿",
    Category.VIEWPOINT: "🏔️",
    Category.CONVENIENCE: "🏪",
}


def _category_icon(category: Category, collected: bool) -> folium.DivIcon:
    colour = "#888888" if collected else CATEGORY_COLOURS[category]
    return folium.DivIcon(
        html=(
            f"<div style='font-size: 14px; background-color: {colour}; border-radius: 50%; "
            f"width: 28px; height: 28px; text-align: center; line-height: 28px;'>"
            f"{CATEGORY_SYMBOLS[category]}</div>"
        )
    )


def create_spot_map(
    points: Sequence[PointOfInterest],
    user_location: Optional[Coordinate] = None,
    route: Optional[Sequence[PointOfInterest]] = None,
    radius_m: float = STAMP_RADIUS_M,
    collected: Collection[str] = (),
) -> folium.Map:
    """Create a Folium map of the catalog, the user and an optional route.

    Args:
        points: Points of interest to mark.
        user_location: The user's position; drawn with a circle of
            ``radius_m`` meters showing the stamp collection range.
        route: Ordered stops of a plan, drawn as numbered markers and a
            polyline starting at ``user_location``.
        radius_m: Collection radius in meters.
        collected: Ids of points whose stamp has already been collected;
            they are greyed out.

    Returns:
        A Folium Map object ready for display.
    """
    coords = [p.coordinate.as_tuple() for p in points]
    if route:
        coords.extend(stop.coordinate.as_tuple() for stop in route)
    if user_location is not None:
        coords.append(user_location.as_tuple())
    if not coords:
        return folium.Map(location=[0, 0], zoom_start=2)
    # Centre on the mean of every coordinate shown
    avg_lat = sum(lat for lat, _ in coords) / len(coords)
    avg_lon = sum(lon for _, lon in coords) / len(coords)
    m = folium.Map(location=[avg_lat, avg_lon], zoom_start=15, tiles="OpenStreetMap")

    for point in points:
        stamp_text = f"<br>+{point.stamp_value} stamp(s)" if point.is_collectible else ""
        folium.Marker(
            location=list(point.coordinate.as_tuple()),
            popup=folium.Popup(f"<b>{point.name}</b><br>{point.description}{stamp_text}", max_width=250),
            tooltip=point.name,
            icon=_category_icon(point.category, point.id in collected),
        ).add_to(m)

    if user_location is not None:
        folium.Marker(
            location=list(user_location.as_tuple()),
            tooltip="You are here",
            icon=folium.Icon(color="red", icon="user"),
        ).add_to(m)
        folium.Circle(
            location=list(user_location.as_tuple()),
            radius=radius_m,
            color="red",
            fill=True,
            fill_opacity=0.1,
        ).add_to(m)

    if route:
        for order, stop in enumerate(route, start=1):
            folium.Marker(
                location=list(stop.coordinate.as_tuple()),
                popup=folium.Popup(f"{order}. {stop.name}", parse_html=True),
                icon=folium.DivIcon(html=f"<div style='font-size: 12px; color: white; background-color: #007bff; border-radius: 50%; width: 24px; height: 24px; text-align: center; line-height: 24px;'>{order}</div>"),
            ).add_to(m)
        poly_coords = [list(stop.coordinate.as_tuple()) for stop in route]
        if user_location is not None:
            poly_coords.insert(0, list(user_location.as_tuple()))
        folium.PolyLine(poly_coords, color="blue", weight=4, opacity=0.6).add_to(m)
    return m
