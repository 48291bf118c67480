"""
Geodesic distance utilities for StampWalk.

Every distance in the package is derived from one canonical function,
``haversine_distance``, which returns meters. Kilometers are obtained
by division so that route planning and the proximity gate can never
disagree about units. Straight-line great-circle distance is used as a
proxy for travel distance; no road network is consulted.

Example usage:

    tower = Coordinate(35.6586, 139.7454)
    station = Coordinate(35.6812, 139.7671)
    meters = haversine_distance(tower, station)
    is_within_radius(tower, station, 50.0)  # False
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import quote

from stampwalk.models import Coordinate

EARTH_RADIUS_M = 6_371_000.0

# Radius used for stamp eligibility.
STAMP_RADIUS_M = 50.0


def haversine_distance(coord1: Coordinate, coord2: Coordinate) -> float:
    """Compute the great-circle distance between two coordinates in meters."""
    phi1, phi2 = math.radians(coord1.latitude), math.radians(coord2.latitude)
    d_phi = math.radians(coord2.latitude - coord1.latitude)
    d_lambda = math.radians(coord2.longitude - coord1.longitude)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push a just outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_km(coord1: Coordinate, coord2: Coordinate) -> float:
    """Great-circle distance in kilometers."""
    return haversine_distance(coord1, coord2) / 1000.0


def is_within_radius(user: Coordinate, target: Coordinate, radius_m: float) -> bool:
    """Return ``True`` if ``target`` lies within ``radius_m`` meters of ``user``.

    The boundary is inclusive: a point exactly ``radius_m`` away is
    within the radius.

    Raises:
        ValueError: If ``radius_m`` is negative.
    """
    if radius_m < 0:
        raise ValueError(f"radius must be non-negative, got {radius_m}")
    return haversine_distance(user, target) <= radius_m


def format_distance(meters: float) -> str:
    """Format a distance for display.

    Values under 1000 m are shown as whole meters (``"999m"``), larger
    values in kilometers with one decimal place (``"1.5km"``).
    """
    if meters < 1000:
        # half-up, not banker's rounding
        return f"{math.floor(meters + 0.5)}m"
    km = Decimal(meters / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{km}km"


def directions_url(destination: Coordinate, name: str) -> str:
    """Build a Google Maps directions link from the current position to ``destination``."""
    return (
        "https://www.google.com/maps/dir/?api=1"
        f"&destination={destination.latitude},{destination.longitude}"
        f"&destination_place_id={quote(name, safe='')}"
    )
