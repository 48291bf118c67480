"""
Geocoding utilities for StampWalk.

When the browser cannot supply a location, the user can type the name
of a nearby place instead. This module provides a thin wrapper around
the `geopy` library to resolve that text into a ``Coordinate`` using
OpenStreetMap's Nominatim service. A small cache is maintained in
memory to avoid repeated queries for the same text.

Example usage:

    from stampwalk.geocode import geocode_place
    location = geocode_place("Yanagawa Station")

The geocode function returns ``None`` if the place cannot be found.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from stampwalk.models import Coordinate

logger = logging.getLogger(__name__)

_geocoder: Optional[Nominatim] = None


def _get_geocoder(user_agent: str = "stampwalk_app") -> Nominatim:
    """Return a singleton Nominatim geocoder instance."""
    global _geocoder
    if _geocoder is None:
        # Nominatim's usage policy requires a custom user agent.
        _geocoder = Nominatim(user_agent=user_agent)
    return _geocoder


@lru_cache(maxsize=128)
def geocode_place(query: str, user_agent: str = "stampwalk_app") -> Optional[Coordinate]:
    """Geocode free-form text and return its ``Coordinate`` or ``None``.

    If a timeout occurs, the request is retried once with a longer
    timeout. Service errors are logged and ``None`` is returned.

    Args:
        query: Place name or address to geocode.
        user_agent: User agent sent to Nominatim.

    Returns:
        The coordinate if geocoding succeeds, otherwise ``None``.
    """
    query = query.strip()
    if not query:
        return None
    geocoder = _get_geocoder(user_agent)
    try:
        location = geocoder.geocode(query, timeout=10)
    except GeocoderTimedOut:
        logger.warning("Geocoding %r timed out, retrying once", query)
        try:
            location = geocoder.geocode(query, timeout=20)
        except (GeocoderTimedOut, GeocoderServiceError) as exc:
            logger.warning("Geocoding %r failed: %s", query, exc)
            return None
    except GeocoderServiceError as exc:
        logger.warning("Geocoding %r failed: %s", query, exc)
        return None
    if location is None:
        return None
    return Coordinate(location.latitude, location.longitude)
