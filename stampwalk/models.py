"""
Core data types for StampWalk.

The point-of-interest catalog is immutable reference data: every
record is a frozen dataclass and the core never mutates it. Coordinates
validate their range on construction so that a malformed latitude or
longitude fails immediately instead of producing a meaningless
distance later on.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class InvalidCoordinateError(ValueError):
    """Raised when a latitude or longitude is outside its valid range."""


class Category(str, Enum):
    SHRINE = "shrine"
    CAFE = "cafe"
    NATURE = "nature"
    VIEWPOINT = "viewpoint"
    CONVENIENCE = "convenience"


class TransportMode(str, Enum):
    WALKING = "walking"
    BICYCLE = "bicycle"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        lat, lon = self.latitude, self.longitude
        if not (isinstance(lat, (int, float)) and math.isfinite(lat) and -90.0 <= lat <= 90.0):
            raise InvalidCoordinateError(f"latitude out of range: {lat!r}")
        if not (isinstance(lon, (int, float)) and math.isfinite(lon) and -180.0 <= lon <= 180.0):
            raise InvalidCoordinateError(f"longitude out of range: {lon!r}")

    def as_tuple(self) -> Tuple[float, float]:
        return self.latitude, self.longitude


@dataclass(frozen=True)
class PointOfInterest:
    """A mappable location of touristic value.

    ``stamp_value`` is ``None`` for points that award no stamp (for
    example convenience stores). ``rating`` and ``has_coupon`` are
    informational and only used for display.
    """

    id: str
    name: str
    coordinate: Coordinate
    category: Category
    description: str = ""
    stamp_value: Optional[int] = None
    rating: Optional[float] = None
    has_coupon: bool = False

    def __post_init__(self) -> None:
        if self.stamp_value is not None and (
            isinstance(self.stamp_value, bool) or not isinstance(self.stamp_value, int)
        ):
            raise TypeError(f"stamp_value must be an int, got {self.stamp_value!r} for {self.id!r}")
        if self.stamp_value is not None and self.stamp_value < 0:
            raise ValueError(f"stamp_value must be >= 0, got {self.stamp_value} for {self.id!r}")

    @property
    def is_collectible(self) -> bool:
        """True when visiting this point awards at least one stamp."""
        return bool(self.stamp_value)
