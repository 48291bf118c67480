"""
Point-of-interest catalog loading for StampWalk.

The catalog is a JSON array of records with the keys ``id``, ``name``,
``lat``, ``lng``, ``category`` and ``description`` plus the optional
``stamps``, ``rating`` and ``coupon``. The town's spots ship with the
package in ``stampwalk/data/spots.json``; another file can be supplied
through ``STAMPWALK_CATALOG_PATH``.

Example usage:

    from stampwalk.catalog import load_catalog
    spots = load_catalog()
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from stampwalk.models import Category, Coordinate, PointOfInterest

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog record is malformed."""


def parse_point(record: Mapping[str, Any]) -> PointOfInterest:
    """Build a ``PointOfInterest`` from one JSON record."""
    try:
        return PointOfInterest(
            id=str(record["id"]),
            name=str(record["name"]),
            coordinate=Coordinate(float(record["lat"]), float(record["lng"])),
            category=Category(record["category"]),
            description=record.get("description", ""),
            stamp_value=record.get("stamps"),
            rating=record.get("rating"),
            has_coupon=bool(record.get("coupon", False)),
        )
    except KeyError as exc:
        raise CatalogError(f"catalog record is missing {exc.args[0]!r}: {record!r}") from exc
    except (ValueError, TypeError) as exc:
        raise CatalogError(f"invalid catalog record {record.get('id')!r}: {exc}") from exc


def parse_catalog(records: Iterable[Mapping[str, Any]]) -> Tuple[PointOfInterest, ...]:
    """Parse records in order, rejecting duplicate ids."""
    points = []
    seen = set()
    for record in records:
        point = parse_point(record)
        if point.id in seen:
            raise CatalogError(f"duplicate point id {point.id!r}")
        seen.add(point.id)
        points.append(point)
    return tuple(points)


def load_catalog(path: Optional[Union[str, Path]] = None) -> Tuple[PointOfInterest, ...]:
    """Load the catalog from ``path``, or the bundled one when ``path`` is ``None``."""
    if path is None:
        text = resources.files("stampwalk").joinpath("data/spots.json").read_text(encoding="utf-8")
    else:
        text = Path(path).read_text(encoding="utf-8")
    points = parse_catalog(json.loads(text))
    logger.info("Loaded %d points of interest", len(points))
    return points


def find_point(catalog: Iterable[PointOfInterest], point_id: str) -> Optional[PointOfInterest]:
    for point in catalog:
        if point.id == point_id:
            return point
    return None
