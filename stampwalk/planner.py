"""
Sightseeing route plan generation for StampWalk.

``generate_plans`` filters the point-of-interest catalog around the
user's position, builds up to five themed candidate sets, orders each
with the nearest neighbour heuristic and attaches distance, time and
difficulty estimates. Plans over the time budget are discarded, except
for the exhaustive "see everything" plan which is always offered as a
fallback. The result is sorted by estimated duration, shortest first.

Example usage:

    plans = generate_plans(load_catalog(), Coordinate(33.5904, 130.4017))
    for plan in plans:
        print(plan.label, plan.estimated_minutes, plan.difficulty)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from stampwalk.geo import distance_km
from stampwalk.metrics import classify_difficulty, estimate_time
from stampwalk.models import Category, Coordinate, Difficulty, PointOfInterest, TransportMode
from stampwalk.optimisation import nearest_neighbor, route_distance_km

logger = logging.getLogger(__name__)

NEARBY_RADIUS_KM = 2.0


@dataclass(frozen=True)
class RouteConstraints:
    """Per-request limits for plan generation.

    An empty ``category_filter`` means every category is allowed.
    """

    max_distance_km: float = 10.0
    max_time_minutes: int = 240
    category_filter: FrozenSet[Category] = frozenset()
    include_stamp_focus: bool = True
    transport_mode: TransportMode = TransportMode.WALKING


@dataclass
class RoutePlan:
    theme: str
    label: str
    ordered_stops: List[PointOfInterest]
    total_distance_km: float
    estimated_minutes: int
    total_stamp_value: int
    difficulty: Difficulty
    transport_mode: TransportMode = TransportMode.WALKING


@dataclass(frozen=True)
class _Theme:
    key: str
    label: str
    select: Callable[[List[Tuple[PointOfInterest, float]]], List[PointOfInterest]]
    always_included: bool = False


def _by_stamps_desc(points: List[PointOfInterest]) -> List[PointOfInterest]:
    # sorted() is stable, so equal stamp values keep catalog order
    return sorted(points, key=lambda p: -(p.stamp_value or 0))


def _nearby(pool):
    return [p for p, d in pool if d <= NEARBY_RADIUS_KM][:4]


def _landmarks(pool):
    return _by_stamps_desc([p for p, _ in pool if p.category == Category.VIEWPOINT])[:6]


def _shrines(pool):
    return [p for p, _ in pool if p.category == Category.SHRINE][:5]


def _stamp_rally(pool):
    return _by_stamps_desc([p for p, _ in pool if (p.stamp_value or 0) > 0])[:8]


def _everything(pool):
    return [p for p, _ in pool][:12]


NEARBY = _Theme("nearby", "Quick stroll around your current location", _nearby)
LANDMARKS = _Theme("landmarks", "Landmark and viewpoint culture course", _landmarks)
SHRINES = _Theme("shrines", "Shrine and temple pilgrimage", _shrines)
STAMP_RALLY = _Theme("stamps", "Stamp rally: collect as many stamps as possible", _stamp_rally)
EVERYTHING = _Theme("everything", "Complete tour of the town", _everything, always_included=True)


def annotate_distances(
    points: Sequence[PointOfInterest], origin: Coordinate
) -> List[Tuple[PointOfInterest, float]]:
    """Pair every point with its distance in kilometers from ``origin``, keeping input order."""
    return [(p, distance_km(origin, p.coordinate)) for p in points]


def build_plan(
    theme: _Theme,
    candidates: Sequence[PointOfInterest],
    start: Coordinate,
    mode: TransportMode = TransportMode.WALKING,
) -> RoutePlan:
    """Order ``candidates`` from ``start`` and compute the plan's metrics."""
    route = nearest_neighbor(candidates, start)
    total_km = route_distance_km(route, start)
    minutes = estimate_time(total_km, len(route), mode)
    return RoutePlan(
        theme=theme.key,
        label=theme.label,
        ordered_stops=route,
        total_distance_km=total_km,
        estimated_minutes=minutes,
        total_stamp_value=sum(p.stamp_value or 0 for p in route),
        difficulty=classify_difficulty(total_km, minutes),
        transport_mode=TransportMode(mode),
    )


def generate_plans(
    all_points: Sequence[PointOfInterest],
    user_location: Optional[Coordinate],
    constraints: Optional[RouteConstraints] = None,
) -> List[RoutePlan]:
    """Propose themed sightseeing routes from the user's location.

    Args:
        all_points: The point-of-interest catalog, in catalog order.
        user_location: Where the user is. ``None`` (no location fix)
            yields no plans.
        constraints: Distance, time, category and mode limits. Defaults
            to ``RouteConstraints()``.

    Returns:
        Surviving plans sorted ascending by ``estimated_minutes``. An
        empty list means there is nothing to suggest; it is not an error.
    """
    if constraints is None:
        constraints = RouteConstraints()
    if user_location is None or not all_points:
        return []

    pool = [
        (p, d)
        for p, d in annotate_distances(all_points, user_location)
        if d <= constraints.max_distance_km
    ]
    if constraints.category_filter:
        pool = [(p, d) for p, d in pool if p.category in constraints.category_filter]
    if not pool:
        logger.debug("No points within %.1f km match the filter", constraints.max_distance_km)
        return []

    themes = [NEARBY, LANDMARKS, SHRINES]
    if constraints.include_stamp_focus:
        themes.append(STAMP_RALLY)
    themes.append(EVERYTHING)

    plans: List[RoutePlan] = []
    for theme in themes:
        candidates = theme.select(pool)
        if not candidates:
            continue
        plan = build_plan(theme, candidates, user_location, constraints.transport_mode)
        keep = theme.always_included or plan.estimated_minutes <= constraints.max_time_minutes
        logger.debug(
            "Theme %s: %d stops, %.2f km, %d min, %s",
            theme.key,
            len(plan.ordered_stops),
            plan.total_distance_km,
            plan.estimated_minutes,
            "kept" if keep else "over time budget",
        )
        if keep:
            plans.append(plan)

    plans.sort(key=lambda plan: plan.estimated_minutes)
    logger.info("Generated %d route plans from %d candidate points", len(plans), len(pool))
    return plans
