"""
Route metrics for StampWalk.

Given an ordered route, this module estimates how long it takes to
walk or cycle, classifies its difficulty, and builds a per-stop
timeline. Travel time uses a constant mode speed over the straight-line
distance and every stop adds a fixed visit duration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Sequence

from stampwalk.geo import distance_km
from stampwalk.models import Coordinate, Difficulty, PointOfInterest, TransportMode

SPEED_KMH = {
    TransportMode.WALKING: 4.0,
    TransportMode.BICYCLE: 15.0,
}

DWELL_MINUTES = 15

DIFFICULTY_LABELS = {
    Difficulty.EASY: "Beginner",
    Difficulty.MEDIUM: "Intermediate",
    Difficulty.HARD: "Advanced",
}


@dataclass
class StopSchedule:
    point: PointOfInterest
    arrival: datetime
    departure: datetime


def travel_minutes(total_distance_km: float, mode: TransportMode = TransportMode.WALKING) -> float:
    """Minutes needed to cover ``total_distance_km`` at the mode's speed."""
    return total_distance_km / SPEED_KMH[TransportMode(mode)] * 60.0


def estimate_time(
    total_distance_km: float,
    stop_count: int,
    mode: TransportMode = TransportMode.WALKING,
) -> int:
    """Estimate the duration of a route in whole minutes.

    Args:
        total_distance_km: Length of the route including the first hop
            from the start position.
        stop_count: Number of stops, each adding ``DWELL_MINUTES``.
        mode: Walking (4 km/h) or bicycle (15 km/h).

    Returns:
        ``round(travel + dwell)`` minutes, halves rounded up.

    Raises:
        ValueError: If the distance or stop count is negative.
    """
    if total_distance_km < 0:
        raise ValueError(f"distance must be non-negative, got {total_distance_km}")
    if stop_count < 0:
        raise ValueError(f"stop count must be non-negative, got {stop_count}")
    minutes = travel_minutes(total_distance_km, mode) + stop_count * DWELL_MINUTES
    return int(math.floor(minutes + 0.5))


def classify_difficulty(total_distance_km: float, estimated_minutes: int) -> Difficulty:
    """Classify a route; both limits of a tier must hold for it to apply."""
    if total_distance_km < 0 or estimated_minutes < 0:
        raise ValueError("distance and minutes must be non-negative")
    if total_distance_km <= 2 and estimated_minutes <= 90:
        return Difficulty.EASY
    if total_distance_km <= 5 and estimated_minutes <= 180:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def difficulty_label(difficulty: Difficulty) -> str:
    return DIFFICULTY_LABELS[Difficulty(difficulty)]


def format_time(minutes: int) -> str:
    """Format a duration as ``"2h 5m"`` or, under an hour, ``"45m"``."""
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def schedule_plan(
    stops: Sequence[PointOfInterest],
    start: Coordinate,
    departure_time: datetime,
    mode: TransportMode = TransportMode.WALKING,
) -> List[StopSchedule]:
    """Generate arrival and departure times for each stop of a route.

    Args:
        stops: Ordered stops, as produced by the route optimiser.
        start: Position the route starts from.
        departure_time: When the user leaves ``start``.
        mode: Transport mode used for every hop.

    Returns:
        One ``StopSchedule`` per stop. Each stay lasts ``DWELL_MINUTES``.
    """
    schedule: List[StopSchedule] = []
    current_time = departure_time
    current = start
    for stop in stops:
        hop = distance_km(current, stop.coordinate)
        arrival = current_time + timedelta(minutes=travel_minutes(hop, mode))
        departure = arrival + timedelta(minutes=DWELL_MINUTES)
        schedule.append(StopSchedule(point=stop, arrival=arrival, departure=departure))
        current_time = departure
        current = stop.coordinate
    return schedule
