"""
Route ordering heuristic for StampWalk.

This module implements the nearest neighbour travelling salesman
heuristic used to turn an unordered set of points of interest into a
visiting sequence. It is deliberately greedy: once a stop is appended
it is never revisited or swapped, so the output can be longer than the
optimal tour. Time and difficulty estimates are calibrated against
this behaviour.

    - ``nearest_neighbor``: order points starting from a coordinate.
    - ``route_distance_km``: total length of an ordered route.
"""

from __future__ import annotations

from typing import List, Sequence

from stampwalk.geo import distance_km, haversine_distance
from stampwalk.models import Coordinate, PointOfInterest


def nearest_neighbor(candidates: Sequence[PointOfInterest], start: Coordinate) -> List[PointOfInterest]:
    """Order ``candidates`` by repeatedly visiting the nearest unvisited point.

    Ties are broken by input order: the scan keeps the first minimum
    found and only replaces it on a strictly smaller distance, so the
    result is deterministic for a given input sequence.

    Args:
        candidates: Points to visit, in their original order.
        start: Position the tour starts from (usually the user).

    Returns:
        A permutation of ``candidates`` in visiting order.
    """
    unvisited = list(candidates)
    route: List[PointOfInterest] = []
    current = start
    while unvisited:
        nearest_index = 0
        nearest_dist = haversine_distance(current, unvisited[0].coordinate)
        for i in range(1, len(unvisited)):
            dist = haversine_distance(current, unvisited[i].coordinate)
            if dist < nearest_dist:
                nearest_dist = dist
                nearest_index = i
        nearest = unvisited.pop(nearest_index)
        route.append(nearest)
        current = nearest.coordinate
    return route


def route_distance_km(route: Sequence[PointOfInterest], start: Coordinate) -> float:
    """Sum of consecutive hops ``start -> stop1 -> stop2 -> ...`` in kilometers."""
    length = 0.0
    current = start
    for stop in route:
        length += distance_km(current, stop.coordinate)
        current = stop.coordinate
    return length
