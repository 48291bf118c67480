"""
StampWalk package initialization.

This package provides the core functionality of the StampWalk tourism
companion: a map of the town's points of interest, stamps collected on
site, and sightseeing routes proposed from the user's position.

Modules:
    models        – Coordinates, points of interest and shared enums.
    geo           – Haversine distance, proximity gate and distance formatting.
    optimisation  – Nearest neighbour ordering of a set of stops.
    metrics       – Travel time, difficulty and per-stop timeline estimates.
    planner       – Themed route plan generation.
    ledger        – Session stamp ledger with proximity-gated collection.
    catalog       – Point-of-interest catalog loading.
    location      – Cached user location with a maximum age.
    geocode       – Place name lookup using Nominatim.
    visualisation – Folium based map creation utilities.
    config        – Settings read from the environment.

Distances are straight-line estimates and routes come from a greedy
heuristic; they are suggestions, not navigation.
"""

__all__ = [
    "models",
    "geo",
    "optimisation",
    "metrics",
    "planner",
    "ledger",
    "catalog",
    "location",
    "geocode",
    "visualisation",
    "config",
]
