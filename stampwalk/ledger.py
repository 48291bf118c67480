"""
Session-scoped stamp ledger for StampWalk.

A stamp is awarded at most once per point of interest, and only when
the user stands within the collection radius of it. Refused
collections are ordinary outcomes, not exceptions: ``collect_stamp``
returns a ``CollectionResult`` that either carries the new ledger
entry or names why nothing was recorded.

The running stamp total is always computed from the entries, never
kept as a separate counter, so it cannot drift from the ledger.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from stampwalk.geo import STAMP_RADIUS_M, haversine_distance
from stampwalk.models import Coordinate, PointOfInterest

logger = logging.getLogger(__name__)


class CollectionError(str, Enum):
    NOT_COLLECTIBLE = "not_collectible"
    ALREADY_COLLECTED = "already_collected"
    LOCATION_UNAVAILABLE = "location_unavailable"
    TOO_FAR = "too_far"


@dataclass(frozen=True)
class StampLedgerEntry:
    point_id: str
    collected_at: datetime
    stamp_value: int


@dataclass(frozen=True)
class CollectionResult:
    """Outcome of a collection attempt.

    Exactly one of ``entry`` and ``error`` is set. ``distance_m`` is the
    measured distance to the point, present on success and on
    ``TOO_FAR``.
    """

    entry: Optional[StampLedgerEntry] = None
    error: Optional[CollectionError] = None
    distance_m: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.entry is not None


class StampLedger:
    """Record of the stamps collected during one session.

    Mutations are serialised with a lock so that the already-collected
    check and the insert happen atomically.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._entries: Dict[str, StampLedgerEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, point_id: object) -> bool:
        return point_id in self._entries

    @property
    def entries(self) -> List[StampLedgerEntry]:
        """Entries in collection order."""
        return list(self._entries.values())

    @property
    def total_stamps(self) -> int:
        return sum(e.stamp_value for e in self._entries.values())

    def get(self, point_id: str) -> Optional[StampLedgerEntry]:
        return self._entries.get(point_id)

    def progress(self, goal: int) -> float:
        """Fraction of ``goal`` stamps collected, capped at 1."""
        if goal <= 0:
            return 0.0
        return min(1.0, self.total_stamps / goal)

    def coupon_count(self, catalog: Iterable[PointOfInterest]) -> int:
        """Number of collected points that offer a coupon."""
        return sum(1 for p in catalog if p.has_coupon and p.id in self._entries)

    def clear(self) -> None:
        """Forget every entry; called when the session ends."""
        with self._lock:
            self._entries.clear()

    def collect(
        self,
        point: PointOfInterest,
        user_location: Optional[Coordinate],
        radius_m: float = STAMP_RADIUS_M,
    ) -> CollectionResult:
        """Try to collect the stamp at ``point`` from ``user_location``.

        Checks, in order: the point awards stamps, it is not already in
        the ledger, a location is available, and the user is within
        ``radius_m`` meters. The first failing check decides the error.
        """
        if not point.is_collectible:
            return self._refuse(point, CollectionError.NOT_COLLECTIBLE)
        with self._lock:
            if point.id in self._entries:
                return self._refuse(point, CollectionError.ALREADY_COLLECTED)
            if user_location is None:
                return self._refuse(point, CollectionError.LOCATION_UNAVAILABLE)
            distance = haversine_distance(user_location, point.coordinate)
            if distance > radius_m:
                return self._refuse(point, CollectionError.TOO_FAR, distance)
            entry = StampLedgerEntry(
                point_id=point.id,
                collected_at=self._clock(),
                stamp_value=point.stamp_value,
            )
            self._entries[point.id] = entry
        logger.info("Collected %d stamp(s) at %s (%.1f m away)", entry.stamp_value, point.id, distance)
        return CollectionResult(entry=entry, distance_m=distance)

    @staticmethod
    def _refuse(
        point: PointOfInterest, error: CollectionError, distance: Optional[float] = None
    ) -> CollectionResult:
        if distance is None:
            logger.debug("Stamp at %s refused: %s", point.id, error.value)
        else:
            logger.debug("Stamp at %s refused: %s (%.1f m)", point.id, error.value, distance)
        return CollectionResult(error=error, distance_m=distance)


def collect_stamp(
    point: PointOfInterest,
    user_location: Optional[Coordinate],
    ledger: StampLedger,
    radius_m: float = STAMP_RADIUS_M,
) -> CollectionResult:
    """Functional form of ``StampLedger.collect``."""
    return ledger.collect(point, user_location, radius_m)
