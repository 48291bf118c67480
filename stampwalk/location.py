"""
User location cache for StampWalk.

The host platform delivers location fixes asynchronously; the core
only ever sees the latest fix as a plain ``Coordinate`` or ``None``. A
fix is considered current for ``max_age_s`` seconds (five minutes by
default). When no current fix exists the presentation layer may fall
back to a default coordinate, which the core treats like any other.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from stampwalk.models import Coordinate


@dataclass
class LocationCache:
    max_age_s: int = 300
    coordinate: Optional[Coordinate] = None
    fixed_at: Optional[datetime] = None

    def update(self, coordinate: Coordinate, now: Optional[datetime] = None) -> None:
        """Store a fresh fix."""
        self.coordinate = coordinate
        self.fixed_at = now or datetime.now()

    def fail(self) -> None:
        """Record a failed location request; any previous fix is dropped."""
        self.coordinate = None
        self.fixed_at = None

    def current(self, now: Optional[datetime] = None) -> Optional[Coordinate]:
        """Return the cached fix, or ``None`` if absent or older than ``max_age_s``."""
        if self.coordinate is None or self.fixed_at is None:
            return None
        now = now or datetime.now()
        if now - self.fixed_at > timedelta(seconds=self.max_age_s):
            return None
        return self.coordinate

    def current_or_default(self, default: Coordinate, now: Optional[datetime] = None) -> Coordinate:
        current = self.current(now)
        return current if current is not None else default
