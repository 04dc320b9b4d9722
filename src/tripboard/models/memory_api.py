"""In-memory PointsApi backend for the demo app and tests."""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence
import itertools
import logging
import threading
import time

from .point import Destination, Offer, Point, POINT_TYPES

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """Raised by the in-memory backend for injected failures."""


class InMemoryPointsApi:
    """
    Thread-safe PointsApi implementation.

    Args:
        points: Initial points
        destinations: Destination catalog
        offers: Offers by point type
        latency_s: Artificial delay applied to every call
        fail_load: Make the initial load fail
        fail_every: Reject every Nth mutation (0 disables)
    """

    def __init__(
        self,
        points: Iterable[Point] = (),
        destinations: Sequence[Destination] = (),
        offers: Optional[Dict[str, Sequence[Offer]]] = None,
        latency_s: float = 0.0,
        fail_load: bool = False,
        fail_every: int = 0,
    ):
        self._lock = threading.Lock()
        self._points: List[Point] = list(points)
        self._destinations = tuple(destinations)
        self._offers = {key: tuple(value) for key, value in (offers or {}).items()}
        self._latency_s = latency_s
        self._fail_load = fail_load
        self._failures_left = 0
        self._fail_every = fail_every
        self._mutation_count = 0
        self._ids = itertools.count(len(self._points) + 1)

    def fail_next(self, count: int = 1) -> None:
        """Make the next ``count`` mutations raise BackendError."""
        with self._lock:
            self._failures_left = count

    def _pause_and_maybe_fail(self, verb: str) -> None:
        if self._latency_s:
            time.sleep(self._latency_s)
        with self._lock:
            self._mutation_count += 1
            if self._failures_left > 0:
                self._failures_left -= 1
                raise BackendError(f"Injected failure on {verb}")
            if self._fail_every and self._mutation_count % self._fail_every == 0:
                raise BackendError(f"Injected failure on {verb} (every {self._fail_every})")

    # ========== PointsApi ==========

    def get_points(self) -> List[Point]:
        if self._latency_s:
            time.sleep(self._latency_s)
        if self._fail_load:
            raise BackendError("Injected failure on load")
        with self._lock:
            return list(self._points)

    def get_destinations(self) -> Sequence[Destination]:
        return self._destinations

    def get_offers(self) -> Dict[str, Sequence[Offer]]:
        return dict(self._offers)

    def update_point(self, point: Point) -> Point:
        self._pause_and_maybe_fail("update")
        with self._lock:
            for index, held in enumerate(self._points):
                if held.id == point.id:
                    self._points[index] = point
                    return point
        raise BackendError(f"Unknown point {point.id!r}")

    def add_point(self, point: Point) -> Point:
        self._pause_and_maybe_fail("add")
        with self._lock:
            created = point.with_changes(id=str(next(self._ids)))
            self._points.append(created)
            return created

    def delete_point(self, point: Point) -> None:
        self._pause_and_maybe_fail("delete")
        with self._lock:
            remaining = [held for held in self._points if held.id != point.id]
            if len(remaining) == len(self._points):
                raise BackendError(f"Unknown point {point.id!r}")
            self._points = remaining


def demo_api(latency_s: float = 0.5, fail_every: int = 0, fail_load: bool = False) -> InMemoryPointsApi:
    """Backend seeded with a small trip around today's date."""
    destinations = (
        Destination("amsterdam", "Amsterdam", "Canals, bikes and museums."),
        Destination("geneva", "Geneva", "Lakeside city at the foot of the Alps."),
        Destination("chamonix", "Chamonix", "Mountain village below Mont Blanc."),
    )
    offers = {
        point_type: (
            Offer(f"{point_type}-comfort", "Comfort class", 50),
            Offer(f"{point_type}-meal", "Add meal", 15),
        )
        for point_type in POINT_TYPES
    }
    today = datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)
    points = (
        Point("1", "flight", "amsterdam", today - timedelta(days=2), today - timedelta(days=2, hours=-3),
              base_price=320, offers=frozenset({"flight-meal"})),
        Point("2", "check-in", "geneva", today - timedelta(hours=1), today + timedelta(days=1),
              base_price=180, is_favorite=True),
        Point("3", "drive", "chamonix", today + timedelta(days=2), today + timedelta(days=2, hours=2),
              base_price=60),
    )
    return InMemoryPointsApi(points=points, destinations=destinations, offers=offers, latency_s=latency_s,
                            fail_load=fail_load, fail_every=fail_every)
