"""pytest configuration and fixtures for pyqt-tripboard tests."""

import os
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtTest import QTest
from PyQt6.QtWidgets import QApplication, QVBoxLayout, QWidget

from tripboard.core import KeyboardService, Observable
from tripboard.models import (
    BackendError, Destination, FilterModel, Offer, Point, TripCatalog, UpdateType,
)
from tripboard.protocols import PointsDataSource


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def release_key_subscriptions(qapp):
    """Leave the keyboard registry empty after every test."""
    yield
    for subscriptions in list(KeyboardService._subscriptions.values()):
        for subscription in list(subscriptions):
            subscription.release()


def wait_until(predicate: Callable[[], bool], timeout_ms: int = 2000, step_ms: int = 10) -> bool:
    """Process events until ``predicate()`` holds or the timeout expires."""
    deadline = time.monotonic() + timeout_ms / 1000
    while time.monotonic() < deadline:
        if predicate():
            return True
        QTest.qWait(step_ms)
    return predicate()


# ========== DATA ==========

DESTINATIONS = (
    Destination("ams", "Amsterdam", "Canals."),
    Destination("gva", "Geneva", "Lake."),
    Destination("cha", "Chamonix", ""),
)

OFFERS = {
    "flight": (Offer("flight-meal", "Add meal", 15), Offer("flight-seat", "Choose seat", 5)),
    "taxi": (Offer("taxi-comfort", "Comfort", 20),),
}


def make_point(point_id: Optional[str], start_in_days: float = 1, hours: float = 2,
               price: int = 100, **changes) -> Point:
    """Point starting ``start_in_days`` from now (negative for the past)."""
    date_from = (datetime.now() + timedelta(days=start_in_days)).replace(second=0, microsecond=0)
    fields = dict(
        id=point_id,
        type="flight",
        destination="ams",
        date_from=date_from,
        date_to=date_from + timedelta(hours=hours),
        base_price=price,
    )
    fields.update(changes)
    return Point(**fields)


@pytest.fixture
def catalog():
    return TripCatalog(destinations=DESTINATIONS, offers=OFFERS)


@pytest.fixture
def sample_points():
    """Three future points in non-chronological order, plus one past and one present."""
    return [
        make_point("a", start_in_days=3, hours=1, price=10),
        make_point("b", start_in_days=1, hours=5, price=300),
        make_point("c", start_in_days=2, hours=3, price=200),
        make_point("past", start_in_days=-5, hours=2, price=400),
        make_point("now", start_in_days=-0.1, hours=24, price=75),
    ]


# ========== FAKE DATA SOURCE ==========

@dataclass
class PendingMutation:
    kind: str
    update_type: UpdateType
    point: Point
    on_success: Optional[Callable[[Any], None]]
    on_error: Optional[Callable[[Exception], None]]


class FakePointsSource(Observable, PointsDataSource):
    """
    Points source whose mutations stay pending until the test resolves them.

    ``resolve`` commits like a real model would: local state first, then the
    notification, then ``on_success``. A rejected mutation only calls
    ``on_error``.
    """

    def __init__(self, points=(), catalog: TripCatalog = None):
        super().__init__()
        self._points: List[Point] = list(points)
        self._catalog = catalog or TripCatalog(destinations=DESTINATIONS, offers=OFFERS)
        self.pending: List[PendingMutation] = []
        self._next_id = 100

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    @property
    def catalog(self) -> TripCatalog:
        return self._catalog

    def update_point(self, update_type, point, on_success=None, on_error=None):
        self.pending.append(PendingMutation("update", update_type, point, on_success, on_error))

    def add_point(self, update_type, point, on_success=None, on_error=None):
        self.pending.append(PendingMutation("add", update_type, point, on_success, on_error))

    def delete_point(self, update_type, point, on_success=None, on_error=None):
        self.pending.append(PendingMutation("delete", update_type, point, on_success, on_error))

    def resolve(self, index: int = 0, success: bool = True, notify: bool = True) -> PendingMutation:
        mutation = self.pending.pop(index)
        if not success:
            if mutation.on_error:
                mutation.on_error(BackendError(f"{mutation.kind} rejected"))
            return mutation

        result = self._commit(mutation)
        if notify:
            self._notify(mutation.update_type, result)
        if mutation.on_success:
            mutation.on_success(result)
        return mutation

    def _commit(self, mutation: PendingMutation) -> Optional[Point]:
        point = mutation.point
        if mutation.kind == "update":
            self._points = [point if held.id == point.id else held for held in self._points]
            return point
        if mutation.kind == "add":
            self._next_id += 1
            created = point.with_changes(id=str(self._next_id))
            self._points.insert(0, created)
            return created
        self._points = [held for held in self._points if held.id != point.id]
        return None

    def emit(self, update_type: UpdateType, payload: Any = None) -> None:
        self._notify(update_type, payload)

    def replace_points(self, points) -> None:
        """Change data behind the board's back (no notification)."""
        self._points = list(points)


class SyncRunner:
    """BackgroundTaskRunner stand-in that runs targets inline."""

    def __init__(self):
        self.calls = 0

    def run(self, target, args=(), kwargs=None, on_success=None, on_error=None):
        self.calls += 1
        try:
            result = target(*args, **(kwargs or {}))
        except Exception as error:
            if on_error:
                on_error(error)
            return None
        if on_success:
            on_success(result)
        return None

    def cleanup(self):
        pass


@pytest.fixture
def sync_runner():
    return SyncRunner()


@pytest.fixture
def container(qapp):
    widget = QWidget()
    QVBoxLayout(widget)
    yield widget
    widget.deleteLater()


@pytest.fixture
def filter_model():
    return FilterModel()


def make_source(points, catalog=None) -> FakePointsSource:
    return FakePointsSource(points, catalog)
