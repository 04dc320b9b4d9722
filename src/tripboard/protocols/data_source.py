"""Data source contracts the board presenter depends on.

Notification contract (both sources):
- observers receive ``(UpdateType, payload)``
- delivery is synchronous, FIFO, once per committed change
- the points source notifies once per committed mutation, once on
  initial load success (INIT) or failure (ERROR)
- mutations never notify on failure; the caller's ``on_error`` runs instead

Example:
    class RestPointsSource(PointsDataSource):
        ...

    board = BoardPresenter(container=..., points_model=RestPointsSource(),
                           filter_model=FilterModel())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from tripboard.models.enums import FilterType, UpdateType
    from tripboard.models.point import Destination, Offer, Point, TripCatalog

Observer = Callable[["UpdateType", Any], None]
SuccessCallback = Callable[[Optional["Point"]], None]
ErrorCallback = Callable[[Exception], None]


class PointsDataSource(ABC):
    """Abstract base class for the points collection the board renders."""

    @property
    @abstractmethod
    def points(self) -> List[Point]:
        """Current committed points (a copy the caller may reorder)."""
        ...

    @property
    @abstractmethod
    def catalog(self) -> TripCatalog:
        ...

    @abstractmethod
    def add_observer(self, observer: Observer) -> None:
        ...

    @abstractmethod
    def remove_observer(self, observer: Observer) -> None:
        ...

    @abstractmethod
    def update_point(self, update_type: UpdateType, point: Point,
                     on_success: Optional[SuccessCallback] = None,
                     on_error: Optional[ErrorCallback] = None) -> None:
        """Commit ``point``; on success notify ``update_type`` with the stored point."""
        ...

    @abstractmethod
    def add_point(self, update_type: UpdateType, point: Point,
                  on_success: Optional[SuccessCallback] = None,
                  on_error: Optional[ErrorCallback] = None) -> None:
        ...

    @abstractmethod
    def delete_point(self, update_type: UpdateType, point: Point,
                     on_success: Optional[SuccessCallback] = None,
                     on_error: Optional[ErrorCallback] = None) -> None:
        ...


class FilterSource(ABC):
    """Abstract base class for the current filter selection."""

    @property
    @abstractmethod
    def filter(self) -> FilterType:
        ...

    @abstractmethod
    def set_filter(self, update_type: UpdateType, filter_type: FilterType) -> None:
        """Change the selection and notify ``(update_type, filter_type)``."""
        ...

    @abstractmethod
    def add_observer(self, observer: Observer) -> None:
        ...

    @abstractmethod
    def remove_observer(self, observer: Observer) -> None:
        ...


class PointsApi(Protocol):
    """Blocking backend used by PointsModel. Called from worker threads."""

    def get_points(self) -> Sequence[Point]:
        ...

    def get_destinations(self) -> Sequence[Destination]:
        ...

    def get_offers(self) -> dict[str, Sequence[Offer]]:
        ...

    def update_point(self, point: Point) -> Point:
        ...

    def add_point(self, point: Point) -> Point:
        """Persist a new point and return it with its assigned id."""
        ...

    def delete_point(self, point: Point) -> None:
        ...
