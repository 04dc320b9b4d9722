"""Points data source backed by a blocking PointsApi run off the GUI thread."""

from typing import Any, Callable, List, Optional, Tuple
import logging

from tripboard.core import BackgroundTaskRunner, Observable
from tripboard.protocols import ErrorCallback, PointsApi, PointsDataSource, SuccessCallback

from .enums import UpdateType
from .point import Point, TripCatalog

logger = logging.getLogger(__name__)


class PointNotFoundError(LookupError):
    """Raised when mutating a point the model does not hold."""


class PointsModel(Observable, PointsDataSource):
    """
    Committed points plus the destination / offer catalog.

    Local state changes only after the backend confirms, then observers are
    notified with the caller's update type, then the caller's ``on_success``
    runs. Failures leave local state untouched, skip notification and call
    ``on_error``.

    Usage:
        model = PointsModel(api=RestPointsApi(...))
        model.add_observer(board.handle_model_event)
        model.init()  # notifies INIT or ERROR
    """

    def __init__(self, api: PointsApi, runner: Optional[Any] = None):
        super().__init__()
        self._api = api
        self._runner = runner or BackgroundTaskRunner()
        self._points: List[Point] = []
        self._catalog = TripCatalog()

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    @property
    def catalog(self) -> TripCatalog:
        return self._catalog

    @property
    def runner(self):
        return self._runner

    # ========== LOADING ==========

    def init(self) -> None:
        """Load points and catalog in the background."""
        self._runner.run(
            target=self._fetch_all,
            on_success=self._on_loaded,
            on_error=self._on_load_failed,
        )

    def _fetch_all(self) -> Tuple[List[Point], TripCatalog]:
        points = list(self._api.get_points())
        destinations = tuple(self._api.get_destinations())
        offers = {point_type: tuple(items) for point_type, items in self._api.get_offers().items()}
        return points, TripCatalog(destinations=destinations, offers=offers)

    def _on_loaded(self, result: Tuple[List[Point], TripCatalog]) -> None:
        self._points, self._catalog = result
        logger.info(f"Loaded {len(self._points)} point(s), {len(self._catalog.destinations)} destination(s)")
        self._notify(UpdateType.INIT)

    def _on_load_failed(self, error: Exception) -> None:
        logger.error(f"Initial load failed: {error}", exc_info=error)
        self._points = []
        self._catalog = TripCatalog()
        self._notify(UpdateType.ERROR)

    # ========== MUTATIONS ==========

    def update_point(self, update_type: UpdateType, point: Point,
                     on_success: Optional[SuccessCallback] = None,
                     on_error: Optional[ErrorCallback] = None) -> None:
        self._index_of(point.id)  # Fail loud before going to the backend

        def committed(updated: Point) -> None:
            index = self._index_of(updated.id)
            self._points[index] = updated
            self._notify(update_type, updated)
            if on_success:
                on_success(updated)

        self._run_mutation("update", self._api.update_point, point, committed, on_error)

    def add_point(self, update_type: UpdateType, point: Point,
                  on_success: Optional[SuccessCallback] = None,
                  on_error: Optional[ErrorCallback] = None) -> None:

        def committed(created: Point) -> None:
            self._points.insert(0, created)
            self._notify(update_type, created)
            if on_success:
                on_success(created)

        self._run_mutation("add", self._api.add_point, point, committed, on_error)

    def delete_point(self, update_type: UpdateType, point: Point,
                     on_success: Optional[SuccessCallback] = None,
                     on_error: Optional[ErrorCallback] = None) -> None:
        self._index_of(point.id)

        def committed(_result: Any) -> None:
            del self._points[self._index_of(point.id)]
            self._notify(update_type)
            if on_success:
                on_success(None)

        self._run_mutation("delete", self._api.delete_point, point, committed, on_error)

    def _run_mutation(self, verb: str, call: Callable[[Point], Any], point: Point,
                      committed: Callable[[Any], None], on_error: Optional[ErrorCallback]) -> None:
        logger.debug(f"Starting {verb} of point {point.id!r}")

        def failed(error: Exception) -> None:
            logger.warning(f"Backend rejected {verb} of point {point.id!r}: {error}")
            if on_error:
                on_error(error)

        self._runner.run(target=call, args=(point,), on_success=committed, on_error=failed)

    def _index_of(self, point_id: Optional[str]) -> int:
        for index, held in enumerate(self._points):
            if held.id == point_id:
                return index
        raise PointNotFoundError(f"Can't change unexisting point {point_id!r}")
