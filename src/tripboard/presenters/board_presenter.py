"""
Board presenter: the list of points, its sort bar and board-level states.

Responsibilities:
- compute the visible sequence (filter, then stable sort)
- render exactly one of loading / error / empty / list
- route every user mutation through the ConcurrencyGate with optimistic
  state and rollback on failure
- reconcile model notifications into minimal re-render work
- keep at most one editor open across the whole board

Every notification, mutation step and continuation runs as a command on
one FIFO queue (``_dispatch``). A command issued while another command is
running (a model notifying synchronously from inside a rebuild, say) is
appended and runs afterwards, so the id -> presenter mapping is never
mutated while it is being iterated. A command that raises does not stop
the drain; the first error is re-raised once the queue is empty.

Optimistic state is applied when the request is made, so a busy form
ignores repeated clicks. A request whose point was removed while it
waited for the gate is dropped as stale.

Reconciliation:
    PATCH  re-init the one matching presenter
    MINOR  destroy all presenters and rebuild the list
    MAJOR  rebuild and reset sort to DAY
    INIT   leave loading state and render
    ERROR  terminal error state; create trigger disabled for good
"""

from collections import deque
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Tuple
import logging

from PyQt6.QtWidgets import QWidget

from tripboard.core import ConcurrencyGate, RenderPosition, mount, unmount
from tripboard.models import (
    FilterType, Point, SortType, UpdateType, UserAction, filter_points, sort_points,
)
from tripboard.protocols import FilterSource, PointsDataSource
from tripboard.theming import ColorScheme
from tripboard.views import EmptyListView, ErrorView, LoadingView, PointListView, SortView

from .errors import PresenterLookupError, PresenterStateError
from .new_point_presenter import NewPointPresenter
from .point_presenter import PointPresenter

logger = logging.getLogger(__name__)

Command = Tuple[Callable[..., None], Tuple[Any, ...]]


class BoardPresenter:
    """
    Args:
        container: QWidget with a box layout the board renders into
        points_model: points data source (observed)
        filter_model: filter source (observed)
        on_create_trigger_changed: receives False while creation is not
            allowed (form open, load failed) and True when it is again
        gate: mutation gate; a default one is created if omitted
    """

    def __init__(
        self,
        container: QWidget,
        points_model: PointsDataSource,
        filter_model: FilterSource,
        on_create_trigger_changed: Optional[Callable[[bool], None]] = None,
        gate: Optional[ConcurrencyGate] = None,
        color_scheme: Optional[ColorScheme] = None,
    ):
        self._container = container
        self._points_model = points_model
        self._filter_model = filter_model
        self._on_create_trigger_changed = on_create_trigger_changed
        self._color_scheme = color_scheme
        self._gate = gate or ConcurrencyGate(parent=container)

        self._point_list_view = PointListView(color_scheme=color_scheme)
        self._loading_view = LoadingView(color_scheme=color_scheme)
        self._error_view = ErrorView(color_scheme=color_scheme)
        self._sort_view: Optional[SortView] = None
        self._no_point_view: Optional[EmptyListView] = None

        self._sort_type = SortType.DAY
        self._point_presenters: Dict[str, PointPresenter] = {}
        self._new_point_presenter = NewPointPresenter(
            self._point_list_view,
            on_data_change=self._handle_view_action,
            on_start=lambda: self._set_create_trigger_enabled(False),
            on_destroy=self._handle_new_point_destroy,
            color_scheme=color_scheme,
        )

        self._is_loading = True
        self._is_error = False
        self._create_trigger_enabled = True

        self._commands: Deque[Command] = deque()
        self._is_draining = False

        self._points_model.add_observer(self.handle_model_event)
        self._filter_model.add_observer(self.handle_model_event)

    # ========== PUBLIC API ==========

    @property
    def points(self) -> List[Point]:
        """Visible sequence: current filter applied, then current sort."""
        filtered = filter_points(self._points_model.points, self._filter_model.filter)
        return sort_points(filtered, self._sort_type)

    @property
    def sort_type(self) -> SortType:
        return self._sort_type

    @property
    def presenters(self) -> Mapping[str, PointPresenter]:
        """Read-only view of the id -> presenter mapping."""
        return MappingProxyType(self._point_presenters)

    @property
    def new_point_presenter(self) -> NewPointPresenter:
        return self._new_point_presenter

    @property
    def gate(self) -> ConcurrencyGate:
        return self._gate

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_error(self) -> bool:
        return self._is_error

    @property
    def is_create_trigger_enabled(self) -> bool:
        return self._create_trigger_enabled

    @property
    def point_list_view(self) -> PointListView:
        return self._point_list_view

    @property
    def loading_view(self) -> LoadingView:
        return self._loading_view

    @property
    def error_view(self) -> ErrorView:
        return self._error_view

    @property
    def sort_view(self) -> Optional[SortView]:
        return self._sort_view

    @property
    def no_point_view(self) -> Optional[EmptyListView]:
        return self._no_point_view

    def init(self) -> None:
        """First render (the loading banner until the model reports INIT)."""
        self._dispatch(self._render_board)

    def create_point(self) -> None:
        """Enter the creation flow: default sort, filter reset, blank form on top."""
        self._dispatch(self._start_creation)

    def handle_model_event(self, update_type: UpdateType, payload: Any = None) -> None:
        """Observer callback for both the points model and the filter model."""
        self._dispatch(self._apply_model_event, update_type, payload)

    def destroy(self) -> None:
        """Stop observing and tear down every view the board mounted."""
        self._points_model.remove_observer(self.handle_model_event)
        self._filter_model.remove_observer(self.handle_model_event)
        self._clear_board()

    # ========== COMMAND QUEUE ==========

    def _dispatch(self, command: Callable[..., None], *args: Any) -> None:
        self._commands.append((command, args))
        if self._is_draining:
            logger.debug(f"[BOARD] Deferred {command.__name__} ({len(self._commands)} queued)")
            return

        self._is_draining = True
        failure: Optional[Exception] = None
        try:
            while self._commands:
                queued, queued_args = self._commands.popleft()
                try:
                    queued(*queued_args)
                except Exception as error:
                    # Later commands may hold a gate release; drain them before re-raising
                    logger.error(f"[BOARD] {queued.__name__} failed: {error}")
                    if failure is None:
                        failure = error
        finally:
            self._is_draining = False
        if failure is not None:
            raise failure

    # ========== MODEL EVENTS ==========

    def _apply_model_event(self, update_type: UpdateType, payload: Any) -> None:
        if self._is_error:
            logger.debug(f"[BOARD] Ignoring {update_type.name} after load failure")
            return

        if update_type is UpdateType.INIT:
            if not self._is_loading:
                logger.debug("[BOARD] Ignoring duplicate INIT")
                return
            self._is_loading = False
            self._render_board()
            return

        if update_type is UpdateType.ERROR:
            self._is_loading = False
            self._is_error = True
            logger.error("[BOARD] Points failed to load; board is read-only until reload")
            self._set_create_trigger_enabled(False)
            self._render_board()
            return

        if update_type is UpdateType.MAJOR:
            self._sort_type = SortType.DAY

        if self._is_loading:
            logger.debug(f"[BOARD] Ignoring {update_type.name} while loading")
            return

        if update_type is UpdateType.PATCH:
            self._patch_point(payload)
        elif update_type in (UpdateType.MINOR, UpdateType.MAJOR):
            self._render_board()
        else:
            raise ValueError(f"Unhandled update type: {update_type!r}")

    def _patch_point(self, point: Point) -> None:
        presenter = self._point_presenters.get(point.id)
        if presenter is None:
            # Filtered out or already gone: a full rebuild will pick it up
            logger.debug(f"[BOARD] PATCH for point {point.id!r} not on the board; ignored")
            return
        if presenter.point == point:
            logger.debug(f"[BOARD] Duplicate PATCH for point {point.id!r}; ignored")
            return
        presenter.init(point, self._points_model.catalog)

    # ========== VIEW ACTIONS ==========

    def _handle_view_action(self, action: UserAction, update_type: UpdateType, update: Point) -> None:
        self._dispatch(self._request_mutation, action, update_type, update)

    def _request_mutation(self, action: UserAction, update_type: UpdateType, update: Point) -> None:
        """Lock the requesting form now; the call itself waits for the gate."""
        logger.debug(f"[BOARD] {action.name} requested for point {update.id!r}")
        if action is UserAction.UPDATE_POINT:
            self._require_presenter(update.id).set_saving()
        elif action is UserAction.ADD_POINT:
            if not self._new_point_presenter.is_active:
                raise PresenterLookupError("ADD_POINT requested with no creation form open")
            self._new_point_presenter.set_saving()
        elif action is UserAction.DELETE_POINT:
            self._require_presenter(update.id).set_deleting()
        else:
            raise ValueError(f"Unhandled user action: {action!r}")

        self._gate.submit(
            lambda release: self._dispatch(self._start_mutation, action, update_type, update, release)
        )

    def _start_mutation(self, action: UserAction, update_type: UpdateType, update: Point,
                        release: Callable[[], None]) -> None:
        if action is UserAction.ADD_POINT:
            target = self._new_point_presenter if self._new_point_presenter.is_active else None
            call = self._points_model.add_point
        else:
            target = self._point_presenters.get(update.id)
            if action is UserAction.UPDATE_POINT:
                call = self._points_model.update_point
            else:
                call = self._points_model.delete_point

        if target is None:
            # Removed or closed by a mutation that committed while this one waited
            logger.warning(f"[BOARD] Dropping stale {action.name} for point {update.id!r}")
            release()
            return

        try:
            call(
                update_type,
                update,
                on_success=lambda _result: self._dispatch(self._finish_mutation, action, release),
                on_error=lambda error: self._dispatch(self._abort_mutation, action, target, error, release),
            )
        except Exception:
            target.set_aborting()
            release()
            raise

    def _finish_mutation(self, action: UserAction, release: Callable[[], None]) -> None:
        if action is UserAction.ADD_POINT:
            self._new_point_presenter.destroy()
        release()

    def _abort_mutation(self, action: UserAction, target, error: Exception, release: Callable[[], None]) -> None:
        logger.warning(f"[BOARD] {action.name} failed: {error}")
        target.set_aborting()
        release()

    def _require_presenter(self, point_id: Optional[str]) -> PointPresenter:
        try:
            return self._point_presenters[point_id]
        except KeyError:
            raise PresenterLookupError(f"No presenter for point {point_id!r} on the board") from None

    def _handle_mode_change(self, point_id: str) -> None:
        self._dispatch(self._close_other_editors, point_id)

    def _close_other_editors(self, point_id: str) -> None:
        """Point ``point_id`` is about to enter EDITING: close every other editor."""
        self._new_point_presenter.destroy()
        for other_id, presenter in self._point_presenters.items():
            if other_id != point_id:
                presenter.reset_view()

    def _handle_sort_type_change(self, sort_type: SortType) -> None:
        self._dispatch(self._apply_sort_type, sort_type)

    def _apply_sort_type(self, sort_type: SortType) -> None:
        if sort_type is self._sort_type:
            return
        if not sort_type.is_sortable:
            logger.warning(f"[BOARD] Sort by {sort_type.label} is not supported; ignored")
            return
        self._sort_type = sort_type
        self._render_board()

    # ========== CREATION FLOW ==========

    def _start_creation(self) -> None:
        if self._is_loading or self._is_error:
            logger.debug("[BOARD] Creation requested before a successful load; ignored")
            return
        self._sort_type = SortType.DAY
        # Queues a MAJOR rebuild; the form opens after it
        self._filter_model.set_filter(UpdateType.MAJOR, FilterType.EVERYTHING)
        self._dispatch(self._open_creation_form)

    def _open_creation_form(self) -> None:
        self._discard_view(self._no_point_view)
        self._no_point_view = None
        self._new_point_presenter.init(self._points_model.catalog)

    def _handle_new_point_destroy(self) -> None:
        self._set_create_trigger_enabled(True)
        self._dispatch(self._restore_empty_state)

    def _restore_empty_state(self) -> None:
        """Bring the empty-list message back once a creation form closes on an empty board."""
        if self._is_loading or self._is_error or self._new_point_presenter.is_active:
            return
        if self._point_presenters or self._no_point_view is not None:
            return
        self._render_no_points()

    def _set_create_trigger_enabled(self, enabled: bool) -> None:
        if self._is_error:
            enabled = False
        self._create_trigger_enabled = enabled
        if self._on_create_trigger_changed:
            self._on_create_trigger_changed(enabled)

    # ========== RENDERING ==========

    def _render_board(self) -> None:
        self._clear_board()

        if self._is_loading:
            mount(self._loading_view, self._container, RenderPosition.AFTERBEGIN)
            return

        if self._is_error:
            mount(self._error_view, self._container, RenderPosition.AFTERBEGIN)
            return

        points = self.points
        if points:
            self._render_sort()
            for point in points:
                self._render_point(point)
        else:
            self._render_no_points()

        mount(self._point_list_view, self._container)
        logger.debug(f"[BOARD] Rendered {len(points)} point(s), sort={self._sort_type.name}")

    def _render_sort(self) -> None:
        self._discard_view(self._sort_view)
        self._sort_view = SortView(self._sort_type, color_scheme=self._color_scheme)
        self._sort_view.sort_type_changed.connect(self._handle_sort_type_change)
        mount(self._sort_view, self._container, RenderPosition.AFTERBEGIN)

    def _render_no_points(self) -> None:
        self._discard_view(self._sort_view)
        self._sort_view = None
        self._no_point_view = EmptyListView(self._filter_model.filter, color_scheme=self._color_scheme)
        mount(self._no_point_view, self._container, RenderPosition.AFTERBEGIN)

    def _render_point(self, point: Point) -> None:
        if point.id in self._point_presenters:
            raise PresenterStateError(f"Point {point.id!r} appears twice in the visible list")
        presenter = PointPresenter(
            self._point_list_view,
            on_data_change=self._handle_view_action,
            on_mode_change=partial(self._handle_mode_change, point.id),
            color_scheme=self._color_scheme,
        )
        presenter.init(point, self._points_model.catalog)
        self._point_presenters[point.id] = presenter

    def _clear_board(self) -> None:
        self._new_point_presenter.destroy()
        for presenter in self._point_presenters.values():
            presenter.destroy()
        self._point_presenters.clear()
        self._point_list_view.clear()

        for view in (self._sort_view, self._no_point_view):
            self._discard_view(view)
        self._sort_view = None
        self._no_point_view = None
        unmount(self._loading_view)
        unmount(self._error_view)
        unmount(self._point_list_view)

    @staticmethod
    def _discard_view(view: Optional[QWidget]) -> None:
        if view is None:
            return
        unmount(view)
        view.deleteLater()
