"""Presenter for one persisted point in the list."""

from typing import Callable, Optional
import logging

from PyQt6.QtWidgets import QWidget

from tripboard.core import mount, swap, unmount
from tripboard.models import Mode, Point, TripCatalog, UpdateType, UserAction
from tripboard.theming import ColorScheme
from tripboard.views import PointEditView, PointView

from .edit_session import ItemEditSession
from .errors import PresenterStateError

logger = logging.getLogger(__name__)

DataChangeHandler = Callable[[UserAction, UpdateType, Point], None]


class PointPresenter:
    """
    Owns the display card and edit form of one point.

    The committed snapshot (``point``) is only replaced by ``init``, i.e. by
    data confirmed through the model. Edits live in the form's draft until
    the model confirms them.

    Args:
        point_list_container: widget the card is mounted into
        on_data_change: ``(UserAction, UpdateType, Point)`` mutation request
        on_mode_change: called right before this item enters EDITING
    """

    def __init__(
        self,
        point_list_container: QWidget,
        on_data_change: DataChangeHandler,
        on_mode_change: Callable[[], None],
        color_scheme: Optional[ColorScheme] = None,
    ):
        self._container = point_list_container
        self._handle_data_change = on_data_change
        self._handle_mode_change = on_mode_change
        self._color_scheme = color_scheme
        self._point: Optional[Point] = None
        self._catalog: Optional[TripCatalog] = None
        self._session: Optional[ItemEditSession] = None
        self._destroyed = False

    @property
    def point(self) -> Optional[Point]:
        return self._point

    @property
    def mode(self) -> Mode:
        return self._session.mode if self._session else Mode.DEFAULT

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def session(self) -> Optional[ItemEditSession]:
        return self._session

    # ========== LIFECYCLE ==========

    def init(self, point: Point, catalog: TripCatalog) -> None:
        """(Re)build both views from ``point``.

        First call mounts the card. Later calls replace whatever is mounted
        in place; an open editor is closed because confirmed data wins over
        an unsaved draft.
        """
        if self._destroyed:
            raise PresenterStateError(f"Cannot init destroyed presenter for point {point.id!r}")

        self._point = point
        self._catalog = catalog
        previous = self._session
        self._session = self._build_session(point, catalog)

        if previous is None:
            mount(self._session.point_view, self._container)
            return

        if previous.is_editing:
            logger.debug(f"Point {point.id!r} refreshed while editing; closing editor")
        swap(self._session.point_view, previous.mounted_view)
        self._discard(previous)

    def destroy(self) -> None:
        """Unmount both views and drop the Escape subscription. Idempotent."""
        if self._destroyed:
            return
        self._destroyed = True
        if self._session is not None:
            self._discard(self._session)

    def reset_view(self) -> None:
        """Close an open editor, restoring the committed snapshot."""
        if self._session is not None and self._session.is_editing:
            self._session.close(self._point)

    # ========== MUTATION STATE ==========

    def set_saving(self) -> None:
        if not self._is_editing("set_saving"):
            return
        self._session.mark_saving()

    def set_deleting(self) -> None:
        if not self._is_editing("set_deleting"):
            return
        self._session.mark_deleting()

    def set_aborting(self) -> None:
        """Roll back after a rejected mutation, keeping any draft intact."""
        if self._destroyed or self._session is None:
            logger.debug("set_aborting on a presenter that is gone; nothing to roll back")
            return
        self._session.mark_aborting()

    def _is_editing(self, operation: str) -> bool:
        if self._session is not None and self._session.is_editing and not self._destroyed:
            return True
        logger.debug(f"{operation} ignored for point {self._point_id()!r}: not editing")
        return False

    # ========== VIEW WIRING ==========

    def _build_session(self, point: Point, catalog: TripCatalog) -> ItemEditSession:
        point_view = PointView(point, catalog, color_scheme=self._color_scheme)
        edit_view = PointEditView(point, catalog, color_scheme=self._color_scheme)

        point_view.edit_clicked.connect(self._handle_edit_click)
        point_view.favorite_clicked.connect(self._handle_favorite_click)
        edit_view.form_submitted.connect(self._handle_form_submit)
        edit_view.delete_clicked.connect(self._handle_delete_click)
        edit_view.rollup_clicked.connect(self._handle_cancel_edit)

        return ItemEditSession(point_view, edit_view, on_escape=self._handle_cancel_edit)

    @staticmethod
    def _discard(session: ItemEditSession) -> None:
        session.release()
        for view in (session.point_view, session.edit_view):
            unmount(view)
            view.deleteLater()

    def _point_id(self) -> Optional[str]:
        return self._point.id if self._point else None

    # ========== GESTURES ==========

    def _handle_edit_click(self) -> None:
        if self._session.is_editing:
            return
        self._handle_mode_change()
        self._session.open()

    def _handle_cancel_edit(self) -> None:
        self.reset_view()

    def _handle_favorite_click(self) -> None:
        self._handle_data_change(
            UserAction.UPDATE_POINT,
            UpdateType.MINOR,
            self._point.with_changes(is_favorite=not self._point.is_favorite),
        )

    def _handle_form_submit(self, draft: Point) -> None:
        self._handle_data_change(UserAction.UPDATE_POINT, UpdateType.MINOR, draft)

    def _handle_delete_click(self, _draft: Point) -> None:
        self._handle_data_change(UserAction.DELETE_POINT, UpdateType.MINOR, self._point)
