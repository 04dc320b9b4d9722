"""Presenter for the creation form of a not-yet-persisted point."""

from typing import Callable, Optional
import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget

from tripboard.core import KeyboardService, KeySubscription, RenderPosition, mount, unmount
from tripboard.models import Point, TripCatalog, UpdateType, UserAction, blank_point
from tripboard.theming import ColorScheme
from tripboard.views import PointEditView

from .point_presenter import DataChangeHandler

logger = logging.getLogger(__name__)


class NewPointPresenter:
    """
    Either absent or showing one blank edit form at the top of the list.

    There is no display card and no DEFAULT/EDITING toggle. While the form
    is open the external create trigger is disabled; ``destroy`` re-enables
    it through ``on_destroy``. A rejected creation keeps the form and the
    user's input.

    Args:
        point_list_container: widget the form is mounted into
        on_data_change: ``(UserAction, UpdateType, Point)`` mutation request
        on_start: called when the form opens (disable the create trigger)
        on_destroy: called when the form closes (re-enable the create trigger)
    """

    def __init__(
        self,
        point_list_container: QWidget,
        on_data_change: DataChangeHandler,
        on_start: Callable[[], None],
        on_destroy: Callable[[], None],
        color_scheme: Optional[ColorScheme] = None,
    ):
        self._container = point_list_container
        self._handle_data_change = on_data_change
        self._handle_start = on_start
        self._handle_destroy = on_destroy
        self._color_scheme = color_scheme
        self._edit_view: Optional[PointEditView] = None
        self._escape: Optional[KeySubscription] = None

    @property
    def is_active(self) -> bool:
        return self._edit_view is not None

    @property
    def edit_view(self) -> Optional[PointEditView]:
        return self._edit_view

    def init(self, catalog: TripCatalog, seed: Optional[Point] = None) -> None:
        """Open the blank form. No-op if it is already open."""
        if self.is_active:
            return

        self._edit_view = PointEditView(seed or blank_point(), catalog, is_new=True,
                                        color_scheme=self._color_scheme)
        self._edit_view.form_submitted.connect(self._handle_form_submit)
        self._edit_view.delete_clicked.connect(self._handle_cancel)

        mount(self._edit_view, self._container, RenderPosition.AFTERBEGIN)
        self._escape = KeyboardService.subscribe(Qt.Key.Key_Escape, self._handle_cancel)
        self._handle_start()
        logger.debug("Creation form opened")

    def destroy(self) -> None:
        """Close the form and re-enable the create trigger. Idempotent."""
        if not self.is_active:
            return

        if self._escape is not None:
            self._escape.release()
            self._escape = None
        view, self._edit_view = self._edit_view, None
        unmount(view)
        view.deleteLater()
        logger.debug("Creation form closed")
        self._handle_destroy()

    def set_saving(self) -> None:
        if not self.is_active:
            return
        self._edit_view.update_element(is_saving=True, is_disabled=True)

    def set_aborting(self) -> None:
        """Unlock the form and shake it; the user's input stays."""
        if not self.is_active:
            logger.debug("set_aborting on a closed creation form; nothing to roll back")
            return
        self._edit_view.update_element(is_saving=False, is_deleting=False, is_disabled=False)
        self._edit_view.shake()

    def _handle_form_submit(self, draft: Point) -> None:
        self._handle_data_change(UserAction.ADD_POINT, UpdateType.MINOR, draft)

    def _handle_cancel(self, *_args) -> None:
        self.destroy()
