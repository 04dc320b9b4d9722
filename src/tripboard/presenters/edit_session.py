"""
View / edit toggle for one list item.

One session owns one (display view, edit view) pair, the item's Mode and
the Escape subscription that exists only while EDITING. Every exit from
EDITING goes through ``close`` or ``release``, so the subscription cannot
leak whichever path is taken (cancel, submit, Escape, remote refresh,
destroy).
"""

from typing import Callable, Optional
import logging

from PyQt6.QtCore import Qt

from tripboard.core import KeyboardService, KeySubscription, swap
from tripboard.models import Mode, Point
from tripboard.views import PointEditView, PointView

logger = logging.getLogger(__name__)


class ItemEditSession:
    """
    Mode machine for one item: DEFAULT <-> EDITING.

    Args:
        point_view: mounted display view
        edit_view: edit form, not mounted
        on_escape: called when Escape is pressed while EDITING
    """

    def __init__(self, point_view: PointView, edit_view: PointEditView, on_escape: Callable[[], None]):
        self.point_view = point_view
        self.edit_view = edit_view
        self._on_escape = on_escape
        self._mode = Mode.DEFAULT
        self._escape: Optional[KeySubscription] = None

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def is_editing(self) -> bool:
        return self._mode is Mode.EDITING

    @property
    def mounted_view(self):
        """The view currently in the list."""
        return self.edit_view if self.is_editing else self.point_view

    @property
    def has_escape_subscription(self) -> bool:
        return self._escape is not None and self._escape.is_active

    def open(self) -> None:
        """DEFAULT -> EDITING."""
        if self.is_editing:
            return
        swap(self.edit_view, self.point_view)
        self._mode = Mode.EDITING
        self._escape = KeyboardService.subscribe(Qt.Key.Key_Escape, self._on_escape)

    def close(self, snapshot: Point) -> None:
        """EDITING -> DEFAULT, discarding the draft in favour of ``snapshot``."""
        if not self.is_editing:
            return
        self.edit_view.reset(snapshot)
        swap(self.point_view, self.edit_view)
        self._mode = Mode.DEFAULT
        self.release()

    def release(self) -> None:
        """Drop the Escape subscription. Idempotent."""
        if self._escape is not None:
            self._escape.release()
            self._escape = None

    # ========== MUTATION STATE ==========

    def mark_saving(self) -> None:
        self.edit_view.update_element(is_saving=True, is_disabled=True)

    def mark_deleting(self) -> None:
        self.edit_view.update_element(is_deleting=True, is_disabled=True)

    def mark_aborting(self) -> None:
        """Roll back pending flags and shake whichever view is showing."""
        if self.is_editing:
            self.edit_view.update_element(is_saving=False, is_deleting=False, is_disabled=False)
            self.edit_view.shake()
        else:
            self.point_view.shake()
