"""
Concrete PyQt6 views.

Views render a snapshot and report gestures via signals. They never talk
to models; presenters own every decision.
"""

from .abstract_view import AbstractView, AbstractStatefulView
from .point_view import PointView, humanize_duration
from .point_edit_view import PointEditView
from .point_list_view import PointListView
from .sort_view import SortView
from .filter_view import FilterView
from .message_views import BoardMessage, MessageView, LoadingView, ErrorView, EmptyListView
from .blocker_overlay import BlockerOverlay
from .signal_blocking import block_signals

__all__ = [
    "AbstractView",
    "AbstractStatefulView",
    "PointView",
    "humanize_duration",
    "PointEditView",
    "PointListView",
    "SortView",
    "FilterView",
    "BoardMessage",
    "MessageView",
    "LoadingView",
    "ErrorView",
    "EmptyListView",
    "BlockerOverlay",
    "block_signals",
]
