"""
Presenters.

Own mode state, decide what is rendered and mediate every mutation
between the views and the data sources.
"""

from .errors import PresenterLookupError, PresenterStateError
from .edit_session import ItemEditSession
from .point_presenter import PointPresenter, DataChangeHandler
from .new_point_presenter import NewPointPresenter
from .board_presenter import BoardPresenter

__all__ = [
    "PresenterLookupError",
    "PresenterStateError",
    "ItemEditSession",
    "PointPresenter",
    "DataChangeHandler",
    "NewPointPresenter",
    "BoardPresenter",
]
