"""
Data model.

Point value objects, enumerations, the sort and filter tables, and the
concrete points / filter sources.
"""

from .enums import UpdateType, UserAction, Mode, SortType, FilterType
from .point import (
    Point,
    Destination,
    Offer,
    TripCatalog,
    POINT_TYPES,
    blank_point,
)
from .sorting import sort_points, UnsupportedSortError, SORT_KEYS
from .filtering import filter_points, FILTERS
from .points_model import PointsModel, PointNotFoundError
from .filter_model import FilterModel
from .memory_api import InMemoryPointsApi, BackendError, demo_api

__all__ = [
    "UpdateType",
    "UserAction",
    "Mode",
    "SortType",
    "FilterType",
    "Point",
    "Destination",
    "Offer",
    "TripCatalog",
    "POINT_TYPES",
    "blank_point",
    "sort_points",
    "UnsupportedSortError",
    "SORT_KEYS",
    "filter_points",
    "FILTERS",
    "PointsModel",
    "PointNotFoundError",
    "FilterModel",
    "InMemoryPointsApi",
    "BackendError",
    "demo_api",
]
