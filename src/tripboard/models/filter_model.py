"""Current filter selection."""

from tripboard.core import Observable
from tripboard.protocols import FilterSource

from .enums import FilterType, UpdateType


class FilterModel(Observable, FilterSource):
    """Holds the active FilterType and reports changes to observers."""

    def __init__(self, filter_type: FilterType = FilterType.EVERYTHING):
        super().__init__()
        self._filter = filter_type

    @property
    def filter(self) -> FilterType:
        return self._filter

    def set_filter(self, update_type: UpdateType, filter_type: FilterType) -> None:
        self._filter = filter_type
        self._notify(update_type, filter_type)
