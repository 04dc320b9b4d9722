"""Enumerations shared by models, views and presenters."""

from enum import Enum


class UpdateType(Enum):
    """Granularity of a committed change, as reported to observers."""
    PATCH = "patch"  # Single point changed in place
    MINOR = "minor"  # List membership or order changed
    MAJOR = "major"  # Full reset (filter change, creation flow)
    INIT = "init"    # Initial load finished
    ERROR = "error"  # Initial load failed


class UserAction(Enum):
    UPDATE_POINT = "update_point"
    ADD_POINT = "add_point"
    DELETE_POINT = "delete_point"


class Mode(Enum):
    """Presentation mode of one list item."""
    DEFAULT = "default"
    EDITING = "editing"


class SortType(Enum):
    """Sort bar criteria, in display order."""
    DAY = "day"
    EVENT = "event"
    TIME = "time"
    PRICE = "price"
    OFFERS = "offers"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def is_sortable(self) -> bool:
        # EVENT and OFFERS are shown in the sort bar but have no ordering
        return self in (SortType.DAY, SortType.TIME, SortType.PRICE)


class FilterType(Enum):
    EVERYTHING = "everything"
    FUTURE = "future"
    PRESENT = "present"
    PAST = "past"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def empty_message(self) -> str:
        """Text shown when no point passes this filter."""
        if self is FilterType.EVERYTHING:
            return "Click New Event to create your first point"
        return f"There are no {self.value} events now"
