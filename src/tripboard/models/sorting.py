"""Sorting utilities."""

from typing import Callable, Dict, Iterable, List

from .enums import SortType
from .point import Point


class UnsupportedSortError(ValueError):
    """Raised for sort bar criteria that have no ordering."""


def sort_by_day(point: Point):
    return point.date_from


def sort_by_time(point: Point):
    # Longest first
    return -point.duration


def sort_by_price(point: Point):
    return point.base_price


SORT_KEYS: Dict[SortType, Callable[[Point], object]] = {
    SortType.DAY: sort_by_day,
    SortType.TIME: sort_by_time,
    SortType.PRICE: sort_by_price,
}


def sort_points(points: Iterable[Point], sort_type: SortType) -> List[Point]:
    """Return a stably sorted list; ties keep their incoming order."""
    try:
        key = SORT_KEYS[sort_type]
    except KeyError:
        raise UnsupportedSortError(f"{sort_type.label} has no defined ordering") from None
    return sorted(points, key=key)
