"""Filter predicate table."""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from .enums import FilterType
from .point import Point

Predicate = Callable[[Point, datetime], bool]

FILTERS: Dict[FilterType, Predicate] = {
    FilterType.EVERYTHING: lambda point, now: True,
    FilterType.FUTURE: lambda point, now: point.date_from > now,
    FilterType.PRESENT: lambda point, now: point.date_from <= now <= point.date_to,
    FilterType.PAST: lambda point, now: point.date_to < now,
}


def filter_points(points: Iterable[Point], filter_type: FilterType, now: Optional[datetime] = None) -> List[Point]:
    """Keep the points matching ``filter_type`` relative to ``now``."""
    now = now or datetime.now()
    predicate = FILTERS[filter_type]
    return [point for point in points if predicate(point, now)]
