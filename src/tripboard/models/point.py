"""Point value objects and the destination / offer catalog."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Dict, FrozenSet, Optional, Tuple

POINT_TYPES: Tuple[str, ...] = (
    "taxi",
    "bus",
    "train",
    "ship",
    "drive",
    "flight",
    "check-in",
    "sightseeing",
    "restaurant",
)

DEFAULT_POINT_TYPE = "flight"


@dataclass(frozen=True)
class Destination:
    id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class Offer:
    id: str
    title: str
    price: int = 0


@dataclass(frozen=True)
class Point:
    """
    One itinerary event.

    Frozen: presenters and views hold snapshots and build updated copies
    with ``with_changes``. ``id`` is None until the backend assigns one.
    ``date_from <= date_to`` is enforced by the edit form, not here.
    """
    id: Optional[str]
    type: str
    destination: Optional[str]
    date_from: datetime
    date_to: datetime
    base_price: int = 0
    is_favorite: bool = False
    offers: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.base_price < 0:
            raise ValueError(f"base_price must be non-negative, got {self.base_price}")
        if not isinstance(self.offers, frozenset):
            object.__setattr__(self, "offers", frozenset(self.offers))

    @property
    def duration(self) -> timedelta:
        return self.date_to - self.date_from

    @property
    def is_new(self) -> bool:
        return self.id is None

    def with_changes(self, **changes) -> "Point":
        return replace(self, **changes)


def blank_point(now: Optional[datetime] = None) -> Point:
    """Seed for the creation form."""
    now = (now or datetime.now()).replace(second=0, microsecond=0)
    return Point(
        id=None,
        type=DEFAULT_POINT_TYPE,
        destination=None,
        date_from=now,
        date_to=now,
    )


@dataclass(frozen=True)
class TripCatalog:
    """Destinations and per-type offers the forms choose from."""
    destinations: Tuple[Destination, ...] = ()
    offers: Dict[str, Tuple[Offer, ...]] = field(default_factory=dict)

    def destination_by_id(self, destination_id: Optional[str]) -> Optional[Destination]:
        for destination in self.destinations:
            if destination.id == destination_id:
                return destination
        return None

    def offers_for_type(self, point_type: str) -> Tuple[Offer, ...]:
        return self.offers.get(point_type, ())

    def selected_offers(self, point: Point) -> Tuple[Offer, ...]:
        return tuple(offer for offer in self.offers_for_type(point.type) if offer.id in point.offers)
