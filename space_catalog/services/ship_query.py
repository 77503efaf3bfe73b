"""Query engine — filters, sorts and pages an in-memory snapshot of ships.

Filtering and paging are separate steps so that a count can be taken from the
filtered sequence without regard to any page parameters.

Filtering:
  Every criterion of ShipFilter is optional; unset (None) criteria match
  everything.  A ship is kept only when it satisfies all set criteria.

Sorting:
  Ascending only, by one ShipOrder key (ID when no key is given).  Python's
  sort is stable, so ships with equal keys keep their filtered order.

Paging:
  Zero-based page_number; a page past the end is an empty list.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Callable, Iterable

from space_catalog.models.ship import Ship, ShipType

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 3


class ShipOrder(str, enum.Enum):
    ID = "ID"
    SPEED = "SPEED"
    DATE = "DATE"
    RATING = "RATING"


_SORT_KEYS: dict[ShipOrder, Callable[[Ship], Any]] = {
    ShipOrder.ID: lambda ship: ship.id,
    ShipOrder.SPEED: lambda ship: ship.speed,
    ShipOrder.DATE: lambda ship: ship.prod_date,
    ShipOrder.RATING: lambda ship: ship.rating,
}


@dataclass
class ShipFilter:
    """Optional search criteria; None means "not constrained"."""
    name: str | None = None           # substring of Ship.name, case-sensitive
    planet: str | None = None         # substring of Ship.planet, case-sensitive
    ship_type: ShipType | None = None
    after: datetime | None = None     # prod_date >= after
    before: datetime | None = None    # prod_date <= before
    is_used: bool | None = None
    min_speed: float | None = None
    max_speed: float | None = None
    min_crew_size: int | None = None
    max_crew_size: int | None = None
    min_rating: float | None = None
    max_rating: float | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


# (criterion attribute, predicate(ship, criterion value))
_PREDICATES: list[tuple[str, Callable[[Ship, Any], bool]]] = [
    ("name", lambda ship, value: value in ship.name),
    ("planet", lambda ship, value: value in ship.planet),
    ("ship_type", lambda ship, value: ship.ship_type == value),
    ("after", lambda ship, value: ship.prod_date >= value),
    ("before", lambda ship, value: ship.prod_date <= value),
    ("is_used", lambda ship, value: ship.is_used == value),
    ("min_speed", lambda ship, value: ship.speed >= value),
    ("max_speed", lambda ship, value: ship.speed <= value),
    ("min_crew_size", lambda ship, value: ship.crew_size >= value),
    ("max_crew_size", lambda ship, value: ship.crew_size <= value),
    ("min_rating", lambda ship, value: ship.rating >= value),
    ("max_rating", lambda ship, value: ship.rating <= value),
]


def matches(ship: Ship, criteria: ShipFilter) -> bool:
    """Return True when ship satisfies every set criterion."""
    for attr, predicate in _PREDICATES:
        value = getattr(criteria, attr)
        if value is not None and not predicate(ship, value):
            return False
    return True


def filter_ships(ships: Iterable[Ship], criteria: ShipFilter | None = None) -> list[Ship]:
    """Return the ships matching all criteria, in input order."""
    if criteria is None:
        return list(ships)
    return [ship for ship in ships if matches(ship, criteria)]


def sort_ships(ships: Iterable[Ship], order: ShipOrder | None = None) -> list[Ship]:
    """Stable ascending sort by the given key (ID by default)."""
    key = _SORT_KEYS[order or ShipOrder.ID]
    return sorted(ships, key=key)


def paginate(
    ships: list[Ship],
    page_number: int = DEFAULT_PAGE_NUMBER,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[Ship]:
    start = page_number * page_size
    return ships[start:start + page_size]


def ships_per_page(
    ships: Iterable[Ship],
    page_number: int = DEFAULT_PAGE_NUMBER,
    page_size: int = DEFAULT_PAGE_SIZE,
    order: ShipOrder | None = None,
) -> list[Ship]:
    """Sort the (already filtered) ships and return one page of them."""
    return paginate(sort_ships(ships, order), page_number, page_size)
