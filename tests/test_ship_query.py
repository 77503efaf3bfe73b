"""Tests for the in-memory query engine: filters, sort keys and paging.

Ships here are transient ORM instances; no database is involved.
"""

from datetime import datetime

import pytest

from space_catalog.models.ship import Ship, ShipType
from space_catalog.services.ship_query import (
    ShipFilter,
    ShipOrder,
    filter_ships,
    matches,
    paginate,
    ships_per_page,
    sort_ships,
)


def make_ship(
    ship_id: int,
    name: str = "Orion",
    planet: str = "Mars",
    ship_type: ShipType = ShipType.TRANSPORT,
    year: int = 3000,
    is_used: bool = False,
    speed: float = 0.5,
    crew_size: int = 100,
    rating: float = 1.0,
) -> Ship:
    return Ship(
        id=ship_id,
        name=name,
        planet=planet,
        ship_type=ship_type,
        prod_date=datetime(year, 1, 1),
        is_used=is_used,
        speed=speed,
        crew_size=crew_size,
        rating=rating,
    )


@pytest.fixture
def fleet() -> list[Ship]:
    return [
        make_ship(1, name="Orion", planet="Mars", ship_type=ShipType.MILITARY,
                  year=2900, is_used=True, speed=0.3, crew_size=10, rating=0.2),
        make_ship(2, name="Daedalus", planet="Earth", ship_type=ShipType.TRANSPORT,
                  year=3010, is_used=False, speed=0.8, crew_size=500, rating=6.4),
        make_ship(3, name="Orion II", planet="Jupiter", ship_type=ShipType.MERCHANT,
                  year=3019, is_used=False, speed=0.5, crew_size=2000, rating=40.0),
        make_ship(4, name="orion", planet="Mars Colony", ship_type=ShipType.MILITARY,
                  year=2850, is_used=False, speed=0.5, crew_size=9999, rating=0.24),
        make_ship(5, name="Nostromo", planet="Earth", ship_type=ShipType.MERCHANT,
                  year=3000, is_used=True, speed=0.99, crew_size=7, rating=1.98),
    ]


def ids(ships: list[Ship]) -> list[int]:
    return [s.id for s in ships]


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

class TestFilterShips:
    def test_no_criteria_returns_everything(self, fleet):
        assert ids(filter_ships(fleet, ShipFilter())) == [1, 2, 3, 4, 5]
        assert ids(filter_ships(fleet)) == [1, 2, 3, 4, 5]

    def test_name_is_case_sensitive_substring(self, fleet):
        assert ids(filter_ships(fleet, ShipFilter(name="Orion"))) == [1, 3]

    def test_planet_substring(self, fleet):
        assert ids(filter_ships(fleet, ShipFilter(planet="Mars"))) == [1, 4]

    def test_ship_type_exact(self, fleet):
        assert ids(filter_ships(fleet, ShipFilter(ship_type=ShipType.MERCHANT))) == [3, 5]

    def test_after_and_before_are_inclusive(self, fleet):
        criteria = ShipFilter(after=datetime(3000, 1, 1), before=datetime(3010, 1, 1))
        assert ids(filter_ships(fleet, criteria)) == [2, 5]

    def test_is_used(self, fleet):
        assert ids(filter_ships(fleet, ShipFilter(is_used=True))) == [1, 5]
        assert ids(filter_ships(fleet, ShipFilter(is_used=False))) == [2, 3, 4]

    def test_speed_bounds_inclusive(self, fleet):
        criteria = ShipFilter(min_speed=0.5, max_speed=0.8)
        assert ids(filter_ships(fleet, criteria)) == [2, 3, 4]

    def test_crew_size_bounds_inclusive(self, fleet):
        criteria = ShipFilter(min_crew_size=10, max_crew_size=2000)
        assert ids(filter_ships(fleet, criteria)) == [1, 2, 3]

    def test_rating_bounds_inclusive(self, fleet):
        criteria = ShipFilter(min_rating=0.24, max_rating=6.4)
        assert ids(filter_ships(fleet, criteria)) == [2, 4, 5]

    def test_no_match_returns_empty_list(self, fleet):
        assert filter_ships(fleet, ShipFilter(name="Enterprise")) == []

    def test_combined_criteria_equal_intersection_of_single_filters(self, fleet):
        singles = [
            ShipFilter(planet="Earth"),
            ShipFilter(is_used=True),
            ShipFilter(min_speed=0.9),
        ]
        combined = ShipFilter(planet="Earth", is_used=True, min_speed=0.9)

        expected = set(ids(fleet))
        for single in singles:
            expected &= set(ids(filter_ships(fleet, single)))

        assert set(ids(filter_ships(fleet, combined))) == expected == {5}

    def test_matches_single_ship(self, fleet):
        assert matches(fleet[0], ShipFilter(name="Ori", ship_type=ShipType.MILITARY))
        assert not matches(fleet[0], ShipFilter(name="Ori", ship_type=ShipType.MERCHANT))

    def test_filter_empty_detection(self):
        assert ShipFilter().is_empty()
        assert not ShipFilter(is_used=False).is_empty()


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

class TestSortShips:
    def test_default_order_is_id(self, fleet):
        shuffled = [fleet[3], fleet[0], fleet[4], fleet[2], fleet[1]]
        assert ids(sort_ships(shuffled)) == [1, 2, 3, 4, 5]

    def test_sort_by_speed(self, fleet):
        assert ids(sort_ships(fleet, ShipOrder.SPEED)) == [1, 3, 4, 2, 5]

    def test_sort_by_date(self, fleet):
        assert ids(sort_ships(fleet, ShipOrder.DATE)) == [4, 1, 5, 2, 3]

    def test_sort_by_rating(self, fleet):
        assert ids(sort_ships(fleet, ShipOrder.RATING)) == [1, 4, 5, 2, 3]

    def test_sort_is_stable_for_equal_keys(self, fleet):
        # ships 3 and 4 share speed 0.5; their input order must survive
        reordered = [fleet[3], fleet[2], fleet[0]]
        assert ids(sort_ships(reordered, ShipOrder.SPEED)) == [1, 4, 3]

    def test_every_order_has_a_key(self, fleet):
        for order in ShipOrder:
            assert len(sort_ships(fleet, order)) == len(fleet)


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------

class TestPaginate:
    def test_default_page_is_first_three(self, fleet):
        assert ids(paginate(fleet)) == [1, 2, 3]

    def test_last_page_may_be_short(self, fleet):
        assert ids(paginate(fleet, 1, 3)) == [4, 5]

    def test_page_past_end_is_empty(self, fleet):
        assert paginate(fleet, 2, 3) == []
        assert paginate(fleet, 1000, 1000) == []

    def test_pages_partition_sorted_sequence(self, fleet):
        ordered = sort_ships(fleet, ShipOrder.RATING)
        for size in range(1, 7):
            pages = []
            page_number = 0
            while True:
                page = ships_per_page(fleet, page_number, size, ShipOrder.RATING)
                if not page:
                    break
                assert len(page) <= size
                pages.extend(page)
                page_number += 1
            assert ids(pages) == ids(ordered)

    def test_ships_per_page_sorts_before_slicing(self, fleet):
        assert ids(ships_per_page(fleet, 0, 2, ShipOrder.DATE)) == [4, 1]

    def test_empty_input(self):
        assert ships_per_page([], 0, 3, ShipOrder.ID) == []
