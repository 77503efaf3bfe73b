"""Ship catalog service — create, read, update, delete and query ships.

Responsibilities:
  - Default is_used, round speed and compute the rating on every write
  - Merge partial updates onto the stored record
  - Delegate filtering, sorting and paging to ship_query

Missing ids are reported as None / False, never raised.  Inputs are assumed
to have passed the range checks in schemas.ship already.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from space_catalog.models.ship import Ship, ShipType
from space_catalog.repositories.ship_store import ShipStore
from space_catalog.schemas.ship import ShipCreate, ShipUpdate
from space_catalog.services.rating import calculate_rating, round2
from space_catalog.services.ship_query import ShipFilter, ShipOrder, filter_ships, ships_per_page

logger = logging.getLogger(__name__)

# One lock per ship id so that load-merge-persist sequences on the same
# record never interleave.  An entry lives only while some caller holds or
# waits on it.
_record_locks: dict[int, asyncio.Lock] = {}
_lock_users: dict[int, int] = {}


@asynccontextmanager
async def _record_lock(ship_id: int) -> AsyncIterator[None]:
    lock = _record_locks.setdefault(ship_id, asyncio.Lock())
    _lock_users[ship_id] = _lock_users.get(ship_id, 0) + 1
    try:
        async with lock:
            yield
    finally:
        _lock_users[ship_id] -= 1
        if not _lock_users[ship_id]:
            del _lock_users[ship_id]
            del _record_locks[ship_id]


def _refresh_derived_fields(ship: Ship) -> None:
    ship.speed = round2(ship.speed)
    ship.rating = calculate_rating(ship.speed, ship.is_used, ship.prod_date)


async def _commit(db: AsyncSession) -> None:
    try:
        await db.commit()
    except Exception:
        logger.exception("Commit failed; rolling back")
        await db.rollback()
        raise


# ---------------------------------------------------------------------------
# Create / read
# ---------------------------------------------------------------------------

async def create_ship(db: AsyncSession, draft: ShipCreate) -> Ship:
    """Persist a new ship and return it with its assigned id."""
    ship = Ship(
        name=draft.name,
        planet=draft.planet,
        ship_type=ShipType(draft.ship_type),
        prod_date=draft.prod_date,
        is_used=draft.is_used if draft.is_used is not None else False,
        speed=draft.speed,
        crew_size=draft.crew_size,
    )
    _refresh_derived_fields(ship)
    await ShipStore(db).put(ship)
    await _commit(db)
    logger.info("Created ship %s (%r, rating=%s)", ship.id, ship.name, ship.rating)
    return ship


async def get_ship(db: AsyncSession, ship_id: int) -> Ship | None:
    ship = await ShipStore(db).get(ship_id)
    if ship is None:
        logger.debug("Ship %s not found", ship_id)
    return ship


async def list_ships(db: AsyncSession) -> list[Ship]:
    return await ShipStore(db).get_all()


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

async def query_ships(db: AsyncSession, criteria: ShipFilter) -> list[Ship]:
    """Return all ships matching criteria, unsorted and unpaged."""
    ships = await list_ships(db)
    if criteria.is_empty():
        return ships
    return filter_ships(ships, criteria)


async def count_ships(db: AsyncSession, criteria: ShipFilter) -> int:
    """Number of ships matching criteria; page parameters play no part."""
    return len(await query_ships(db, criteria))


def get_ships_page(
    ships: list[Ship],
    page_number: int,
    page_size: int,
    order: ShipOrder | None = None,
) -> list[Ship]:
    return ships_per_page(ships, page_number, page_size, order)


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------

async def update_ship(db: AsyncSession, ship_id: int, patch: ShipUpdate) -> Ship | None:
    """Apply the fields set in patch to the stored ship and recompute its rating.

    Returns None when no ship has this id.
    """
    async with _record_lock(ship_id):
        store = ShipStore(db)
        ship = await store.get(ship_id)
        if ship is None:
            logger.debug("Update skipped: ship %s not found", ship_id)
            return None

        changes = patch.model_dump(exclude_unset=True)
        for field_name, value in changes.items():
            setattr(ship, field_name, value)
        _refresh_derived_fields(ship)

        await store.put(ship)
        await _commit(db)
        logger.info("Updated ship %s fields=%s rating=%s", ship_id, sorted(changes), ship.rating)
        return ship


async def delete_ship(db: AsyncSession, ship_id: int) -> bool:
    """Remove the ship; False (and no change) when the id is unknown."""
    async with _record_lock(ship_id):
        deleted = await ShipStore(db).delete(ship_id)
        if not deleted:
            logger.debug("Delete skipped: ship %s not found", ship_id)
            return False
        await _commit(db)
        logger.info("Deleted ship %s", ship_id)
        return True
