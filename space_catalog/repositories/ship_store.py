"""Keyed store for Ship records backed by an async SQLAlchemy session.

The store never commits; the catalog service owns the transaction.
Ids outside the 64-bit INTEGER range cannot be stored and are reported as
absent.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from space_catalog.models.ship import MAX_ID, Ship


def _storable(ship_id: int) -> bool:
    return 0 < ship_id <= MAX_ID


class ShipStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, ship_id: int) -> Ship | None:
        if not _storable(ship_id):
            return None
        return await self.db.get(Ship, ship_id)

    async def get_all(self) -> list[Ship]:
        """Return every ship in id order (the store's iteration order)."""
        result = await self.db.execute(select(Ship).order_by(Ship.id))
        return list(result.scalars().all())

    async def exists(self, ship_id: int) -> bool:
        if not _storable(ship_id):
            return False
        result = await self.db.execute(select(Ship.id).where(Ship.id == ship_id))
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Ship))
        return result.scalar_one()

    async def put(self, ship: Ship) -> Ship:
        """Add or update ship; a new ship gets its id assigned on flush."""
        self.db.add(ship)
        await self.db.flush()
        return ship

    async def delete(self, ship_id: int) -> bool:
        ship = await self.get(ship_id)
        if ship is None:
            return False
        await self.db.delete(ship)
        await self.db.flush()
        return True
