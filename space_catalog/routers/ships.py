"""Ships router — catalog listing, counting and CRUD endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from space_catalog.config import settings
from space_catalog.database import get_db
from space_catalog.models.ship import MAX_ID, ShipType
from space_catalog.schemas.ship import ShipCreate, ShipResponse, ShipUpdate, from_epoch_millis
from space_catalog.services.ship_query import DEFAULT_PAGE_NUMBER, ShipFilter, ShipOrder
from space_catalog.services.ship_service import (
    count_ships,
    create_ship,
    delete_ship,
    get_ship,
    get_ships_page,
    query_ships,
    update_ship,
)

router = APIRouter(prefix="/rest/ships", tags=["ships"])


def get_ship_filter(
    name: Optional[str] = Query(default=None),
    planet: Optional[str] = Query(default=None),
    ship_type: Optional[ShipType] = Query(default=None, alias="shipType"),
    after: Optional[int] = Query(default=None, description="Epoch milliseconds"),
    before: Optional[int] = Query(default=None, description="Epoch milliseconds"),
    is_used: Optional[bool] = Query(default=None, alias="isUsed"),
    min_speed: Optional[float] = Query(default=None, alias="minSpeed"),
    max_speed: Optional[float] = Query(default=None, alias="maxSpeed"),
    min_crew_size: Optional[int] = Query(default=None, alias="minCrewSize"),
    max_crew_size: Optional[int] = Query(default=None, alias="maxCrewSize"),
    min_rating: Optional[float] = Query(default=None, alias="minRating"),
    max_rating: Optional[float] = Query(default=None, alias="maxRating"),
) -> ShipFilter:
    try:
        after_date = from_epoch_millis(after) if after is not None else None
        before_date = from_epoch_millis(before) if before is not None else None
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ShipFilter(
        name=name,
        planet=planet,
        ship_type=ship_type,
        after=after_date,
        before=before_date,
        is_used=is_used,
        min_speed=min_speed,
        max_speed=max_speed,
        min_crew_size=min_crew_size,
        max_crew_size=max_crew_size,
        min_rating=min_rating,
        max_rating=max_rating,
    )


def _not_found(ship_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Ship {ship_id} not found")


@router.get("", response_model=list[ShipResponse])
async def list_ships_page(
    criteria: ShipFilter = Depends(get_ship_filter),
    order: Optional[ShipOrder] = Query(default=None),
    page_number: int = Query(default=DEFAULT_PAGE_NUMBER, ge=0, alias="pageNumber"),
    page_size: Optional[int] = Query(default=None, ge=1, alias="pageSize"),
    db: AsyncSession = Depends(get_db),
):
    """Return one page of the filtered ships, sorted by ``order`` (ID by default)."""
    if page_size is None:
        page_size = settings.default_page_size
    ships = await query_ships(db, criteria)
    return get_ships_page(ships, page_number, page_size, order)


@router.get("/count", response_model=int)
async def get_ships_count(
    criteria: ShipFilter = Depends(get_ship_filter),
    db: AsyncSession = Depends(get_db),
):
    """Return how many ships match the filters, ignoring paging."""
    return await count_ships(db, criteria)


@router.get("/{ship_id}", response_model=ShipResponse)
async def read_ship(
    ship_id: int = Path(gt=0, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    ship = await get_ship(db, ship_id)
    if ship is None:
        raise _not_found(ship_id)
    return ship


@router.post("", response_model=ShipResponse)
async def create_ship_endpoint(
    body: ShipCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_ship(db, body)


@router.post("/{ship_id}", response_model=ShipResponse)
async def update_ship_endpoint(
    body: ShipUpdate,
    ship_id: int = Path(gt=0, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    """Partially update a ship; fields missing from the body keep their values."""
    ship = await update_ship(db, ship_id, body)
    if ship is None:
        raise _not_found(ship_id)
    return ship


@router.delete("/{ship_id}")
async def delete_ship_endpoint(
    ship_id: int = Path(gt=0, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_ship(db, ship_id):
        raise _not_found(ship_id)
    return {"deleted": ship_id}
