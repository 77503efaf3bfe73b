"""Ship model — the single record type held by the catalog."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from space_catalog.models.base import Base

MAX_TEXT_LENGTH = 50
MIN_PROD_YEAR = 2800
MAX_PROD_YEAR = 3019
MIN_SPEED = 0.01
MAX_SPEED = 0.99
MIN_CREW_SIZE = 1
MAX_CREW_SIZE = 9999
MAX_ID = 2**63 - 1


class ShipType(str, enum.Enum):
    TRANSPORT = "TRANSPORT"
    MILITARY = "MILITARY"
    MERCHANT = "MERCHANT"


class Ship(Base):
    """A catalogued ship.

    prod_date is a naive datetime in server local time.
    rating is derived from speed, is_used and prod_date and is only ever
    written by the catalog service.
    """

    __tablename__ = "ships"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, index=True)
    name: Mapped[str] = mapped_column(String(MAX_TEXT_LENGTH), nullable=False)
    planet: Mapped[str] = mapped_column(String(MAX_TEXT_LENGTH), nullable=False)
    ship_type: Mapped[ShipType] = mapped_column(Enum(ShipType), nullable=False)
    prod_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    is_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    speed: Mapped[float] = mapped_column(Float, nullable=False)
    crew_size: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Ship id={self.id} name={self.name!r} rating={self.rating}>"
