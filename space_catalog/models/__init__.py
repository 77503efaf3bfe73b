from space_catalog.models.base import Base  # noqa: F401
from space_catalog.models.ship import Ship, ShipType  # noqa: F401
