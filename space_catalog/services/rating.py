"""Rating calculation for catalogued ships.

    rating = 80 * speed * k / (current_year - prod_year + 1)

where k is 0.5 for a used ship and 1.0 otherwise, and current_year is the
last year of the valid production era (3019).  The production year is taken
in server local time.  The result is rounded half-up to two decimals.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from space_catalog.models.ship import MAX_PROD_YEAR

_TWO_PLACES = Decimal("0.01")


def round2(value: float) -> float:
    """Round half-up to two decimal places (0.125 -> 0.13, not 0.12)."""
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def production_year(prod_date: datetime) -> int:
    if prod_date.tzinfo is not None:
        prod_date = prod_date.astimezone()
    return prod_date.year


def calculate_rating(speed: float, is_used: bool, prod_date: datetime) -> float:
    wear_factor = 0.5 if is_used else 1.0
    years = MAX_PROD_YEAR - production_year(prod_date) + 1
    return round2((80 * speed * wear_factor) / years)
