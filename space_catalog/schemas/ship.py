"""Pydantic schemas for the ship catalog endpoints.

Field names travel as camelCase on the wire (shipType, prodDate, isUsed,
crewSize) and prodDate is expressed in epoch milliseconds.  rating is never
read from a request body.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from space_catalog.models.ship import (
    MAX_CREW_SIZE,
    MAX_PROD_YEAR,
    MAX_SPEED,
    MAX_TEXT_LENGTH,
    MIN_CREW_SIZE,
    MIN_PROD_YEAR,
    MIN_SPEED,
    ShipType,
)


def from_epoch_millis(value: int) -> datetime:
    """Convert epoch milliseconds to a naive datetime in server local time."""
    try:
        return datetime.fromtimestamp(value / 1000)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"timestamp {value} is out of range") from exc


def to_epoch_millis(value: datetime) -> int:
    return int(round(value.timestamp() * 1000))


def _check_text(value: str) -> str:
    if not value:
        raise ValueError("must not be empty")
    if len(value) > MAX_TEXT_LENGTH:
        raise ValueError(f"must be at most {MAX_TEXT_LENGTH} characters")
    return value


def _parse_prod_date(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value < 0:
            raise ValueError("prodDate must not be negative")
        return from_epoch_millis(value)
    return value


def _check_prod_date(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    if value.year < MIN_PROD_YEAR or value.year > MAX_PROD_YEAR:
        raise ValueError(f"prodDate year must be between {MIN_PROD_YEAR} and {MAX_PROD_YEAR}")
    return value


def _check_speed(value: float) -> float:
    if value < MIN_SPEED or value > MAX_SPEED:
        raise ValueError(f"speed must be between {MIN_SPEED} and {MAX_SPEED}")
    return value


def _check_crew_size(value: int) -> int:
    if value < MIN_CREW_SIZE or value > MAX_CREW_SIZE:
        raise ValueError(f"crewSize must be between {MIN_CREW_SIZE} and {MAX_CREW_SIZE}")
    return value


class ShipCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    planet: str
    ship_type: ShipType
    prod_date: datetime
    is_used: Optional[bool] = None
    speed: float
    crew_size: int

    @field_validator("name", "planet")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _check_text(v)

    @field_validator("prod_date", mode="before")
    @classmethod
    def parse_prod_date(cls, v: Any) -> Any:
        return _parse_prod_date(v)

    @field_validator("prod_date")
    @classmethod
    def validate_prod_date(cls, v: datetime) -> datetime:
        return _check_prod_date(v)

    @field_validator("speed")
    @classmethod
    def validate_speed(cls, v: float) -> float:
        return _check_speed(v)

    @field_validator("crew_size")
    @classmethod
    def validate_crew_size(cls, v: int) -> int:
        return _check_crew_size(v)


class ShipUpdate(BaseModel):
    """Partial update: only the fields present in the body are applied."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    planet: Optional[str] = None
    ship_type: Optional[ShipType] = None
    prod_date: Optional[datetime] = None
    is_used: Optional[bool] = None
    speed: Optional[float] = None
    crew_size: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            updatable = set(cls.model_fields) | {to_camel(name) for name in cls.model_fields}
            for key, value in data.items():
                if value is None and key in updatable:
                    raise ValueError(f"{key} must not be null")
        return data

    @field_validator("name", "planet")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _check_text(v)

    @field_validator("prod_date", mode="before")
    @classmethod
    def parse_prod_date(cls, v: Any) -> Any:
        return _parse_prod_date(v)

    @field_validator("prod_date")
    @classmethod
    def validate_prod_date(cls, v: datetime) -> datetime:
        return _check_prod_date(v)

    @field_validator("speed")
    @classmethod
    def validate_speed(cls, v: float) -> float:
        return _check_speed(v)

    @field_validator("crew_size")
    @classmethod
    def validate_crew_size(cls, v: int) -> int:
        return _check_crew_size(v)


class ShipResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    planet: str
    ship_type: ShipType
    prod_date: datetime
    is_used: bool
    speed: float
    crew_size: int
    rating: float

    @field_serializer("prod_date")
    def serialize_prod_date(self, v: datetime) -> int:
        return to_epoch_millis(v)
