"""Data models for the fuel log.

- FuelRecord: one fuel purchase, validated on every assignment
- MileageCalculation: fuel economy computed between two full-tank fill-ups
- TripSummary: totals over a date range of purchases
- Vehicle: the owner of a record stream
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.casting import normalize_decimal
from core.exceptions import ParseError, ValidationError

logger = logging.getLogger(__name__)

# Maximum values (column widths of the log display)
MAX_ODOMETER = 9_999_999
MAX_VOLUME = 9999.999
MAX_COST = 999999.999
MAX_PRICE = 999999.999

MIN_TANK_SIZE = 1.0
MAX_TANK_SIZE = 1000.0
DEFAULT_TANK_SIZE = 15.0

MIN_NAME_LENGTH = 1
MAX_NAME_LENGTH = 20
# Vehicle names double as export file names
VEHICLE_NAME_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9\- ]*")

# pydantic error types that mean "not a well-formed token" rather than
# "well-formed but out of range"
_PARSE_ERROR_TYPES = frozenset(
    {
        "bool_parsing",
        "datetime_from_date_parsing",
        "datetime_parsing",
        "datetime_type",
        "finite_number",
        "float_parsing",
        "float_type",
        "int_from_float",
        "int_parsing",
        "int_type",
    }
)


def _translate_validation_error(exc: PydanticValidationError) -> Exception:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "record"
    if error["type"] in _PARSE_ERROR_TYPES:
        return ParseError(field, error.get("input"))
    return ValidationError(field, error["msg"])


class BoundaryModel(BaseModel):
    """Model whose construction and assignments raise domain errors.

    A rejected assignment leaves the previous value in place.
    """

    model_config = ConfigDict(validate_assignment=True, allow_inf_nan=False)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise _translate_validation_error(exc) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except PydanticValidationError as exc:
            raise _translate_validation_error(exc) from exc


class MileageCalculation(BaseModel):
    """Fuel economy between two full-tank fill-ups."""

    model_config = ConfigDict(frozen=True)

    distance: int
    volume: float
    cost: float = 0.0

    @property
    def mileage(self) -> float:
        """Distance travelled per unit of fuel."""
        if self.volume > 0:
            return self.distance / self.volume
        return 0.0

    @property
    def price_per_volume(self) -> float:
        if self.volume > 0:
            return self.cost / self.volume
        return 0.0

    @property
    def cost_per_distance(self) -> float:
        if self.distance > 0:
            return self.cost / self.distance
        return 0.0


class Vehicle(BoundaryModel):
    """A vehicle owning a stream of fuel records."""

    id: int | None = None
    name: str = ""
    tank_size: float = Field(default=DEFAULT_TANK_SIZE, ge=MIN_TANK_SIZE, le=MAX_TANK_SIZE)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not MIN_NAME_LENGTH <= len(value) <= MAX_NAME_LENGTH:
            msg = "invalid name length"
            raise ValueError(msg)
        if not VEHICLE_NAME_PATTERN.fullmatch(value):
            msg = "invalid name format"
            raise ValueError(msg)
        return value

    @field_validator("tank_size", mode="before")
    @classmethod
    def _normalize_tank_size(cls, value: Any) -> Any:
        return normalize_decimal(value)

    def __str__(self) -> str:
        return self.name


class FuelRecord(BoundaryModel):
    """
    A single fuel purchase.

    Bounded fields are validated on construction and on every assignment;
    out-of-range values raise ``ValidationError`` and malformed text raises
    ``ParseError``. Textual decimals may use ``,`` as the separator.

    ``price`` is the per-unit price. It is derived from cost and volume
    whenever a record is constructed without an explicit price; after
    changing cost or volume directly, call ``calculate_price()``.
    """

    id: int | None = None
    vehicle_id: int | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
    odometer: int = Field(default=0, ge=0, le=MAX_ODOMETER)
    # Only a default-constructed record reads back a zero volume
    volume: float = Field(default=0.0, gt=0, le=MAX_VOLUME)
    cost: float = Field(default=0.0, ge=0, le=MAX_COST)
    price: float = Field(default=0.0, ge=0, le=MAX_PRICE)
    full_tank: bool = False
    calculation_hidden: bool = False
    notes: str = ""
    economy: MileageCalculation | None = None

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        if "price" not in data:
            self.calculate_price()

    @field_validator("odometer", mode="before")
    @classmethod
    def _strip_odometer(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("volume", "cost", "price", mode="before")
    @classmethod
    def _normalize_decimal(cls, value: Any) -> Any:
        return normalize_decimal(value)

    @field_validator("timestamp")
    @classmethod
    def _drop_timezone(cls, value: datetime) -> datetime:
        # Purchases are kept in local wall-clock time
        return value.replace(tzinfo=None)

    @field_validator("notes", mode="before")
    @classmethod
    def _normalize_notes(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value

    @classmethod
    def for_vehicle(cls, vehicle: Vehicle) -> FuelRecord:
        """Blank record owned by ``vehicle``."""
        return cls(vehicle_id=vehicle.id)

    @property
    def has_economy(self) -> bool:
        return self.economy is not None

    def calculate_price(self) -> float:
        """Recompute price from the current cost and volume."""
        self.price = self.cost / self.volume if self.volume > 0 else 0.0
        return self.price

    def calculate_volume(self) -> float:
        """Derive volume from the current cost and price."""
        if self.price <= 0:
            raise ValidationError("volume", "cannot derive volume without a price")
        self.volume = self.cost / self.price
        return self.volume

    def calculate_cost(self) -> float:
        """Derive cost from the current price and volume."""
        self.cost = self.price * self.volume
        return self.cost

    def clone(self) -> FuelRecord:
        """Copy of this record without its economy annotation."""
        return self.model_copy(update={"economy": None}, deep=True)

    def _identity(self) -> tuple:
        return (
            self.id,
            self.vehicle_id,
            self.timestamp,
            self.volume,
            self.odometer,
            self.cost,
            self.notes,
            self.full_tank,
            self.calculation_hidden,
            self.price,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FuelRecord):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())


class TripSummary(BaseModel):
    """
    Totals for the purchases made over a date range.

    ``merge`` sums totals and unions record sets. It is not idempotent:
    merging the same summary twice double counts the totals while the record
    set stays the same, so each source must be merged exactly once.
    """

    start_date: datetime
    end_date: datetime
    distance: int = 0
    volume: float = 0.0
    cost: float = 0.0
    records: set[FuelRecord] = Field(default_factory=set)

    @classmethod
    def empty(cls, when: datetime) -> TripSummary:
        return cls(start_date=when, end_date=when)

    @classmethod
    def between(cls, start: FuelRecord, end: FuelRecord) -> TripSummary:
        """Trip from one purchase to the next.

        Only the end purchase is counted; the start only marks the boundary.
        """
        return cls(
            start_date=start.timestamp,
            end_date=end.timestamp,
            distance=end.odometer - start.odometer,
            volume=end.volume,
            cost=end.cost,
            records={end},
        )

    @property
    def average_price(self) -> float:
        if self.volume > 0:
            return self.cost / self.volume
        return 0.0

    def merge(self, other: TripSummary) -> TripSummary:
        """Fold ``other`` into this summary in place and return it."""
        self.start_date = min(self.start_date, other.start_date)
        self.end_date = max(self.end_date, other.end_date)
        self.distance += other.distance
        self.volume += other.volume
        self.cost += other.cost
        self.records |= other.records
        return self
