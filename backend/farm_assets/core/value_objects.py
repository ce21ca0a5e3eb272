"""Value Objects - immutable typed values compared by value, not identity.

Invariants:
    - Every value object validates itself in __post_init__; an invalid one never exists
    - Bucket capacity >= 0 and 0 <= volume <= capacity
    - WaterSource is the closed union Bucket | Tap

Design Decisions:
    - Frozen dataclasses: hashable, safe to copy into Farm mirrors
    - Range checks live here; table membership that depends on another field
      (area type -> size unit) is checked by the owning aggregate
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from farm_assets.core.domain_types import (
    MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE, WaterSourceType,
)
from farm_assets.core.errors import FieldValidationError
from farm_assets.core.lookup_tables import CURRENCIES


@dataclass(frozen=True)
class GeoLocation:
    """Latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not MIN_LATITUDE <= self.latitude <= MAX_LATITUDE:
            raise FieldValidationError.invalid_option("latitude")
        if not MIN_LONGITUDE <= self.longitude <= MAX_LONGITUDE:
            raise FieldValidationError.invalid_option("longitude")


@dataclass(frozen=True)
class AreaSize:
    value: float
    unit: str

    def __post_init__(self):
        if self.value <= 0:
            raise FieldValidationError.invalid_option("size")
        if not self.unit:
            raise FieldValidationError.required("size_unit")


@dataclass(frozen=True)
class AreaLocation:
    code: str
    name: str


@dataclass(frozen=True)
class AreaPhoto:
    """Metadata of an uploaded area photo. The bytes live in the image store."""
    filename: str
    mime_type: str
    byte_size: int
    width: int
    height: int

    def __post_init__(self):
        if not self.filename:
            raise FieldValidationError.required("photo")
        if self.byte_size <= 0 or self.width <= 0 or self.height <= 0:
            raise FieldValidationError.invalid_option("photo")


# --- Water sources ------------------------------------------------------------

@dataclass(frozen=True)
class Bucket:
    """Finite water container. Capacity and volume share one unit (litres)."""
    capacity: float
    volume: float = 0.0

    def __post_init__(self):
        if self.capacity < 0:
            raise FieldValidationError.invalid_option("capacity")
        if self.volume < 0 or self.volume > self.capacity:
            raise FieldValidationError.invalid_option("volume")

    @property
    def type(self) -> WaterSourceType:
        return WaterSourceType.BUCKET


@dataclass(frozen=True)
class Tap:
    """Mains or well supply with no tracked capacity."""

    @property
    def type(self) -> WaterSourceType:
        return WaterSourceType.TAP


WaterSource = Union[Bucket, Tap]


# --- Material values ----------------------------------------------------------

@dataclass(frozen=True)
class PricePerUnit:
    amount: Decimal
    currency_code: str

    def __post_init__(self):
        if self.amount < 0:
            raise FieldValidationError.invalid_option("price_per_unit")
        if self.currency_code not in CURRENCIES:
            raise FieldValidationError.invalid_option("currency_code")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency_code}"


@dataclass(frozen=True)
class MaterialQuantity:
    value: float
    unit: str

    def __post_init__(self):
        if self.value < 0:
            raise FieldValidationError.invalid_option("quantity")
        if not self.unit:
            raise FieldValidationError.required("quantity_unit")
