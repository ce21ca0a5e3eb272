"""Material Transition Records - one immutable fact per atomic Material change.

Invariants:
    - Records are frozen; the log is append-only
    - Every record carries the material id it belongs to
    - MaterialCreated is always the first record of a history
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from farm_assets.core.domain_types import MaterialId
from farm_assets.core.material_types import MaterialType
from farm_assets.core.value_objects import MaterialQuantity, PricePerUnit


@dataclass(frozen=True)
class MaterialCreated:
    material_id: MaterialId
    name: str
    price_per_unit: PricePerUnit
    material_type: MaterialType
    quantity: MaterialQuantity
    created_at: datetime


@dataclass(frozen=True)
class MaterialNameChanged:
    material_id: MaterialId
    name: str


@dataclass(frozen=True)
class MaterialPriceChanged:
    material_id: MaterialId
    price_per_unit: PricePerUnit


@dataclass(frozen=True)
class MaterialQuantityChanged:
    material_id: MaterialId
    quantity: MaterialQuantity


@dataclass(frozen=True)
class MaterialTypeChanged:
    material_id: MaterialId
    material_type: MaterialType


@dataclass(frozen=True)
class MaterialExpirationDateChanged:
    material_id: MaterialId
    expiration_date: date


@dataclass(frozen=True)
class MaterialNotesChanged:
    material_id: MaterialId
    notes: str


@dataclass(frozen=True)
class MaterialProducedByChanged:
    material_id: MaterialId
    produced_by: str


@dataclass(frozen=True)
class MaterialIsExpenseChanged:
    material_id: MaterialId
    is_expense: bool


MaterialEvent = Union[
    MaterialCreated,
    MaterialNameChanged,
    MaterialPriceChanged,
    MaterialQuantityChanged,
    MaterialTypeChanged,
    MaterialExpirationDateChanged,
    MaterialNotesChanged,
    MaterialProducedByChanged,
    MaterialIsExpenseChanged,
]
