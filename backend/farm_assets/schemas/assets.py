"""Asset Schemas - Pydantic response models for the farm and inventory API.

Invariants:
    - Every route returns {"data": <model or list of models>}
    - Models are built only from aggregates via the to_*_response() mappers;
      routes never hand-assemble dicts
    - Water source, size and photo fields are null when the aggregate has none

Design Decisions:
    - Response models only: request bodies are form fields validated by the
      core validators, so a client gets the same REQUIRED/INVALID_OPTION
      codes whichever surface it calls
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from farm_assets.core.area import Area
from farm_assets.core.farm import Farm
from farm_assets.core.lookup_tables import (
    AREA_SIZE_UNITS, COUNTRIES, FARM_TYPES, MATERIAL_QUANTITY_UNITS,
    LookupEntry, get_city,
)
from farm_assets.core.material import Material
from farm_assets.core.material_types import secondary_code
from farm_assets.core.notes import Note
from farm_assets.core.reservoir import Reservoir
from farm_assets.core.value_objects import Bucket

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint."""
    data: T


class LookupEntryResponse(BaseModel):
    code: str
    name: str


class NoteResponse(BaseModel):
    uid: UUID
    content: str
    created_date: datetime


class WaterSourceResponse(BaseModel):
    type: str
    capacity: float | None = None
    volume: float | None = None


class ReservoirResponse(BaseModel):
    uid: UUID
    name: str
    farm_id: UUID
    water_source: WaterSourceResponse | None = None
    notes: list[NoteResponse] = []
    created_date: datetime


class AreaSizeResponse(BaseModel):
    value: float
    unit: LookupEntryResponse


class AreaPhotoResponse(BaseModel):
    filename: str
    mime_type: str
    size: int
    width: int
    height: int


class AreaResponse(BaseModel):
    uid: UUID
    name: str
    type: str
    farm_id: UUID
    reservoir_id: UUID | None = None
    size: AreaSizeResponse | None = None
    location: LookupEntryResponse | None = None
    photo: AreaPhotoResponse | None = None
    notes: list[NoteResponse] = []
    created_date: datetime


class SimpleFarmResponse(BaseModel):
    """List view: identity, type and counts, no children."""
    uid: UUID
    name: str
    type: LookupEntryResponse
    total_reservoir: int
    total_area: int
    created_date: datetime


class FarmResponse(BaseModel):
    uid: UUID
    name: str
    type: LookupEntryResponse
    latitude: float | None = None
    longitude: float | None = None
    country: LookupEntryResponse | None = None
    city: LookupEntryResponse | None = None
    reservoirs: list[ReservoirResponse] = []
    areas: list[AreaResponse] = []
    created_date: datetime


class PriceResponse(BaseModel):
    amount: Decimal
    code: str


class QuantityResponse(BaseModel):
    value: float
    unit: LookupEntryResponse


class MaterialResponse(BaseModel):
    uid: UUID
    name: str
    type: str
    type_detail: str | None = None
    price_per_unit: PriceResponse
    quantity: QuantityResponse
    expiration_date: date | None = None
    notes: str | None = None
    produced_by: str | None = None
    is_expense: bool | None = None
    created_date: datetime


class AvailableSeedMaterialResponse(BaseModel):
    """A seed in stock, as offered when planting a crop batch."""
    uid: UUID
    name: str
    plant_type: str
    quantity: QuantityResponse


# --- Mappers ------------------------------------------------------------------

def to_lookup_response(entry: LookupEntry | None, fallback_code: str | None = None):
    if entry is not None:
        return LookupEntryResponse(code=entry.code, name=entry.name)
    if fallback_code:
        return LookupEntryResponse(code=fallback_code, name=fallback_code)
    return None


def to_note_response(note: Note) -> NoteResponse:
    return NoteResponse(uid=note.id, content=note.content, created_date=note.created_at)


def to_reservoir_response(reservoir: Reservoir) -> ReservoirResponse:
    source = reservoir.water_source
    water_source = None
    if isinstance(source, Bucket):
        water_source = WaterSourceResponse(
            type=source.type.value, capacity=source.capacity, volume=source.volume,
        )
    elif source is not None:
        water_source = WaterSourceResponse(type=source.type.value)
    return ReservoirResponse(
        uid=reservoir.id,
        name=reservoir.name,
        farm_id=reservoir.farm_id,
        water_source=water_source,
        notes=[to_note_response(n) for n in reservoir.notes],
        created_date=reservoir.created_at,
    )


def to_area_response(area: Area) -> AreaResponse:
    size = None
    if area.size is not None:
        unit = AREA_SIZE_UNITS[area.area_type].get(area.size.unit)
        size = AreaSizeResponse(
            value=area.size.value, unit=to_lookup_response(unit, area.size.unit),
        )
    location = None
    if area.location is not None:
        location = LookupEntryResponse(code=area.location.code, name=area.location.name)
    photo = None
    if area.photo is not None:
        photo = AreaPhotoResponse(
            filename=area.photo.filename,
            mime_type=area.photo.mime_type,
            size=area.photo.byte_size,
            width=area.photo.width,
            height=area.photo.height,
        )
    return AreaResponse(
        uid=area.id,
        name=area.name,
        type=area.area_type.value,
        farm_id=area.farm_id,
        reservoir_id=area.reservoir_id,
        size=size,
        location=location,
        photo=photo,
        notes=[to_note_response(n) for n in area.notes],
        created_date=area.created_at,
    )


def to_farm_response(farm: Farm) -> FarmResponse:
    return FarmResponse(
        uid=farm.id,
        name=farm.name,
        type=to_lookup_response(FARM_TYPES.get(farm.farm_type), farm.farm_type),
        latitude=farm.latitude,
        longitude=farm.longitude,
        country=to_lookup_response(COUNTRIES.get(farm.country_code), farm.country_code),
        city=to_lookup_response(get_city(farm.country_code, farm.city_code), farm.city_code),
        reservoirs=[to_reservoir_response(r) for r in farm.reservoirs],
        areas=[to_area_response(a) for a in farm.areas],
        created_date=farm.created_at,
    )


def to_simple_farm_response(farm: Farm) -> SimpleFarmResponse:
    return SimpleFarmResponse(
        uid=farm.id,
        name=farm.name,
        type=to_lookup_response(FARM_TYPES.get(farm.farm_type), farm.farm_type),
        total_reservoir=len(farm.reservoirs),
        total_area=len(farm.areas),
        created_date=farm.created_at,
    )


def _quantity_response(material: Material) -> QuantityResponse:
    units = MATERIAL_QUANTITY_UNITS[material.category]
    return QuantityResponse(
        value=material.quantity.value,
        unit=to_lookup_response(units.get(material.quantity.unit), material.quantity.unit),
    )


def to_material_response(material: Material) -> MaterialResponse:
    return MaterialResponse(
        uid=material.id,
        name=material.name,
        type=material.category.value,
        type_detail=secondary_code(material.material_type),
        price_per_unit=PriceResponse(
            amount=material.price_per_unit.amount,
            code=material.price_per_unit.currency_code,
        ),
        quantity=_quantity_response(material),
        expiration_date=material.expiration_date,
        notes=material.notes,
        produced_by=material.produced_by,
        is_expense=material.is_expense,
        created_date=material.created_at,
    )


def to_available_seed_response(material: Material) -> AvailableSeedMaterialResponse:
    return AvailableSeedMaterialResponse(
        uid=material.id,
        name=material.name,
        plant_type=material.material_type.plant_type,
        quantity=_quantity_response(material),
    )
