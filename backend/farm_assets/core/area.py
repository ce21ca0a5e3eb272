"""Area Aggregate - a cultivation area on a farm, its size, location, photo and notes.

Invariants:
    - name is non-empty; area_type is a recognized AreaType
    - size.unit belongs to AREA_SIZE_UNITS[area_type] (INVALID_OPTION("size_unit") otherwise)
    - reservoir_id references a reservoir of the same farm (reference, not ownership)
    - photo is optional; get_photo() on an area without one is NOT_FOUND
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from farm_assets.core.domain_types import AreaId, AreaType, FarmId, ReservoirId
from farm_assets.core.errors import (
    EntityNotFoundError, FieldValidationError, InvariantViolationError,
)
from farm_assets.core.lookup_tables import AREA_SIZE_UNITS
from farm_assets.core.notes import Note, NoteOwner
from farm_assets.core.validators import validate_area_type, validate_name
from farm_assets.core.value_objects import AreaLocation, AreaPhoto, AreaSize

if TYPE_CHECKING:
    from farm_assets.core.farm import Farm
    from farm_assets.core.reservoir import Reservoir


@dataclass
class Area(NoteOwner):
    id: AreaId
    name: str
    area_type: AreaType
    farm_id: FarmId
    reservoir_id: ReservoirId | None = None
    size: AreaSize | None = None
    location: AreaLocation | None = None
    photo: AreaPhoto | None = None
    notes: list[Note] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, farm: "Farm", name: str, area_type: AreaType | str) -> "Area":
        return cls(
            id=AreaId(uuid.uuid4()),
            name=validate_name(name),
            area_type=validate_area_type(area_type),
            farm_id=farm.id,
        )

    def change_size(self, size: AreaSize) -> None:
        unit = AREA_SIZE_UNITS[self.area_type].get(size.unit)
        if unit is None:
            raise FieldValidationError.invalid_option("size_unit")
        self.size = AreaSize(value=size.value, unit=unit.code)

    def change_location(self, location: AreaLocation) -> None:
        self.location = location

    def assign_reservoir(self, reservoir: "Reservoir") -> None:
        if reservoir.farm_id != self.farm_id:
            raise InvariantViolationError(
                "RESERVOIR_FARM_MISMATCH",
                f"Reservoir '{reservoir.id}' does not belong to farm '{self.farm_id}'.",
            )
        self.reservoir_id = reservoir.id

    def attach_photo(self, photo: AreaPhoto) -> None:
        """Set the photo. A later upload replaces the earlier one."""
        self.photo = photo

    def get_photo(self) -> AreaPhoto:
        if self.photo is None:
            raise EntityNotFoundError("photo", self.id)
        return self.photo
