"""Farm Aggregate - a farm with denormalized mirrors of its reservoirs and areas.

Invariants:
    - name is non-empty; farm_type is a code from FARM_TYPES
    - Geolocation is in range; region codes resolve against COUNTRIES / CITIES
    - reservoirs / areas hold deep copies of the standalone aggregates, never
      shared references; a child id appears at most once in each list
    - A mirror only changes through add_* or sync_*_info; sync of an unknown
      child id is NOT_FOUND

Design Decisions:
    - Copy semantics for mirrors: mutating a Reservoir after add_reservoir does
      not leak into the Farm until sync_reservoir_info is called. The services
      layer pairs every child mutation with its sync call (FarmChildSync)
"""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from farm_assets.core.area import Area
from farm_assets.core.domain_types import AreaId, FarmId, ReservoirId
from farm_assets.core.errors import EntityNotFoundError, InvariantViolationError
from farm_assets.core.reservoir import Reservoir
from farm_assets.core.validators import (
    validate_farm_type, validate_geolocation, validate_name, validate_region,
)


@dataclass
class Farm:
    id: FarmId
    name: str
    farm_type: str
    latitude: float | None = None
    longitude: float | None = None
    country_code: str | None = None
    city_code: str | None = None
    reservoirs: list[Reservoir] = field(default_factory=list)
    areas: list[Area] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, name: str, farm_type: str) -> "Farm":
        clean_name = validate_name(name)
        entry = validate_farm_type(farm_type)
        return cls(id=FarmId(uuid.uuid4()), name=clean_name, farm_type=entry.code)

    def change_geolocation(self, latitude: object, longitude: object) -> None:
        location = validate_geolocation(latitude, longitude)
        self.latitude = location.latitude
        self.longitude = location.longitude

    def change_region(self, country_code: str, city_code: str) -> None:
        country, city = validate_region(country_code, city_code)
        self.country_code = country.code
        self.city_code = city.code

    # --- Reservoir mirrors ----------------------------------------------------

    def add_reservoir(self, reservoir: Reservoir) -> None:
        if self.find_reservoir(reservoir.id) is not None:
            raise InvariantViolationError(
                "CHILD_ALREADY_ATTACHED",
                f"Reservoir '{reservoir.id}' is already attached to farm '{self.id}'.",
            )
        reservoir.farm_id = self.id
        self.reservoirs.append(copy.deepcopy(reservoir))

    def sync_reservoir_info(self, reservoir: Reservoir) -> None:
        """Replace the mirror of `reservoir` with a fresh copy."""
        for index, mirror in enumerate(self.reservoirs):
            if mirror.id == reservoir.id:
                self.reservoirs[index] = copy.deepcopy(reservoir)
                return
        raise EntityNotFoundError("reservoir", reservoir.id)

    def find_reservoir(self, reservoir_id: ReservoirId) -> Reservoir | None:
        return next((r for r in self.reservoirs if r.id == reservoir_id), None)

    # --- Area mirrors ---------------------------------------------------------

    def add_area(self, area: Area) -> None:
        if self.find_area(area.id) is not None:
            raise InvariantViolationError(
                "CHILD_ALREADY_ATTACHED",
                f"Area '{area.id}' is already attached to farm '{self.id}'.",
            )
        area.farm_id = self.id
        self.areas.append(copy.deepcopy(area))

    def sync_area_info(self, area: Area) -> None:
        """Replace the mirror of `area` with a fresh copy."""
        for index, mirror in enumerate(self.areas):
            if mirror.id == area.id:
                self.areas[index] = copy.deepcopy(area)
                return
        raise EntityNotFoundError("area", area.id)

    def find_area(self, area_id: AreaId) -> Area | None:
        return next((a for a in self.areas if a.id == area_id), None)
