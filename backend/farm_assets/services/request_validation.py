"""Existence Validators - resolve raw ids through the repository port.

Invariants:
    - Malformed ids fail PARSE_FAILED(field), empty ids REQUIRED(field)
    - Unknown ids fail NOT_FOUND(entity) straight from the repository
"""

from farm_assets.core.area import Area
from farm_assets.core.domain_types import AreaId, FarmId, ReservoirId
from farm_assets.core.farm import Farm
from farm_assets.core.repository_protocols import (
    AreaRepository, FarmRepository, ReservoirRepository,
)
from farm_assets.core.reservoir import Reservoir
from farm_assets.core.validators import validate_entity_id


async def validate_farm(farms: FarmRepository, raw_id: object) -> Farm:
    farm_id = FarmId(validate_entity_id(raw_id, "farm_id"))
    return await farms.find_by_id(farm_id)


async def validate_reservoir(reservoirs: ReservoirRepository, raw_id: object) -> Reservoir:
    reservoir_id = ReservoirId(validate_entity_id(raw_id, "reservoir_id"))
    return await reservoirs.find_by_id(reservoir_id)


async def validate_area(areas: AreaRepository, raw_id: object) -> Area:
    area_id = AreaId(validate_entity_id(raw_id, "area_id"))
    return await areas.find_by_id(area_id)
