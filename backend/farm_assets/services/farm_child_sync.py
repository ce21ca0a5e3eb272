"""Farm Child Sync - the single write path for Reservoir/Area changes that a Farm mirrors.

Invariants:
    - Every operation is: load child + farm, mutate child, sync the farm
      mirror, save child, save farm - in that order, under the farm's lock
    - Any failure before the first save (NOT_FOUND farm, failed mutation,
      missing mirror) aborts with nothing persisted
    - Operations on the same farm never interleave; different farms run concurrently
    - No rollback: if the child save succeeds and the farm save fails, the
      error is logged and re-raised, and the child write stays committed

Design Decisions:
    - Per-farm asyncio.Lock held across the read-modify-write: two note
      additions on sibling reservoirs cannot overwrite each other's mirror
    - Mutations are plain callables on the loaded child, so the aggregate
      rules stay in core/ and this helper only sequences IO
"""

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from farm_assets.core.area import Area
from farm_assets.core.domain_types import AreaId, FarmId, ReservoirId
from farm_assets.core.farm import Farm
from farm_assets.core.repository_protocols import (
    AreaRepository, FarmRepository, ReservoirRepository,
)
from farm_assets.core.reservoir import Reservoir

logger = logging.getLogger(__name__)

R = TypeVar("R")


class FarmChildSync:
    """Keeps Farm mirrors in step with their standalone Reservoirs and Areas."""

    def __init__(
        self,
        farms: FarmRepository,
        reservoirs: ReservoirRepository,
        areas: AreaRepository,
    ):
        self.farms = farms
        self.reservoirs = reservoirs
        self.areas = areas
        self._farm_locks: dict[FarmId, asyncio.Lock] = {}

    def _lock_for(self, farm_id: FarmId) -> asyncio.Lock:
        return self._farm_locks.setdefault(farm_id, asyncio.Lock())

    # --- Attach new children --------------------------------------------------

    async def attach_reservoir(self, farm_id: FarmId, reservoir: Reservoir) -> Farm:
        async with self._lock_for(farm_id):
            farm = await self.farms.find_by_id(farm_id)
            farm.add_reservoir(reservoir)
            await self._persist(farm, reservoir, self.reservoirs.save, "reservoir")
        return farm

    async def attach_area(self, farm_id: FarmId, area: Area) -> Farm:
        async with self._lock_for(farm_id):
            farm = await self.farms.find_by_id(farm_id)
            farm.add_area(area)
            await self._persist(farm, area, self.areas.save, "area")
        return farm

    # --- Mutate existing children ---------------------------------------------

    async def mutate_reservoir(
        self, reservoir_id: ReservoirId, mutation: Callable[[Reservoir], R],
    ) -> tuple[Reservoir, R]:
        """Apply `mutation` to the stored reservoir and re-sync its farm."""
        located = await self.reservoirs.find_by_id(reservoir_id)
        async with self._lock_for(located.farm_id):
            reservoir = await self.reservoirs.find_by_id(reservoir_id)
            farm = await self.farms.find_by_id(reservoir.farm_id)
            result = mutation(reservoir)
            farm.sync_reservoir_info(reservoir)
            await self._persist(farm, reservoir, self.reservoirs.save, "reservoir")
        return reservoir, result

    async def mutate_area(
        self, area_id: AreaId, mutation: Callable[[Area], R],
    ) -> tuple[Area, R]:
        """Apply `mutation` to the stored area and re-sync its farm."""
        located = await self.areas.find_by_id(area_id)
        async with self._lock_for(located.farm_id):
            area = await self.areas.find_by_id(area_id)
            farm = await self.farms.find_by_id(area.farm_id)
            result = mutation(area)
            farm.sync_area_info(area)
            await self._persist(farm, area, self.areas.save, "area")
        return area, result

    # --- Helper ---------------------------------------------------------------

    async def _persist(self, farm: Farm, child, save_child, kind: str) -> None:
        await save_child(child)
        try:
            await self.farms.save(farm)
        except Exception:
            logger.error(
                f"Farm save failed after {kind} save; farm mirror is stale",
                extra={"farm_id": str(farm.id), f"{kind}_id": str(child.id)},
                exc_info=True,
            )
            raise
        logger.info(
            f"Synced {kind} into farm",
            extra={"farm_id": str(farm.id), f"{kind}_id": str(child.id)},
        )
