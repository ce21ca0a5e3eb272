"""Boundary Protocols - contracts between the core and the storage / file shell.

Invariants:
    - Core NEVER imports from infrastructure - dependency arrows point inward only
    - Every repository call is a coroutine: awaiting it yields exactly one
      completion (the value, or a raised error) and nothing is retried
    - find_by_id raises EntityNotFoundError when no record matches
    - save returns None on success and raises on validation/storage failure
    - Values returned by find_* are exclusively owned by the caller; mutating
      them never changes stored state until they are passed back into save()

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; aggregates that flow through
      these protocols stay synchronous
"""

from typing import Protocol

from farm_assets.core.area import Area
from farm_assets.core.domain_types import AreaId, FarmId, MaterialId, ReservoirId
from farm_assets.core.farm import Farm
from farm_assets.core.material import Material
from farm_assets.core.reservoir import Reservoir


class FarmRepository(Protocol):
    """Contract for farm persistence - implemented by the shell."""
    async def find_all(self) -> list[Farm]: ...
    async def find_by_id(self, farm_id: FarmId) -> Farm: ...
    async def save(self, farm: Farm) -> None: ...


class ReservoirRepository(Protocol):
    """Contract for reservoir persistence - implemented by the shell."""
    async def find_all(self) -> list[Reservoir]: ...
    async def find_by_id(self, reservoir_id: ReservoirId) -> Reservoir: ...
    async def save(self, reservoir: Reservoir) -> None: ...


class AreaRepository(Protocol):
    """Contract for area persistence - implemented by the shell."""
    async def find_all(self) -> list[Area]: ...
    async def find_by_id(self, area_id: AreaId) -> Area: ...
    async def save(self, area: Area) -> None: ...


class MaterialRepository(Protocol):
    """Contract for material persistence - implemented by the shell."""
    async def find_all(self) -> list[Material]: ...
    async def find_by_id(self, material_id: MaterialId) -> Material: ...
    async def save(self, material: Material) -> None: ...


class ImageStore(Protocol):
    """Contract for area photo storage - implemented by the shell."""
    def path_for(self, filename: str) -> str: ...
    async def save(self, filename: str, content: bytes) -> str: ...
    async def dimensions(self, path: str) -> tuple[int, int]: ...
    async def delete(self, path: str) -> None: ...
