"""In-Memory Store - reference implementation of the repository Protocols.

Invariants:
    - One InMemoryTable per aggregate type; the table is the only shared mutable state
    - Writes are serialized by an asyncio.Lock; reads take no lock
    - A write swaps in a new dict in one step, so readers see either the old
      or the new table, never a half-applied write
    - Rows are deep-copied on the way in and on the way out: callers never
      share an instance with the table or with each other
    - A save that has started runs to completion even if the awaiting caller
      is cancelled

Design Decisions:
    - Generic base repository with a per-aggregate subclass, mirroring how a
      SQL-backed repository family would share CRUD code
    - Insertion order is kept, so find_all() is stable across calls
"""

import asyncio
import copy
import logging
from typing import Generic, TypeVar
from uuid import UUID

from farm_assets.core.area import Area
from farm_assets.core.errors import EntityNotFoundError, StorageError
from farm_assets.core.farm import Farm
from farm_assets.core.material import Material
from farm_assets.core.reservoir import Reservoir

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryTable(Generic[T]):
    """Keyed row store with single-writer, many-reader access."""

    def __init__(self, name: str):
        self.name = name
        self._rows: dict[UUID, T] = {}
        self._write_lock = asyncio.Lock()

    async def read_all(self) -> list[T]:
        rows = self._rows
        return [copy.deepcopy(row) for row in rows.values()]

    async def read(self, key: UUID) -> T | None:
        row = self._rows.get(key)
        return copy.deepcopy(row) if row is not None else None

    async def write(self, key: UUID, row: T) -> None:
        snapshot = copy.deepcopy(row)
        async with self._write_lock:
            updated = dict(self._rows)
            updated[key] = snapshot
            self._rows = updated

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryRepository(Generic[T]):
    """Generic find_all / find_by_id / save over an InMemoryTable."""

    entity_name: str = "entity"

    def __init__(self, table: InMemoryTable[T] | None = None):
        self.table: InMemoryTable[T] = table or InMemoryTable(self.entity_name)

    async def find_all(self) -> list[T]:
        return await self.table.read_all()

    async def find_by_id(self, entity_id: UUID) -> T:
        row = await self.table.read(entity_id)
        if row is None:
            raise EntityNotFoundError(self.entity_name, entity_id)
        return row

    async def save(self, entity: T) -> None:
        entity_id = getattr(entity, "id", None)
        if not isinstance(entity_id, UUID):
            raise StorageError(
                f"{self.entity_name} has no UUID id", "save",
            )
        await asyncio.shield(self.table.write(entity_id, entity))
        logger.debug(
            f"Saved {self.entity_name} {entity_id}",
            extra={f"{self.entity_name}_id": str(entity_id)},
        )


class InMemoryFarmRepository(InMemoryRepository[Farm]):
    entity_name = "farm"


class InMemoryReservoirRepository(InMemoryRepository[Reservoir]):
    entity_name = "reservoir"


class InMemoryAreaRepository(InMemoryRepository[Area]):
    entity_name = "area"


class InMemoryMaterialRepository(InMemoryRepository[Material]):
    entity_name = "material"
