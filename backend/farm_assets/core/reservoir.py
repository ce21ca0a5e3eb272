"""Reservoir Aggregate - a farm's water source and its notes.

Invariants:
    - name is non-empty
    - farm_id is a back-reference, not ownership
    - Exactly one water source is attached, once; attaching a second one
      (same or other variant) raises InvariantViolationError
    - Capacity rules apply to Bucket only

Design Decisions:
    - Mutators change the instance in place; callers own the instance they got
      from a repository until they hand it back to save()
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from farm_assets.core.domain_types import FarmId, ReservoirId, WaterSourceType
from farm_assets.core.errors import InvariantViolationError
from farm_assets.core.notes import Note, NoteOwner
from farm_assets.core.validators import validate_reservoir_name
from farm_assets.core.value_objects import Bucket, Tap, WaterSource

if TYPE_CHECKING:
    from farm_assets.core.farm import Farm


@dataclass
class Reservoir(NoteOwner):
    id: ReservoirId
    name: str
    farm_id: FarmId
    water_source: WaterSource | None = None
    notes: list[Note] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, farm: "Farm", name: str) -> "Reservoir":
        return cls(
            id=ReservoirId(uuid.uuid4()),
            name=validate_reservoir_name(name),
            farm_id=farm.id,
        )

    @property
    def water_source_type(self) -> WaterSourceType | None:
        return self.water_source.type if self.water_source else None

    def attach_bucket(self, capacity: float, volume: float = 0.0) -> Bucket:
        self._ensure_no_water_source()
        bucket = Bucket(capacity=capacity, volume=volume)
        self.water_source = bucket
        return bucket

    def attach_tap(self) -> Tap:
        self._ensure_no_water_source()
        tap = Tap()
        self.water_source = tap
        return tap

    def _ensure_no_water_source(self) -> None:
        if self.water_source is not None:
            raise InvariantViolationError(
                "WATER_SOURCE_ALREADY_ATTACHED",
                f"Reservoir '{self.id}' already has a {self.water_source.type.value} attached.",
            )
