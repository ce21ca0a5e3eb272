"""Service Dependencies - process-wide service singletons for FastAPI routes.

Invariants:
    - init_services() runs once in the lifespan before any request is served
    - get_*_service() raises RuntimeError when called before init_services()
    - All four repositories share the process lifetime of the services

Design Decisions:
    - Module-level singletons initialized on startup, same lifecycle as a
      connection pool: no import side effects, tests swap them through
      app.dependency_overrides
"""

import logging
from typing import Annotated

from fastapi import Depends

from farm_assets.config import Settings
from farm_assets.infrastructure.image_store import LocalImageStore
from farm_assets.infrastructure.in_memory_store import (
    InMemoryAreaRepository, InMemoryFarmRepository,
    InMemoryMaterialRepository, InMemoryReservoirRepository,
)
from farm_assets.services.farm_service import FarmService
from farm_assets.services.material_service import MaterialService

logger = logging.getLogger(__name__)

_farm_service: FarmService | None = None
_material_service: MaterialService | None = None


def init_services(settings: Settings) -> None:
    """Build the in-memory repositories and the services on top of them."""
    global _farm_service, _material_service
    _farm_service = FarmService(
        farms=InMemoryFarmRepository(),
        reservoirs=InMemoryReservoirRepository(),
        areas=InMemoryAreaRepository(),
        image_store=LocalImageStore(settings.upload_path_area),
        max_photo_bytes=settings.max_photo_bytes,
    )
    _material_service = MaterialService(InMemoryMaterialRepository())
    logger.info(f"Services initialized (photos under {settings.upload_path_area})")


def get_farm_service() -> FarmService:
    if _farm_service is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    return _farm_service


def get_material_service() -> MaterialService:
    if _material_service is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    return _material_service


# Type aliases for cleaner route signatures
FarmServiceDep = Annotated[FarmService, Depends(get_farm_service)]
MaterialServiceDep = Annotated[MaterialService, Depends(get_material_service)]
