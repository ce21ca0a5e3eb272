"""Farm Service - farm, reservoir and area use cases.

Invariants:
    - Each use case runs every validator (field and existence) before it
      constructs or mutates an aggregate
    - Reservoir/Area writes go through FarmChildSync, never straight to a repository
    - Reads return caller-owned copies from the repositories

Design Decisions:
    - Raw form values in, aggregates out: response shaping stays in schemas/
"""

import logging
import os
from dataclasses import dataclass

from farm_assets.core.area import Area
from farm_assets.core.domain_types import WaterSourceType
from farm_assets.core.errors import (
    EntityNotFoundError, FieldValidationError, PhotoProcessingError,
)
from farm_assets.core.farm import Farm
from farm_assets.core.lookup_tables import FARM_TYPES, LookupEntry
from farm_assets.core.repository_protocols import (
    AreaRepository, FarmRepository, ImageStore, ReservoirRepository,
)
from farm_assets.core.reservoir import Reservoir
from farm_assets.core.validators import (
    validate_area_location, validate_area_size, validate_area_type,
    validate_capacity, validate_entity_id, validate_farm_type,
    validate_geolocation, validate_name, validate_note_content,
    validate_region, validate_reservoir_name, validate_water_source_type,
)
from farm_assets.core.value_objects import AreaPhoto
from farm_assets.services.farm_child_sync import FarmChildSync
from farm_assets.services.request_validation import (
    validate_area, validate_farm, validate_reservoir,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhotoUpload:
    """An uploaded photo as received from the HTTP layer."""
    filename: str
    content_type: str
    content: bytes


class FarmService:
    """Use cases for farms and the reservoirs and areas they mirror."""

    def __init__(
        self,
        farms: FarmRepository,
        reservoirs: ReservoirRepository,
        areas: AreaRepository,
        image_store: ImageStore,
        max_photo_bytes: int = 5 * 1024 * 1024,
    ):
        self.farms = farms
        self.reservoirs = reservoirs
        self.areas = areas
        self.image_store = image_store
        self.max_photo_bytes = max_photo_bytes
        self.child_sync = FarmChildSync(farms, reservoirs, areas)

    # --- Farms ----------------------------------------------------------------

    def farm_types(self) -> list[LookupEntry]:
        return FARM_TYPES.list_all()

    async def create_farm(
        self,
        name: str,
        farm_type: str,
        latitude: str,
        longitude: str,
        country_code: str,
        city_code: str,
    ) -> Farm:
        validate_name(name)
        validate_farm_type(farm_type)
        validate_geolocation(latitude, longitude)
        validate_region(country_code, city_code)

        farm = Farm.create(name, farm_type)
        farm.change_geolocation(latitude, longitude)
        farm.change_region(country_code, city_code)

        await self.farms.save(farm)
        logger.info(f"Created farm '{farm.name}'", extra={"farm_id": str(farm.id)})
        return farm

    async def list_farms(self) -> list[Farm]:
        return await self.farms.find_all()

    async def get_farm(self, farm_id: object) -> Farm:
        return await validate_farm(self.farms, farm_id)

    # --- Reservoirs -----------------------------------------------------------

    async def create_reservoir(
        self, farm_id: object, name: str, water_source_type: str, capacity: str = "",
    ) -> Reservoir:
        clean_name = validate_reservoir_name(name)
        source_type = validate_water_source_type(water_source_type)
        bucket_capacity = validate_capacity(source_type, capacity)
        farm = await validate_farm(self.farms, farm_id)

        reservoir = Reservoir.create(farm, clean_name)
        if source_type == WaterSourceType.BUCKET:
            reservoir.attach_bucket(bucket_capacity, 0.0)
        else:
            reservoir.attach_tap()

        await self.child_sync.attach_reservoir(farm.id, reservoir)
        logger.info(
            f"Created reservoir '{reservoir.name}'",
            extra={"farm_id": str(farm.id), "reservoir_id": str(reservoir.id)},
        )
        return reservoir

    async def add_reservoir_note(self, reservoir_id: object, content: str) -> Reservoir:
        rid = validate_entity_id(reservoir_id, "reservoir_id")
        text = validate_note_content(content)
        reservoir, note = await self.child_sync.mutate_reservoir(rid, lambda r: r.add_note(text))
        logger.info(
            "Added reservoir note",
            extra={"reservoir_id": str(rid), "note_id": str(note.id)},
        )
        return reservoir

    async def remove_reservoir_note(self, reservoir_id: object, note_id: object) -> Reservoir:
        rid = validate_entity_id(reservoir_id, "reservoir_id")
        nid = validate_entity_id(note_id, "note_id")
        reservoir, _ = await self.child_sync.mutate_reservoir(rid, lambda r: r.remove_note(nid))
        logger.info(
            "Removed reservoir note",
            extra={"reservoir_id": str(rid), "note_id": str(nid)},
        )
        return reservoir

    async def list_farm_reservoirs(self, farm_id: object) -> list[Reservoir]:
        farm = await validate_farm(self.farms, farm_id)
        return farm.reservoirs

    async def get_farm_reservoir(self, farm_id: object, reservoir_id: object) -> Reservoir:
        farm = await validate_farm(self.farms, farm_id)
        reservoir = await validate_reservoir(self.reservoirs, reservoir_id)
        if reservoir.farm_id != farm.id:
            raise EntityNotFoundError("reservoir", reservoir.id)
        return reservoir

    # --- Areas ----------------------------------------------------------------

    async def create_area(
        self,
        farm_id: object,
        name: str,
        area_type: str,
        reservoir_id: str,
        size: str,
        size_unit: str,
        location: str,
        photo: PhotoUpload | None = None,
    ) -> Area:
        farm = await validate_farm(self.farms, farm_id)
        reservoir = await validate_reservoir(self.reservoirs, reservoir_id)
        clean_name = validate_name(name)
        kind = validate_area_type(area_type)
        area_size = validate_area_size(size, size_unit, kind)
        area_location = validate_area_location(location)
        if photo is not None:
            self._validate_photo_upload(photo)

        area = Area.create(farm, clean_name, kind)
        area.change_size(area_size)
        area.change_location(area_location)
        area.assign_reservoir(reservoir)
        if photo is not None:
            area.attach_photo(await self._store_photo(area, photo))

        await self.child_sync.attach_area(farm.id, area)
        logger.info(
            f"Created area '{area.name}'",
            extra={"farm_id": str(farm.id), "area_id": str(area.id)},
        )
        return area

    async def add_area_note(self, area_id: object, content: str) -> Area:
        aid = validate_entity_id(area_id, "area_id")
        text = validate_note_content(content)
        area, note = await self.child_sync.mutate_area(aid, lambda a: a.add_note(text))
        logger.info(
            "Added area note",
            extra={"area_id": str(aid), "note_id": str(note.id)},
        )
        return area

    async def remove_area_note(self, area_id: object, note_id: object) -> Area:
        aid = validate_entity_id(area_id, "area_id")
        nid = validate_entity_id(note_id, "note_id")
        area, _ = await self.child_sync.mutate_area(aid, lambda a: a.remove_note(nid))
        logger.info(
            "Removed area note",
            extra={"area_id": str(aid), "note_id": str(nid)},
        )
        return area

    async def list_farm_areas(self, farm_id: object) -> list[Area]:
        farm = await validate_farm(self.farms, farm_id)
        return farm.areas

    async def get_farm_area(self, farm_id: object, area_id: object) -> Area:
        farm = await validate_farm(self.farms, farm_id)
        area = await validate_area(self.areas, area_id)
        if area.farm_id != farm.id:
            raise EntityNotFoundError("area", area.id)
        return area

    async def get_area_photo(self, farm_id: object, area_id: object) -> tuple[str, AreaPhoto]:
        """Return (file path, metadata) of an area's photo. NOT_FOUND if it has none."""
        area = await self.get_farm_area(farm_id, area_id)
        photo = area.get_photo()
        return self.image_store.path_for(photo.filename), photo

    # --- Photo helpers --------------------------------------------------------

    def _validate_photo_upload(self, photo: PhotoUpload) -> None:
        if not photo.filename:
            raise FieldValidationError.required("photo")
        if not photo.content or len(photo.content) > self.max_photo_bytes:
            raise FieldValidationError.invalid_option("photo")
        if not photo.content_type.startswith("image/"):
            raise FieldValidationError.invalid_option("photo")

    async def _store_photo(self, area: Area, photo: PhotoUpload) -> AreaPhoto:
        """Write the upload as `<area id><ext>` and read its pixel size.

        The client filename only contributes the extension. A file Pillow
        cannot read is removed again before the error propagates.
        """
        extension = os.path.splitext(os.path.basename(photo.filename))[1].lower()
        path = await self.image_store.save(f"{area.id}{extension}", photo.content)
        try:
            width, height = await self.image_store.dimensions(path)
        except PhotoProcessingError:
            await self.image_store.delete(path)
            raise
        return AreaPhoto(
            filename=os.path.basename(path),
            mime_type=photo.content_type,
            byte_size=len(photo.content),
            width=width,
            height=height,
        )
