"""Farm Routes - farms, their reservoirs and their areas.

Invariants:
    - Handlers only translate HTTP <-> service calls; validation and
      persistence happen in FarmService
    - Bodies are form fields; POST /{farm_id}/areas is multipart with an optional photo
    - /types is declared before /{farm_id} so it is never read as an id

Design Decisions:
    - Raw strings reach the service untouched (Form("") defaults) so missing
      fields surface as REQUIRED(field) from the core validators rather than
      as FastAPI's generic 422
"""

import logging

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi.responses import FileResponse

from farm_assets.api.dependencies import FarmServiceDep
from farm_assets.schemas.assets import (
    AreaResponse, DataResponse, FarmResponse, LookupEntryResponse,
    ReservoirResponse, SimpleFarmResponse, to_area_response, to_farm_response,
    to_lookup_response, to_reservoir_response, to_simple_farm_response,
)
from farm_assets.services.farm_service import PhotoUpload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/farms", tags=["farms"])


@router.get("/types", response_model=DataResponse[list[LookupEntryResponse]])
async def list_farm_types(service: FarmServiceDep):
    return {"data": [to_lookup_response(e) for e in service.farm_types()]}


# --- Farms --------------------------------------------------------------------

@router.post(
    "", response_model=DataResponse[FarmResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_farm(
    service: FarmServiceDep,
    name: str = Form(""),
    farm_type: str = Form(""),
    latitude: str = Form(""),
    longitude: str = Form(""),
    country_code: str = Form(""),
    city_code: str = Form(""),
):
    farm = await service.create_farm(
        name, farm_type, latitude, longitude, country_code, city_code,
    )
    return {"data": to_farm_response(farm)}


@router.get("", response_model=DataResponse[list[SimpleFarmResponse]])
async def list_farms(service: FarmServiceDep):
    farms = await service.list_farms()
    return {"data": [to_simple_farm_response(f) for f in farms]}


@router.get("/{farm_id}", response_model=DataResponse[FarmResponse])
async def get_farm(farm_id: str, service: FarmServiceDep):
    return {"data": to_farm_response(await service.get_farm(farm_id))}


# --- Reservoirs ---------------------------------------------------------------

@router.post(
    "/{farm_id}/reservoirs", response_model=DataResponse[ReservoirResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_reservoir(
    farm_id: str,
    service: FarmServiceDep,
    name: str = Form(""),
    type: str = Form(""),
    capacity: str = Form(""),
):
    reservoir = await service.create_reservoir(farm_id, name, type, capacity)
    return {"data": to_reservoir_response(reservoir)}


@router.post(
    "/reservoirs/{reservoir_id}/notes", response_model=DataResponse[ReservoirResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_reservoir_note(
    reservoir_id: str, service: FarmServiceDep, content: str = Form(""),
):
    reservoir = await service.add_reservoir_note(reservoir_id, content)
    return {"data": to_reservoir_response(reservoir)}


@router.delete(
    "/reservoirs/{reservoir_id}/notes/{note_id}",
    response_model=DataResponse[ReservoirResponse],
)
async def remove_reservoir_note(
    reservoir_id: str, note_id: str, service: FarmServiceDep,
):
    reservoir = await service.remove_reservoir_note(reservoir_id, note_id)
    return {"data": to_reservoir_response(reservoir)}


@router.get(
    "/{farm_id}/reservoirs", response_model=DataResponse[list[ReservoirResponse]],
)
async def list_farm_reservoirs(farm_id: str, service: FarmServiceDep):
    reservoirs = await service.list_farm_reservoirs(farm_id)
    return {"data": [to_reservoir_response(r) for r in reservoirs]}


@router.get(
    "/{farm_id}/reservoirs/{reservoir_id}", response_model=DataResponse[ReservoirResponse],
)
async def get_farm_reservoir(farm_id: str, reservoir_id: str, service: FarmServiceDep):
    reservoir = await service.get_farm_reservoir(farm_id, reservoir_id)
    return {"data": to_reservoir_response(reservoir)}


# --- Areas --------------------------------------------------------------------

@router.post(
    "/{farm_id}/areas", response_model=DataResponse[AreaResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_area(
    farm_id: str,
    service: FarmServiceDep,
    name: str = Form(""),
    type: str = Form(""),
    reservoir_id: str = Form(""),
    size: str = Form(""),
    size_unit: str = Form(""),
    location: str = Form(""),
    photo: UploadFile | None = File(None),
):
    upload = None
    if photo is not None:
        upload = PhotoUpload(
            filename=photo.filename or "",
            content_type=photo.content_type or "",
            content=await photo.read(),
        )
    area = await service.create_area(
        farm_id, name, type, reservoir_id, size, size_unit, location, upload,
    )
    return {"data": to_area_response(area)}


@router.post(
    "/areas/{area_id}/notes", response_model=DataResponse[AreaResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_area_note(area_id: str, service: FarmServiceDep, content: str = Form("")):
    area = await service.add_area_note(area_id, content)
    return {"data": to_area_response(area)}


@router.delete(
    "/areas/{area_id}/notes/{note_id}", response_model=DataResponse[AreaResponse],
)
async def remove_area_note(area_id: str, note_id: str, service: FarmServiceDep):
    area = await service.remove_area_note(area_id, note_id)
    return {"data": to_area_response(area)}


@router.get("/{farm_id}/areas", response_model=DataResponse[list[AreaResponse]])
async def list_farm_areas(farm_id: str, service: FarmServiceDep):
    areas = await service.list_farm_areas(farm_id)
    return {"data": [to_area_response(a) for a in areas]}


@router.get("/{farm_id}/areas/{area_id}", response_model=DataResponse[AreaResponse])
async def get_farm_area(farm_id: str, area_id: str, service: FarmServiceDep):
    return {"data": to_area_response(await service.get_farm_area(farm_id, area_id))}


@router.get("/{farm_id}/areas/{area_id}/photos")
async def get_area_photo(farm_id: str, area_id: str, service: FarmServiceDep):
    """Stream the stored photo file of an area."""
    path, photo = await service.get_area_photo(farm_id, area_id)
    return FileResponse(path, media_type=photo.mime_type, filename=photo.filename)
