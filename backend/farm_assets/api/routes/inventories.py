"""Inventory Routes - plant types and inventory materials.

Invariants:
    - Mounted under /api/v1/farms/inventories and registered before the farm
      router, so /inventories/... never matches a /{farm_id}/... route
    - Static paths (plant_types, available_seed) are declared before /{material_id}
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, status

from farm_assets.api.dependencies import MaterialServiceDep
from farm_assets.schemas.assets import (
    AvailableSeedMaterialResponse, DataResponse, LookupEntryResponse,
    MaterialResponse, to_available_seed_response, to_lookup_response,
    to_material_response,
)
from farm_assets.services.material_service import MaterialForm

router = APIRouter(prefix="/api/v1/farms/inventories", tags=["inventories"])


def material_form(
    name: str = Form(""),
    price_per_unit: str = Form(""),
    currency_code: str = Form(""),
    quantity: str = Form(""),
    quantity_unit: str = Form(""),
    plant_type: str = Form(""),
    chemical_type: str = Form(""),
    container_type: str = Form(""),
    expiration_date: str = Form(""),
    notes: str = Form(""),
    produced_by: str = Form(""),
    is_expense: str = Form(""),
) -> MaterialForm:
    """Collect the material form fields shared by create and update."""
    return MaterialForm(
        name=name,
        price_per_unit=price_per_unit,
        currency_code=currency_code,
        quantity=quantity,
        quantity_unit=quantity_unit,
        plant_type=plant_type,
        chemical_type=chemical_type,
        container_type=container_type,
        expiration_date=expiration_date,
        notes=notes,
        produced_by=produced_by,
        is_expense=is_expense,
    )


MaterialFormDep = Annotated[MaterialForm, Depends(material_form)]


@router.get("/plant_types", response_model=DataResponse[list[LookupEntryResponse]])
async def list_plant_types(service: MaterialServiceDep):
    return {"data": [to_lookup_response(e) for e in service.plant_types()]}


@router.get("/materials", response_model=DataResponse[list[MaterialResponse]])
async def list_materials(service: MaterialServiceDep):
    materials = await service.list_materials()
    return {"data": [to_material_response(m) for m in materials]}


@router.get(
    "/materials/available_seed",
    response_model=DataResponse[list[AvailableSeedMaterialResponse]],
)
async def list_available_seed(service: MaterialServiceDep):
    seeds = await service.available_seed_materials()
    return {"data": [to_available_seed_response(m) for m in seeds]}


@router.get("/materials/{material_id}", response_model=DataResponse[MaterialResponse])
async def get_material(material_id: str, service: MaterialServiceDep):
    return {"data": to_material_response(await service.get_material(material_id))}


@router.post(
    "/materials/{material_type}", response_model=DataResponse[MaterialResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_material(
    material_type: str, service: MaterialServiceDep, form: MaterialFormDep,
):
    material = await service.create_material(material_type, form)
    return {"data": to_material_response(material)}


@router.put("/materials/{material_id}", response_model=DataResponse[MaterialResponse])
async def update_material(
    material_id: str,
    service: MaterialServiceDep,
    form: MaterialFormDep,
    type: str = Form(""),
):
    """Apply the non-empty fields; `type` switches the material category."""
    material = await service.update_material(material_id, form, category=type)
    return {"data": to_material_response(material)}
