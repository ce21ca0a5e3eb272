"""Material Service - inventory material use cases.

Invariants:
    - The material type variant, every optional field and every numeric field
      are validated before Material.create() or any change_* call
    - Optional fields are recorded only when their raw input is non-empty
    - A secondary code (plant_type, chemical_type, container_type) is accepted
      only on the field belonging to the resolved category
    - update_material records one transition per field whose value actually
      changes, and saves only if at least one was recorded
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from farm_assets.core.domain_types import MaterialCategory, MaterialId
from farm_assets.core.errors import FieldValidationError
from farm_assets.core.lookup_tables import PLANT_TYPES, LookupEntry
from farm_assets.core.material import Material
from farm_assets.core.material_types import (
    SECONDARY_FIELDS, SeedMaterial, create_material_type, parse_material_category,
    secondary_code, secondary_field,
)
from farm_assets.core.repository_protocols import MaterialRepository
from farm_assets.core.validators import (
    validate_entity_id, validate_expiration_date, validate_is_expense,
    validate_name, validate_optional_text, validate_price, validate_quantity,
)

logger = logging.getLogger(__name__)


@dataclass
class MaterialForm:
    """Raw material fields as submitted by a client. Empty string means 'not given'."""
    name: str = ""
    price_per_unit: str = ""
    currency_code: str = ""
    quantity: str = ""
    quantity_unit: str = ""
    plant_type: str = ""
    chemical_type: str = ""
    container_type: str = ""
    expiration_date: str = ""
    notes: str = ""
    produced_by: str = ""
    is_expense: str = ""


def _check_secondary_fields(category: MaterialCategory, form: MaterialForm) -> None:
    """Only the secondary field of `category` may be filled in. INVALID_OPTION otherwise."""
    expected = secondary_field(category)
    for field in SECONDARY_FIELDS.values():
        if getattr(form, field) and field != expected:
            raise FieldValidationError.invalid_option(field)


class MaterialService:
    """Use cases for inventory materials."""

    def __init__(self, materials: MaterialRepository):
        self.materials = materials

    def plant_types(self) -> list[LookupEntry]:
        return PLANT_TYPES.list_all()

    async def create_material(self, category: str, form: MaterialForm) -> Material:
        kind = parse_material_category(category)
        _check_secondary_fields(kind, form)
        material_type = create_material_type(
            kind, form.plant_type, form.chemical_type, form.container_type,
        )
        expiration_date = validate_expiration_date(form.expiration_date)
        notes = validate_optional_text(form.notes)
        produced_by = validate_optional_text(form.produced_by)
        is_expense = validate_is_expense(form.is_expense)

        material = Material.create(
            form.name, form.price_per_unit, form.currency_code,
            material_type, form.quantity, form.quantity_unit,
        )
        if expiration_date is not None:
            material.change_expiration_date(expiration_date)
        if notes is not None:
            material.change_notes(notes)
        if produced_by is not None:
            material.change_produced_by(produced_by)
        if is_expense is not None:
            material.change_is_expense(is_expense)

        await self.materials.save(material)
        logger.info(
            f"Created {material_type.category.value} material '{material.name}'",
            extra={"material_id": str(material.id)},
        )
        return material

    async def update_material(
        self, material_id: object, form: MaterialForm, category: str = "",
    ) -> Material:
        """Apply every non-empty field of `form` that differs from the stored value."""
        mid = MaterialId(validate_entity_id(material_id, "material_id"))
        material = await self.materials.find_by_id(mid)
        changes: list[Callable[[], None]] = []

        if form.name:
            name = validate_name(form.name)
            if name != material.name:
                changes.append(partial(material.change_name, name))

        if form.price_per_unit or form.currency_code:
            price = validate_price(
                form.price_per_unit or material.price_per_unit.amount,
                form.currency_code or material.price_per_unit.currency_code,
            )
            if price != material.price_per_unit:
                changes.append(partial(
                    material.change_price_per_unit, price.amount, price.currency_code,
                ))

        kind = parse_material_category(category) if category else material.category
        _check_secondary_fields(kind, form)
        material_type = material.material_type
        if category or form.plant_type or form.chemical_type or form.container_type:
            material_type = create_material_type(
                kind,
                form.plant_type or secondary_code(material.material_type),
                form.chemical_type or secondary_code(material.material_type),
                form.container_type or secondary_code(material.material_type),
            )

        quantity = material.quantity
        if form.quantity or form.quantity_unit:
            quantity = validate_quantity(
                form.quantity or material.quantity.value,
                form.quantity_unit or material.quantity.unit,
                material_type.category,
            )

        if material_type != material.material_type:
            changes.append(partial(material.change_material_type, material_type, quantity))
        elif quantity != material.quantity:
            changes.append(partial(material.change_quantity, quantity.value, quantity.unit))

        expiration_date = validate_expiration_date(form.expiration_date)
        if expiration_date is not None and expiration_date != material.expiration_date:
            changes.append(partial(material.change_expiration_date, expiration_date))

        notes = validate_optional_text(form.notes)
        if notes is not None and notes != material.notes:
            changes.append(partial(material.change_notes, notes))

        produced_by = validate_optional_text(form.produced_by)
        if produced_by is not None and produced_by != material.produced_by:
            changes.append(partial(material.change_produced_by, produced_by))

        is_expense = validate_is_expense(form.is_expense)
        if is_expense is not None and is_expense != material.is_expense:
            changes.append(partial(material.change_is_expense, is_expense))

        for apply_change in changes:
            apply_change()
        if changes:
            await self.materials.save(material)
            logger.info(
                f"Updated material '{material.name}' ({len(changes)} change(s))",
                extra={"material_id": str(material.id)},
            )
        return material

    async def list_materials(self) -> list[Material]:
        return await self.materials.find_all()

    async def get_material(self, material_id: object) -> Material:
        mid = MaterialId(validate_entity_id(material_id, "material_id"))
        return await self.materials.find_by_id(mid)

    async def available_seed_materials(self) -> list[Material]:
        """Seed materials with stock left, the candidates for planting a crop batch."""
        materials = await self.materials.find_all()
        return [
            m for m in materials
            if isinstance(m.material_type, SeedMaterial) and m.quantity.value > 0
        ]
