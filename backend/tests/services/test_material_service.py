"""Material Service - verifies material creation, update and seed availability.

Tests:
    - create_material builds the right variant and records optional fields
    - A bad secondary code saves nothing
    - A secondary code on a field of another category is INVALID_OPTION
    - update_material records only real changes and saves only if any
    - Category switch with a new unit; category switch with an incompatible unit
    - available_seed_materials filters on category and stock
"""

from datetime import date

import pytest

from farm_assets.core.domain_types import MaterialCategory, ValidationErrorKind
from farm_assets.core.errors import EntityNotFoundError, FieldValidationError
from farm_assets.core.material_events import (
    MaterialCreated, MaterialExpirationDateChanged, MaterialIsExpenseChanged,
    MaterialNameChanged, MaterialNotesChanged, MaterialProducedByChanged,
    MaterialQuantityChanged, MaterialTypeChanged,
)
from farm_assets.services.material_service import MaterialForm


def _seed_form(**overrides) -> MaterialForm:
    fields = dict(
        name="Tomato seed", price_per_unit="2.5", currency_code="USD",
        quantity="100", quantity_unit="seeds", plant_type="vegetable",
    )
    fields.update(overrides)
    return MaterialForm(**fields)


async def test_create_seed_material(material_service, material_repo):
    material = await material_service.create_material("seed", _seed_form())
    stored = await material_repo.find_by_id(material.id)
    assert stored.category == MaterialCategory.SEED
    assert stored.material_type.plant_type == "vegetable"
    assert [type(t) for t in stored.transitions] == [MaterialCreated]


async def test_create_records_optional_fields(material_service):
    form = _seed_form(
        expiration_date="2027-06-30", notes="store cool",
        produced_by="Acme", is_expense="yes",
    )
    material = await material_service.create_material("seed", form)
    assert [type(t) for t in material.transitions] == [
        MaterialCreated, MaterialExpirationDateChanged, MaterialNotesChanged,
        MaterialProducedByChanged, MaterialIsExpenseChanged,
    ]
    assert material.expiration_date == date(2027, 6, 30)
    assert material.is_expense is True


async def test_create_with_unknown_plant_type_saves_nothing(material_service, material_repo):
    with pytest.raises(FieldValidationError) as exc_info:
        await material_service.create_material("seed", _seed_form(plant_type="rock"))
    assert exc_info.value.field == "plant_type"
    assert await material_repo.find_all() == []


async def test_create_with_bad_optional_field_saves_nothing(material_service, material_repo):
    with pytest.raises(FieldValidationError):
        await material_service.create_material("seed", _seed_form(expiration_date="soon"))
    assert await material_repo.find_all() == []


async def test_create_with_unknown_category(material_service):
    with pytest.raises(FieldValidationError) as exc_info:
        await material_service.create_material("gadget", _seed_form())
    assert exc_info.value.field == "type"


async def test_update_records_only_changed_fields(material_service, material_repo):
    material = await material_service.create_material("seed", _seed_form())

    updated = await material_service.update_material(
        str(material.id),
        MaterialForm(name="Tomato seed", quantity="80", notes="half used"),
    )

    assert [type(t) for t in updated.transitions[1:]] == [
        MaterialQuantityChanged, MaterialNotesChanged,
    ]
    stored = await material_repo.find_by_id(material.id)
    assert stored.quantity.value == 80.0
    assert stored.notes == "half used"


async def test_update_without_changes_is_noop(material_service):
    material = await material_service.create_material("seed", _seed_form())
    updated = await material_service.update_material(material.id, MaterialForm(name="Tomato seed"))
    assert len(updated.transitions) == 1


async def test_update_name(material_service):
    material = await material_service.create_material("seed", _seed_form())
    updated = await material_service.update_material(material.id, MaterialForm(name="Roma"))
    assert isinstance(updated.transitions[-1], MaterialNameChanged)
    assert updated.name == "Roma"


async def test_switch_category_with_new_unit(material_service):
    material = await material_service.create_material("seed", _seed_form())
    updated = await material_service.update_material(
        material.id,
        MaterialForm(chemical_type="fertilizer", quantity_unit="bags"),
        category="agrochemical",
    )
    assert [type(t) for t in updated.transitions[1:]] == [
        MaterialTypeChanged, MaterialQuantityChanged,
    ]
    assert updated.category == MaterialCategory.AGROCHEMICAL
    assert updated.quantity.unit == "bags"


async def test_switch_category_with_incompatible_unit_fails(material_service, material_repo):
    material = await material_service.create_material("seed", _seed_form())
    with pytest.raises(FieldValidationError) as exc_info:
        await material_service.update_material(
            material.id, MaterialForm(chemical_type="fertilizer"), category="agrochemical",
        )
    assert exc_info.value.field == "quantity_unit"
    assert len((await material_repo.find_by_id(material.id)).transitions) == 1


async def test_secondary_code_of_other_category_is_rejected_on_create(
    material_service, material_repo,
):
    form = MaterialForm(
        name="Trays", price_per_unit="1", currency_code="USD", quantity="30",
        quantity_unit="pieces", container_type="tray", plant_type="vegetable",
    )
    with pytest.raises(FieldValidationError) as exc_info:
        await material_service.create_material("seeding_container", form)
    assert (exc_info.value.kind, exc_info.value.field) == (
        ValidationErrorKind.INVALID_OPTION, "plant_type",
    )
    assert await material_repo.find_all() == []


@pytest.mark.parametrize("form,field", [
    (MaterialForm(plant_type="bogus_code"), "plant_type"),
    (MaterialForm(plant_type="vegetable"), "plant_type"),
    (MaterialForm(container_type="tray", quantity="5"), "container_type"),
])
async def test_update_with_foreign_secondary_code_records_nothing(
    material_service, material_repo, form, field,
):
    material = await material_service.create_material(
        "agrochemical", _seed_form(plant_type="", chemical_type="fertilizer", quantity_unit="bags"),
    )
    with pytest.raises(FieldValidationError) as exc_info:
        await material_service.update_material(material.id, form)
    assert (exc_info.value.kind, exc_info.value.field) == (
        ValidationErrorKind.INVALID_OPTION, field,
    )
    assert len((await material_repo.find_by_id(material.id)).transitions) == 1


async def test_update_unknown_material(material_service):
    with pytest.raises(EntityNotFoundError):
        await material_service.update_material(
            "00000000-0000-0000-0000-000000000000", MaterialForm(name="x"),
        )


async def test_available_seed_materials(material_service):
    stocked = await material_service.create_material("seed", _seed_form())
    await material_service.create_material("seed", _seed_form(name="Empty", quantity="0"))
    await material_service.create_material(
        "growing_medium",
        MaterialForm(
            name="Peat", price_per_unit="4", currency_code="EUR",
            quantity="10", quantity_unit="bags",
        ),
    )

    seeds = await material_service.available_seed_materials()
    assert [m.id for m in seeds] == [stocked.id]


async def test_plant_types_lists_lookup(material_service):
    codes = [e.code for e in material_service.plant_types()]
    assert "vegetable" in codes
