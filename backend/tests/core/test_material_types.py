"""Material Types - verifies the variant union and its secondary-code checks.

Tests:
    - One variant per category, dispatched by create_material_type()
    - Unknown secondary codes raise INVALID_OPTION naming the field
    - Unknown or empty category codes
"""

import pytest

from farm_assets.core.domain_types import MaterialCategory, ValidationErrorKind
from farm_assets.core.errors import FieldValidationError
from farm_assets.core.material_types import (
    AgrochemicalMaterial, GrowingMediumMaterial, OtherMaterial, SeedMaterial,
    SeedingContainerMaterial, create_material_type, parse_material_category,
    secondary_code,
)


def test_each_category_builds_its_variant():
    built = {
        category: create_material_type(
            category, plant_type="vegetable", chemical_type="fertilizer", container_type="tray",
        )
        for category in MaterialCategory
    }
    assert {v.category for v in built.values()} == set(MaterialCategory)
    assert all(v.category == c for c, v in built.items())


def test_seed_variant_keeps_plant_type():
    variant = create_material_type("seed", plant_type="Herb")
    assert variant == SeedMaterial(plant_type="herb")
    assert secondary_code(variant) == "herb"


def test_seed_with_unknown_plant_type_is_invalid_option():
    with pytest.raises(FieldValidationError) as exc_info:
        create_material_type("seed", plant_type="rock")
    assert (exc_info.value.kind, exc_info.value.field) == (
        ValidationErrorKind.INVALID_OPTION, "plant_type",
    )


def test_agrochemical_and_container_secondary_fields():
    with pytest.raises(FieldValidationError) as exc_info:
        AgrochemicalMaterial(chemical_type="")
    assert exc_info.value.field == "chemical_type"

    with pytest.raises(FieldValidationError) as exc_info:
        SeedingContainerMaterial(container_type="bucket")
    assert exc_info.value.field == "container_type"


def test_data_less_variants():
    assert create_material_type("growing_medium") == GrowingMediumMaterial()
    assert create_material_type("other") == OtherMaterial()
    assert secondary_code(OtherMaterial()) is None


def test_category_parse():
    assert parse_material_category(" SEED ") == MaterialCategory.SEED
    assert parse_material_category(MaterialCategory.OTHER) == MaterialCategory.OTHER


@pytest.mark.parametrize("raw,kind", [
    ("", ValidationErrorKind.REQUIRED),
    ("fish", ValidationErrorKind.INVALID_OPTION),
])
def test_category_parse_errors(raw, kind):
    with pytest.raises(FieldValidationError) as exc_info:
        parse_material_category(raw)
    assert exc_info.value.kind == kind
    assert exc_info.value.field == "type"
