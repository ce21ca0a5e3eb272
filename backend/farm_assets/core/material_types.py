"""Material Types - closed tagged union of inventory material categories.

Invariants:
    - Exactly seven variants, one per MaterialCategory
    - Seed, Agrochemical and SeedingContainer validate their secondary code
      while being constructed: an unknown code raises INVALID_OPTION naming the
      secondary field (plant_type, chemical_type, container_type) and no
      variant instance exists
    - The other four variants carry no data

Design Decisions:
    - Frozen dataclasses joined by Union, not an open base class: the category
      set is closed and create_material_type() is the single dispatch point
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from farm_assets.core.domain_types import MaterialCategory
from farm_assets.core.errors import FieldValidationError
from farm_assets.core.lookup_tables import (
    CHEMICAL_TYPES, CONTAINER_TYPES, PLANT_TYPES, LookupTable,
)


def _resolve_code(table: LookupTable, code: str | None, field: str) -> str:
    entry = table.get(code)
    if entry is None:
        raise FieldValidationError.invalid_option(field)
    return entry.code


@dataclass(frozen=True)
class SeedMaterial:
    category: ClassVar[MaterialCategory] = MaterialCategory.SEED
    plant_type: str

    def __post_init__(self):
        object.__setattr__(
            self, "plant_type", _resolve_code(PLANT_TYPES, self.plant_type, "plant_type"),
        )


@dataclass(frozen=True)
class AgrochemicalMaterial:
    category: ClassVar[MaterialCategory] = MaterialCategory.AGROCHEMICAL
    chemical_type: str

    def __post_init__(self):
        object.__setattr__(
            self, "chemical_type",
            _resolve_code(CHEMICAL_TYPES, self.chemical_type, "chemical_type"),
        )


@dataclass(frozen=True)
class GrowingMediumMaterial:
    category: ClassVar[MaterialCategory] = MaterialCategory.GROWING_MEDIUM


@dataclass(frozen=True)
class LabelAndCropSupportMaterial:
    category: ClassVar[MaterialCategory] = MaterialCategory.LABEL_AND_CROP_SUPPORT


@dataclass(frozen=True)
class SeedingContainerMaterial:
    category: ClassVar[MaterialCategory] = MaterialCategory.SEEDING_CONTAINER
    container_type: str

    def __post_init__(self):
        object.__setattr__(
            self, "container_type",
            _resolve_code(CONTAINER_TYPES, self.container_type, "container_type"),
        )


@dataclass(frozen=True)
class PostHarvestSupplyMaterial:
    category: ClassVar[MaterialCategory] = MaterialCategory.POST_HARVEST_SUPPLY


@dataclass(frozen=True)
class OtherMaterial:
    category: ClassVar[MaterialCategory] = MaterialCategory.OTHER


MaterialType = Union[
    SeedMaterial,
    AgrochemicalMaterial,
    GrowingMediumMaterial,
    LabelAndCropSupportMaterial,
    SeedingContainerMaterial,
    PostHarvestSupplyMaterial,
    OtherMaterial,
]

SECONDARY_FIELDS: dict[MaterialCategory, str] = {
    MaterialCategory.SEED: "plant_type",
    MaterialCategory.AGROCHEMICAL: "chemical_type",
    MaterialCategory.SEEDING_CONTAINER: "container_type",
}


def secondary_field(category: MaterialCategory) -> str | None:
    """Name of the form field carrying the secondary code of `category`, if it has one."""
    return SECONDARY_FIELDS.get(category)


def parse_material_category(raw: object) -> MaterialCategory:
    if isinstance(raw, MaterialCategory):
        return raw
    code = str(raw or "").strip().lower()
    if not code:
        raise FieldValidationError.required("type")
    try:
        return MaterialCategory(code)
    except ValueError:
        raise FieldValidationError.invalid_option("type")


def create_material_type(
    category_code: MaterialCategory | str,
    plant_type: str | None = None,
    chemical_type: str | None = None,
    container_type: str | None = None,
) -> MaterialType:
    """Build the variant for a category code plus its secondary code, if any."""
    category = parse_material_category(category_code)
    if category == MaterialCategory.SEED:
        return SeedMaterial(plant_type=plant_type)
    if category == MaterialCategory.AGROCHEMICAL:
        return AgrochemicalMaterial(chemical_type=chemical_type)
    if category == MaterialCategory.SEEDING_CONTAINER:
        return SeedingContainerMaterial(container_type=container_type)
    if category == MaterialCategory.GROWING_MEDIUM:
        return GrowingMediumMaterial()
    if category == MaterialCategory.LABEL_AND_CROP_SUPPORT:
        return LabelAndCropSupportMaterial()
    if category == MaterialCategory.POST_HARVEST_SUPPLY:
        return PostHarvestSupplyMaterial()
    return OtherMaterial()


def secondary_code(material_type: MaterialType) -> str | None:
    """The plant/chemical/container code of a variant, None for data-less variants."""
    for attribute in ("plant_type", "chemical_type", "container_type"):
        value = getattr(material_type, attribute, None)
        if value is not None:
            return value
    return None
