"""Lookup Tables - recognized codes for farm types, plant/chemical/container types,
currencies, regions, area locations and measurement units.

Invariants:
    - Tables are immutable after import
    - get() never raises: unknown or empty codes return None
    - Codes match case-insensitively; canonical codes keep the case they were declared with
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

from farm_assets.core.domain_types import AreaType, MaterialCategory


@dataclass(frozen=True)
class LookupEntry:
    """One recognized code with its display name."""
    code: str
    name: str


class LookupTable:
    """Read-only, ordered code table."""

    def __init__(self, entries: Iterable[tuple[str, str]]):
        self._entries: dict[str, LookupEntry] = {}
        for code, name in entries:
            self._entries[code.lower()] = LookupEntry(code=code, name=name)

    def get(self, code: str | None) -> LookupEntry | None:
        if not code:
            return None
        return self._entries.get(code.strip().lower())

    def list_all(self) -> list[LookupEntry]:
        return list(self._entries.values())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get(code) is not None

    def __iter__(self) -> Iterator[LookupEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


FARM_TYPES = LookupTable([
    ("conventional", "Conventional"),
    ("organic", "Organic"),
    ("hydroponic", "Hydroponic"),
    ("aquaponic", "Aquaponic"),
    ("mushroom", "Mushroom"),
    ("indoor", "Indoor"),
    ("livestock", "Livestock"),
    ("fisheries", "Fisheries"),
    ("permaculture", "Permaculture"),
])

PLANT_TYPES = LookupTable([
    ("vegetable", "Vegetable"),
    ("fruit", "Fruit"),
    ("herb", "Herb"),
    ("flower", "Flower"),
    ("tree", "Tree"),
])

CHEMICAL_TYPES = LookupTable([
    ("disinfectant", "Disinfectant and Sanitizer"),
    ("fertilizer", "Fertilizer"),
    ("hormone", "Hormone and Growth Agent"),
    ("manure", "Manure"),
    ("pesticide", "Pesticide"),
])

CONTAINER_TYPES = LookupTable([
    ("pot", "Pot"),
    ("tray", "Tray"),
])

CURRENCIES = LookupTable([
    ("USD", "US Dollar"),
    ("EUR", "Euro"),
    ("GBP", "Pound Sterling"),
    ("IDR", "Indonesian Rupiah"),
    ("JPY", "Japanese Yen"),
    ("AUD", "Australian Dollar"),
    ("SGD", "Singapore Dollar"),
    ("MYR", "Malaysian Ringgit"),
])

COUNTRIES = LookupTable([
    ("ID", "Indonesia"),
    ("US", "United States"),
    ("NL", "Netherlands"),
    ("AU", "Australia"),
])

# Cities keyed by canonical country code
CITIES: dict[str, LookupTable] = {
    "ID": LookupTable([
        ("JK", "Jakarta"), ("BD", "Bandung"), ("YO", "Yogyakarta"), ("SB", "Surabaya"),
    ]),
    "US": LookupTable([
        ("NYC", "New York"), ("SFO", "San Francisco"), ("SAC", "Sacramento"),
    ]),
    "NL": LookupTable([
        ("AMS", "Amsterdam"), ("RTM", "Rotterdam"), ("WAG", "Wageningen"),
    ]),
    "AU": LookupTable([
        ("SYD", "Sydney"), ("MEL", "Melbourne"), ("PER", "Perth"),
    ]),
}

AREA_LOCATIONS = LookupTable([
    ("indoor", "Field (Indoor)"),
    ("outdoor", "Field (Outdoor)"),
])

AREA_SIZE_UNITS: dict[AreaType, LookupTable] = {
    AreaType.SEEDING: LookupTable([("cm2", "Square Centimetre"), ("tray", "Tray")]),
    AreaType.GROWING: LookupTable([("m2", "Square Metre"), ("ha", "Hectare")]),
}

MATERIAL_QUANTITY_UNITS: dict[MaterialCategory, LookupTable] = {
    MaterialCategory.SEED: LookupTable([
        ("seeds", "Seeds"), ("packets", "Packets"), ("gram", "Gram"), ("kilogram", "Kilogram"),
    ]),
    MaterialCategory.AGROCHEMICAL: LookupTable([
        ("packets", "Packets"), ("bottles", "Bottles"), ("bags", "Bags"),
    ]),
    MaterialCategory.GROWING_MEDIUM: LookupTable([
        ("bags", "Bags"), ("cubic_metre", "Cubic Metre"),
    ]),
    MaterialCategory.LABEL_AND_CROP_SUPPORT: LookupTable([("pieces", "Pieces")]),
    MaterialCategory.SEEDING_CONTAINER: LookupTable([("pieces", "Pieces")]),
    MaterialCategory.POST_HARVEST_SUPPLY: LookupTable([("pieces", "Pieces")]),
    MaterialCategory.OTHER: LookupTable([
        ("pieces", "Pieces"), ("packets", "Packets"), ("bags", "Bags"), ("bottles", "Bottles"),
    ]),
}


def get_city(country_code: str | None, city_code: str | None) -> LookupEntry | None:
    """Resolve a city within a country. None if either code is unknown."""
    country = COUNTRIES.get(country_code)
    if country is None:
        return None
    return CITIES.get(country.code, LookupTable([])).get(city_code)
