"""Field Validators - pure functions turning raw form values into typed domain values.

Invariants:
    - Every function is pure: no IO, no async, no state
    - Return the typed value or raise FieldValidationError(kind, field)
    - Empty or whitespace-only input is REQUIRED, malformed text is PARSE_FAILED,
      a well-formed value outside the allowed set is INVALID_OPTION

Design Decisions:
    - Raise instead of returning error dicts: callers run a block of validators
      and the first failure aborts the use case before any aggregate is touched
    - Existence checks (farm, reservoir) need the repository and live in
      services/request_validation.py
"""

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID

from farm_assets.core.domain_types import AreaType, MaterialCategory, WaterSourceType
from farm_assets.core.errors import FieldValidationError
from farm_assets.core.lookup_tables import (
    AREA_LOCATIONS, AREA_SIZE_UNITS, COUNTRIES, CURRENCIES, FARM_TYPES,
    MATERIAL_QUANTITY_UNITS, LookupEntry, get_city,
)
from farm_assets.core.value_objects import (
    AreaLocation, AreaSize, GeoLocation, MaterialQuantity, PricePerUnit,
)

EXPIRATION_DATE_FORMAT = "%Y-%m-%d"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def _clean(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


# --- Generic parsers ----------------------------------------------------------

def validate_required_text(raw: object, field: str) -> str:
    value = _clean(raw)
    if not value:
        raise FieldValidationError.required(field)
    return value


def parse_number(raw: object, field: str) -> float:
    """Parse a finite float. Empty -> REQUIRED, malformed -> PARSE_FAILED."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    else:
        text = validate_required_text(raw, field)
        try:
            value = float(text)
        except ValueError:
            raise FieldValidationError.parse_failed(field)
    if not math.isfinite(value):
        raise FieldValidationError.parse_failed(field)
    return value


def parse_non_negative_number(raw: object, field: str) -> float:
    value = parse_number(raw, field)
    if value < 0:
        raise FieldValidationError.invalid_option(field)
    return value


def validate_entity_id(raw: object, field: str) -> UUID:
    if isinstance(raw, UUID):
        return raw
    text = validate_required_text(raw, field)
    try:
        return UUID(text)
    except ValueError:
        raise FieldValidationError.parse_failed(field)


def validate_optional_text(raw: object) -> str | None:
    value = _clean(raw)
    return value or None


# --- Farm ---------------------------------------------------------------------

def validate_name(raw: object, field: str = "name") -> str:
    return validate_required_text(raw, field)


def validate_farm_type(raw: object) -> LookupEntry:
    code = validate_required_text(raw, "farm_type")
    entry = FARM_TYPES.get(code)
    if entry is None:
        raise FieldValidationError.invalid_option("farm_type")
    return entry


def validate_geolocation(raw_latitude: object, raw_longitude: object) -> GeoLocation:
    latitude = parse_number(raw_latitude, "latitude")
    longitude = parse_number(raw_longitude, "longitude")
    return GeoLocation(latitude=latitude, longitude=longitude)


def validate_region(
    raw_country: object, raw_city: object,
) -> tuple[LookupEntry, LookupEntry]:
    """Resolve (country, city). The city must belong to the given country."""
    country_code = validate_required_text(raw_country, "country_code")
    city_code = validate_required_text(raw_city, "city_code")
    country = COUNTRIES.get(country_code)
    if country is None:
        raise FieldValidationError.invalid_option("country_code")
    city = get_city(country.code, city_code)
    if city is None:
        raise FieldValidationError.invalid_option("city_code")
    return country, city


# --- Reservoir ----------------------------------------------------------------

def validate_reservoir_name(raw: object) -> str:
    return validate_name(raw)


def validate_water_source_type(raw: object) -> WaterSourceType:
    if isinstance(raw, WaterSourceType):
        return raw
    code = validate_required_text(raw, "type").lower()
    try:
        return WaterSourceType(code)
    except ValueError:
        raise FieldValidationError.invalid_option("type")


def validate_capacity(water_source_type: WaterSourceType, raw: object) -> float | None:
    """Capacity is required and >= 0 for buckets only; taps ignore it."""
    if water_source_type != WaterSourceType.BUCKET:
        return None
    return parse_non_negative_number(raw, "capacity")


# --- Area ---------------------------------------------------------------------

def validate_area_type(raw: object) -> AreaType:
    if isinstance(raw, AreaType):
        return raw
    code = validate_required_text(raw, "type").lower()
    try:
        return AreaType(code)
    except ValueError:
        raise FieldValidationError.invalid_option("type")


def validate_area_size(raw_value: object, raw_unit: object, area_type: AreaType) -> AreaSize:
    """Numeric size plus a unit from the table of the given area type."""
    value = parse_number(raw_value, "size")
    unit_code = validate_required_text(raw_unit, "size_unit")
    unit = AREA_SIZE_UNITS[area_type].get(unit_code)
    if unit is None:
        raise FieldValidationError.invalid_option("size_unit")
    return AreaSize(value=value, unit=unit.code)


def validate_area_location(raw: object) -> AreaLocation:
    code = validate_required_text(raw, "location")
    entry = AREA_LOCATIONS.get(code)
    if entry is None:
        raise FieldValidationError.invalid_option("location")
    return AreaLocation(code=entry.code, name=entry.name)


# --- Notes --------------------------------------------------------------------

def validate_note_content(raw: object) -> str:
    return validate_required_text(raw, "content")


# --- Material -----------------------------------------------------------------

def validate_price(raw_amount: object, raw_currency: object) -> PricePerUnit:
    text = validate_required_text(raw_amount, "price_per_unit")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise FieldValidationError.parse_failed("price_per_unit")
    if not amount.is_finite():
        raise FieldValidationError.parse_failed("price_per_unit")
    currency_code = validate_required_text(raw_currency, "currency_code")
    currency = CURRENCIES.get(currency_code)
    if currency is None:
        raise FieldValidationError.invalid_option("currency_code")
    return PricePerUnit(amount=amount, currency_code=currency.code)


def validate_quantity(
    raw_value: object, raw_unit: object, category: MaterialCategory,
) -> MaterialQuantity:
    value = parse_non_negative_number(raw_value, "quantity")
    unit_code = validate_required_text(raw_unit, "quantity_unit")
    unit = MATERIAL_QUANTITY_UNITS[category].get(unit_code)
    if unit is None:
        raise FieldValidationError.invalid_option("quantity_unit")
    return MaterialQuantity(value=value, unit=unit.code)


def validate_expiration_date(raw: object) -> date | None:
    """Optional YYYY-MM-DD date. Empty -> None."""
    if isinstance(raw, date):
        return raw
    text = _clean(raw)
    if not text:
        return None
    try:
        return datetime.strptime(text, EXPIRATION_DATE_FORMAT).date()
    except ValueError:
        raise FieldValidationError.parse_failed("expiration_date")


def validate_is_expense(raw: object) -> bool | None:
    if isinstance(raw, bool):
        return raw
    text = _clean(raw).lower()
    if not text:
        return None
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise FieldValidationError.parse_failed("is_expense")
