"""Field Validators - verifies raw-input parsing and the error kind/field raised.

Tests:
    - Empty input -> REQUIRED, malformed -> PARSE_FAILED, unknown code -> INVALID_OPTION
    - Geolocation range checks; region city must belong to the country
    - Area size unit depends on the area type
    - Quantity unit depends on the material category
    - Expiration date and is_expense parsing
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from farm_assets.core.domain_types import (
    AreaType, MaterialCategory, ValidationErrorKind, WaterSourceType,
)
from farm_assets.core.errors import FieldValidationError
from farm_assets.core.validators import (
    parse_number, validate_area_location, validate_area_size, validate_area_type,
    validate_capacity, validate_entity_id, validate_expiration_date,
    validate_farm_type, validate_geolocation, validate_is_expense, validate_name,
    validate_note_content, validate_optional_text, validate_price,
    validate_quantity, validate_region, validate_water_source_type,
)


def _fails(fn, *args) -> FieldValidationError:
    with pytest.raises(FieldValidationError) as exc_info:
        fn(*args)
    return exc_info.value


# --- Generic ------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["", "   ", None])
def test_name_empty_is_required(raw):
    err = _fails(validate_name, raw)
    assert (err.kind, err.field) == (ValidationErrorKind.REQUIRED, "name")


def test_name_is_stripped():
    assert validate_name("  F1 ") == "F1"


def test_parse_number_rejects_text_and_infinity():
    assert _fails(parse_number, "abc", "latitude").kind == ValidationErrorKind.PARSE_FAILED
    assert _fails(parse_number, "inf", "latitude").kind == ValidationErrorKind.PARSE_FAILED
    assert parse_number("-6.2", "latitude") == -6.2


def test_entity_id_parses_uuid_text():
    uid = uuid4()
    assert validate_entity_id(str(uid), "farm_id") == uid
    assert validate_entity_id(uid, "farm_id") is uid
    assert _fails(validate_entity_id, "not-a-uuid", "farm_id").kind == ValidationErrorKind.PARSE_FAILED
    assert _fails(validate_entity_id, "", "farm_id").kind == ValidationErrorKind.REQUIRED


def test_optional_text_empty_is_none():
    assert validate_optional_text("  ") is None
    assert validate_optional_text(" ok ") == "ok"


# --- Farm ---------------------------------------------------------------------

def test_farm_type_known_code_resolves_case_insensitively():
    assert validate_farm_type("Organic").code == "organic"


def test_farm_type_unknown_is_invalid_option():
    err = _fails(validate_farm_type, "spaceship")
    assert (err.kind, err.field) == (ValidationErrorKind.INVALID_OPTION, "farm_type")


def test_geolocation_in_range():
    location = validate_geolocation("-6.2", "106.8")
    assert (location.latitude, location.longitude) == (-6.2, 106.8)


def test_geolocation_out_of_range():
    assert _fails(validate_geolocation, "91", "0").field == "latitude"
    assert _fails(validate_geolocation, "0", "-181").field == "longitude"


def test_geolocation_empty_is_required():
    err = _fails(validate_geolocation, "", "10")
    assert (err.kind, err.field) == (ValidationErrorKind.REQUIRED, "latitude")


def test_region_resolves_country_and_city():
    country, city = validate_region("id", "jk")
    assert (country.code, city.code) == ("ID", "JK")


def test_region_city_of_other_country_is_invalid():
    err = _fails(validate_region, "ID", "NYC")
    assert (err.kind, err.field) == (ValidationErrorKind.INVALID_OPTION, "city_code")


def test_region_unknown_country_is_invalid():
    assert _fails(validate_region, "XX", "JK").field == "country_code"


# --- Reservoir ----------------------------------------------------------------

def test_water_source_type_parses():
    assert validate_water_source_type("Bucket") == WaterSourceType.BUCKET
    assert _fails(validate_water_source_type, "lake").field == "type"


def test_water_source_type_member_passes_through():
    assert validate_water_source_type(WaterSourceType.TAP) is WaterSourceType.TAP


def test_capacity_required_for_bucket_only():
    assert validate_capacity(WaterSourceType.BUCKET, "50") == 50.0
    assert validate_capacity(WaterSourceType.TAP, "") is None
    assert _fails(validate_capacity, WaterSourceType.BUCKET, "").kind == ValidationErrorKind.REQUIRED
    assert _fails(validate_capacity, WaterSourceType.BUCKET, "-1").kind == ValidationErrorKind.INVALID_OPTION


# --- Area ---------------------------------------------------------------------

def test_area_type_parses():
    assert validate_area_type("seeding") == AreaType.SEEDING
    assert _fails(validate_area_type, "orbit").kind == ValidationErrorKind.INVALID_OPTION


@pytest.mark.parametrize("member", list(AreaType))
def test_area_type_member_passes_through(member):
    assert validate_area_type(member) is member


def test_seeding_area_rejects_growing_unit():
    err = _fails(validate_area_size, "10", "m2", AreaType.SEEDING)
    assert (err.kind, err.field) == (ValidationErrorKind.INVALID_OPTION, "size_unit")


def test_growing_area_accepts_hectare():
    size = validate_area_size("1.5", "HA", AreaType.GROWING)
    assert (size.value, size.unit) == (1.5, "ha")


def test_area_size_must_be_positive():
    err = _fails(validate_area_size, "0", "m2", AreaType.GROWING)
    assert err.field == "size"


def test_area_location():
    assert validate_area_location("indoor").code == "indoor"
    assert _fails(validate_area_location, "space").field == "location"


def test_note_content_required():
    err = _fails(validate_note_content, " ")
    assert (err.kind, err.field) == (ValidationErrorKind.REQUIRED, "content")


# --- Material -----------------------------------------------------------------

def test_price_parses_decimal_and_currency():
    price = validate_price("12.50", "usd")
    assert price.amount == Decimal("12.50")
    assert price.currency_code == "USD"


def test_price_errors():
    assert _fails(validate_price, "ten", "USD").kind == ValidationErrorKind.PARSE_FAILED
    assert _fails(validate_price, "-1", "USD").field == "price_per_unit"
    assert _fails(validate_price, "1", "XYZ").field == "currency_code"


def test_quantity_unit_depends_on_category():
    assert validate_quantity("10", "seeds", MaterialCategory.SEED).unit == "seeds"
    err = _fails(validate_quantity, "10", "seeds", MaterialCategory.AGROCHEMICAL)
    assert (err.kind, err.field) == (ValidationErrorKind.INVALID_OPTION, "quantity_unit")


def test_expiration_date():
    assert validate_expiration_date("2027-03-01") == date(2027, 3, 1)
    assert validate_expiration_date("") is None
    assert _fails(validate_expiration_date, "01/03/2027").kind == ValidationErrorKind.PARSE_FAILED


@pytest.mark.parametrize("raw,expected", [
    ("true", True), ("1", True), ("Yes", True),
    ("false", False), ("0", False), ("off", False),
    ("", None),
])
def test_is_expense(raw, expected):
    assert validate_is_expense(raw) is expected


def test_is_expense_garbage_fails():
    assert _fails(validate_is_expense, "maybe").field == "is_expense"
