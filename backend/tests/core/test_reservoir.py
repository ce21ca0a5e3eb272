"""Reservoir Aggregate - verifies water source attachment rules.

Tests:
    - create() references the farm and has no water source
    - Bucket capacity/volume bounds
    - A second water source (any variant) is rejected, first one kept
"""

import pytest

from farm_assets.core.domain_types import WaterSourceType
from farm_assets.core.errors import FieldValidationError, InvariantViolationError
from farm_assets.core.farm import Farm
from farm_assets.core.reservoir import Reservoir
from farm_assets.core.value_objects import Bucket


@pytest.fixture
def reservoir():
    return Reservoir.create(Farm.create("F1", "organic"), "R1")


def test_create_has_no_water_source(reservoir):
    assert reservoir.water_source is None
    assert reservoir.water_source_type is None
    assert reservoir.notes == []


def test_create_with_empty_name_fails():
    with pytest.raises(FieldValidationError):
        Reservoir.create(Farm.create("F1", "organic"), "  ")


def test_attach_bucket(reservoir):
    bucket = reservoir.attach_bucket(50)
    assert bucket == Bucket(capacity=50, volume=0.0)
    assert reservoir.water_source_type == WaterSourceType.BUCKET


def test_bucket_negative_capacity_is_invalid(reservoir):
    with pytest.raises(FieldValidationError) as exc_info:
        reservoir.attach_bucket(-1)
    assert exc_info.value.field == "capacity"
    assert reservoir.water_source is None


def test_bucket_volume_above_capacity_is_invalid():
    with pytest.raises(FieldValidationError):
        Bucket(capacity=10, volume=11)


def test_attach_tap_after_bucket_fails(reservoir):
    reservoir.attach_bucket(50)
    with pytest.raises(InvariantViolationError) as exc_info:
        reservoir.attach_tap()
    assert exc_info.value.code == "WATER_SOURCE_ALREADY_ATTACHED"
    assert reservoir.water_source_type == WaterSourceType.BUCKET


def test_attach_tap_twice_fails(reservoir):
    reservoir.attach_tap()
    with pytest.raises(InvariantViolationError):
        reservoir.attach_tap()
