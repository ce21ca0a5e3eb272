"""Domain Types - identities and closed value sets shared by every aggregate.

Invariants:
    - FarmId, ReservoirId, AreaId, MaterialId, NoteId wrap UUIDs
    - All closed sets are str Enums - no raw string matching in aggregates

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# --- Identity Types -----------------------------------------------------------

FarmId = NewType("FarmId", UUID)
ReservoirId = NewType("ReservoirId", UUID)
AreaId = NewType("AreaId", UUID)
MaterialId = NewType("MaterialId", UUID)
NoteId = NewType("NoteId", UUID)


# --- Enums --------------------------------------------------------------------

class WaterSourceType(str, Enum):
    """Water source variants a reservoir can carry."""
    BUCKET = "bucket"
    TAP = "tap"


class AreaType(str, Enum):
    """Cultivation area kinds. Each kind has its own size unit table."""
    SEEDING = "seeding"
    GROWING = "growing"


class MaterialCategory(str, Enum):
    """Closed set of inventory material categories."""
    SEED = "seed"
    AGROCHEMICAL = "agrochemical"
    GROWING_MEDIUM = "growing_medium"
    LABEL_AND_CROP_SUPPORT = "label_and_crop_support"
    SEEDING_CONTAINER = "seeding_container"
    POST_HARVEST_SUPPLY = "post_harvest_supply"
    OTHER = "other"


class ValidationErrorKind(str, Enum):
    """Validation failure taxonomy surfaced to callers."""
    REQUIRED = "REQUIRED"
    INVALID_OPTION = "INVALID_OPTION"
    PARSE_FAILED = "PARSE_FAILED"
    NOT_FOUND = "NOT_FOUND"


# --- Bounds -------------------------------------------------------------------

MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0
MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0
