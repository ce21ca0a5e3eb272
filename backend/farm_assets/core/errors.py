"""Error Hierarchy - typed, categorized exceptions for every farm-asset failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation and not-found errors carry .kind and .field so callers can
      tell REQUIRED(field) from INVALID_OPTION(field) without parsing messages
    - Domain errors (4xx) are recoverable; storage errors (5xx) are critical
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with FarmAssetsError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from farm_assets.core.domain_types import ValidationErrorKind


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    EXTERNAL = "external"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class FarmAssetsError(Exception):
    """Base exception for all farm-asset errors."""

    kind: ValidationErrorKind | None = None
    field: str | None = None

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "field": self.field,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# --- Domain Errors (400-level) ------------------------------------------------

class FieldValidationError(FarmAssetsError):
    """A raw field value failed validation (REQUIRED, INVALID_OPTION, PARSE_FAILED)."""

    def __init__(
        self,
        kind: ValidationErrorKind,
        field: str,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"{kind.value}: {field}",
            kind.value, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.kind = kind
        self.field = field

    @classmethod
    def required(cls, field: str) -> "FieldValidationError":
        return cls(ValidationErrorKind.REQUIRED, field)

    @classmethod
    def invalid_option(cls, field: str) -> "FieldValidationError":
        return cls(ValidationErrorKind.INVALID_OPTION, field)

    @classmethod
    def parse_failed(cls, field: str) -> "FieldValidationError":
        return cls(ValidationErrorKind.PARSE_FAILED, field)


class EntityNotFoundError(FarmAssetsError):
    """A referenced entity (aggregate, note, photo) does not exist."""

    def __init__(
        self, entity: str, entity_id: object = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        if entity_id is not None:
            ctx.entity_id = str(entity_id)
            message = f"{entity} '{entity_id}' not found"
        else:
            message = f"{entity} not found"
        super().__init__(
            message, ValidationErrorKind.NOT_FOUND.value,
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )
        self.kind = ValidationErrorKind.NOT_FOUND
        self.field = entity
        self.entity_id = entity_id


class InvariantViolationError(FarmAssetsError):
    """A mutation would break an aggregate invariant."""

    def __init__(self, code: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class PhotoProcessingError(FarmAssetsError):
    """Uploaded photo could not be stored or decoded."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PHOTO_PROCESSING_FAILED", ErrorCategory.EXTERNAL,
            ErrorSeverity.WARNING, context, 422,
        )
        self.field = "photo"


# --- Infrastructure Errors (500-level) ----------------------------------------

class StorageError(FarmAssetsError):
    """Repository read or write failed."""

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
