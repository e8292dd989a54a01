"""Error Hierarchy — typed, categorized exceptions for all Calcdeck failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Evaluators never raise these for incomplete input (they return the invalid sentinel)

Design Decisions:
    - Single hierarchy with CalcdeckError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    calculator_id: str | None = None
    locale: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class CalcdeckError(Exception):
    """Base exception for all Calcdeck errors."""

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
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "calculator_id": self.context.calculator_id,
                    "locale": self.context.locale,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(CalcdeckError):
    """Request input failed a domain rule that pydantic cannot express."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class UnknownUnitError(CalcdeckError):
    """Unit id or unit group is not in the registry."""
    def __init__(self, unit: str, unit_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown unit '{unit}' for unit type '{unit_type}'",
            "UNKNOWN_UNIT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.unit = unit
        self.unit_type = unit_type


class DuplicateResourceError(CalcdeckError):
    """Unique constraint would be violated (reported as 400, not 409)."""
    def __init__(
        self, resource_type: str, field_name: str, value: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field_name
        super().__init__(
            f"A {resource_type.lower()} with this {field_name} already exists: '{value}'",
            "DUPLICATE_RESOURCE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 400,
        )


class UnauthorizedError(CalcdeckError):
    """Caller lacks the admin role."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(CalcdeckError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class CalculatorConfigError(CalcdeckError):
    """A calculator definition failed load-time validation."""
    def __init__(
        self, calculator_id: str, problems: list[str], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.calculator_id = calculator_id
        super().__init__(
            f"Invalid calculator config '{calculator_id}': {'; '.join(problems)}",
            "CALCULATOR_CONFIG_INVALID", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.problems = problems


class DatabaseError(CalcdeckError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
