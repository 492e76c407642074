"""Error Hierarchy — typed, categorized exceptions for all activity tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors map to exactly one of 400 / 404 / 409
    - Infrastructure errors are 503 and critical
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ActivityTrackerError base: FastAPI global handler catches all
      (ADR: uniform error shape)
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identity: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ActivityTrackerError(Exception):
    """Base exception for all activity tracker errors."""

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
                    "identity": self.context.identity,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400 / 404 / 409) ────────────────────────────

class InvalidInputError(ActivityTrackerError):
    """Operation input failed validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ActivityNotFoundError(ActivityTrackerError):
    """No record exists for the referenced identity."""
    def __init__(
        self, identity: str, record: str = "Activity",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.identity = ctx.identity or identity
        super().__init__(
            f"{record} for '{identity}' not found",
            "ACTIVITY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.identity = identity
        self.record = record


class ActivityConflictError(ActivityTrackerError):
    """An activity already exists for the target identity."""
    def __init__(self, identity: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.identity = ctx.identity or identity
        super().__init__(
            f"Activity for '{identity}' already exists",
            "ACTIVITY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.identity = identity


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ActivityTrackerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
