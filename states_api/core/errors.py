"""Error Hierarchy — typed, categorized exceptions for every States API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404) are WARNING severity; data/store failures are CRITICAL
    - to_response() produces the REST envelope {"error": <message>}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StatesAPIError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields travel with the error,
      the handler decides how to log them
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    DATA_SOURCE = "data_source"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request-scoped details attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    state_code: str | None = None
    position: int | None = None
    debug_info: dict[str, Any] | None = None


class StatesAPIError(Exception):
    """Base exception for all States API errors."""

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
        """Convert to the REST error body."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Structured fields for the JSON log formatter."""
        extra: dict[str, Any] = {"error_code": self.code}
        if self.context.state_code is not None:
            extra["state_code"] = self.context.state_code
        if self.context.position is not None:
            extra["position"] = self.context.position
        return extra


# ─── Client Errors (400/404) ────────────────────────────────────

class BadRequestError(StatesAPIError):
    """Request body is missing required fields."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidIndexError(StatesAPIError):
    """1-based fact position outside [1, length]."""
    def __init__(self, position: int, length: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.position = position
        ctx.debug_info = {"length": length}
        super().__init__(
            "Invalid index", "INVALID_INDEX", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.position = position
        self.length = length


class NotFoundError(StatesAPIError):
    """Requested resource does not exist."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class StateNotFoundError(NotFoundError):
    """No reference record for the requested code."""
    def __init__(self, state_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.state_code = state_code
        super().__init__("State not found", ctx)
        self.state_code = state_code


class FactEntryNotFoundError(NotFoundError):
    """No stored fun-fact entry for the requested code."""
    def __init__(self, state_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.state_code = state_code
        super().__init__("State not found", ctx)
        self.state_code = state_code


class NoFactsAvailableError(StatesAPIError):
    """Random fact requested but neither dataset nor store holds any."""
    def __init__(self, state_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.state_code = state_code
        super().__init__(
            "No fun facts found for this state",
            "NO_FACTS_AVAILABLE", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.state_code = state_code


# ─── Infrastructure Errors (500) ────────────────────────────────

class DataUnavailableError(StatesAPIError):
    """Reference dataset could not be read or parsed."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"reason": reason}
        super().__init__(
            "Internal Server Error", "DATA_UNAVAILABLE", ErrorCategory.DATA_SOURCE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.reason = reason


class StoreError(StatesAPIError):
    """Fact store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"operation": operation, "reason": message}
        super().__init__(
            "Internal Server Error", "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
