"""Error Hierarchy — typed, categorized exceptions for localesync failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LocaleSyncError base: one FastAPI handler catches all
    - Lifecycle hooks catch these (and any other exception) themselves;
      only the host routes let them reach the HTTP layer
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
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    record_id: int | None = None
    locale: str | None = None
    debug_info: dict[str, Any] | None = None


class LocaleSyncError(Exception):
    """Base exception for all localesync errors."""

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
                    "entity": self.context.entity,
                    "record_id": self.context.record_id,
                    "locale": self.context.locale,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(LocaleSyncError):
    """Requested entry does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class LocaleNotConfiguredError(LocaleSyncError):
    """Entry uses a locale that is not in the configured locale set."""
    def __init__(self, locale: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.locale = locale
        message = (
            f"Locale '{locale}' is not configured"
            if locale else "No locales are configured"
        )
        super().__init__(
            message, "LOCALE_NOT_CONFIGURED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )


class DuplicateLocaleError(LocaleSyncError):
    """A locale with the same code already exists."""
    def __init__(self, code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.locale = code
        super().__init__(
            f"Locale '{code}' already exists",
            "DUPLICATE_LOCALE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class LocalizationConflictError(LocaleSyncError):
    """Linked localizations would put two entries of one locale in a group."""
    def __init__(self, locales: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.locale = locales[0] if locales else None
        super().__init__(
            f"Localization group already has locale(s): {', '.join(locales)}",
            "LOCALIZATION_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class QueryError(LocaleSyncError):
    """Query names an unknown content type, field or where operator."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LocaleSyncError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
