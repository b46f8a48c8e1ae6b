"""Error Hierarchy — exceptions the read path, auth and request handling raise.

Invariants:
    - Each concrete error fixes its code, category, severity and HTTP status at
      class level; instances only add a message and an optional public message
    - to_response() shows public_message when set, so raw storage or driver
      text never reaches a client that should see a generic line
    - 4xx errors are caller-correctable, 5xx are not

Design Decisions:
    - Storage faults on invoice mutations do not raise: they travel as
      StoreFailure values (core/outcomes.py) and end up in a FormState
"""

from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    AUTHENTICATION = "authentication"
    INTERNAL = "internal"


class DashboardError(Exception):
    """Base for every error the global handler turns into a JSON envelope."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, public_message: str | None = None):
        super().__init__(message)
        self.message = message
        self.public_message = public_message
        self.raised_at = datetime.now(timezone.utc)

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.public_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.raised_at.isoformat(),
            }
        }


# ─── Caller errors (4xx) ────────────────────────────────────────

class InvalidPageError(DashboardError):
    """Listing page outside 1..MAX_PAGE."""

    code = "INVALID_PAGE"
    category = ErrorCategory.VALIDATION
    http_status = 400

    def __init__(self, page: int):
        super().__init__(f"Page {page} is out of range")
        self.page = page


class ResourceNotFoundError(DashboardError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} '{resource_id}' not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure errors (5xx) ────────────────────────────────

class DatabaseError(DashboardError):
    """A read against the invoice store failed. The message is already user-safe."""

    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}", public_message=message)
        self.operation = operation


class AuthUnavailableError(DashboardError):
    """Sign-in broke for a reason the user cannot fix (store or hasher fault)."""

    code = "AUTH_UNAVAILABLE"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, cause: str):
        super().__init__(
            f"Authentication unavailable: {cause}", public_message="Something went wrong.",
        )
