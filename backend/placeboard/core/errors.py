"""Error Hierarchy — typed, categorized exceptions for all place-board failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) carry a fixed human-readable message
    - Infrastructure errors (500-level) keep driver/upstream detail out of to_response()
    - to_response() produces the REST envelope {"error": message, "code": code}

Design Decisions:
    - Single hierarchy with PlaceBoardError base: FastAPI global handler catches all
    - ConstraintViolationError is the store-agnostic form of an integrity failure;
      handlers branch on .kind, never on driver error codes
"""

from enum import Enum

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    STORAGE = "storage"
    INTERNAL = "internal"


class PlaceBoardError(Exception):
    """Base exception for all place-board errors."""

    # Infrastructure errors carry operator detail; their body uses a generic message
    expose_message = True

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        message = self.message if self.expose_message else INTERNAL_ERROR_MESSAGE
        return {"error": message, "code": self.code}


# ─── Domain Errors (400-level) ──────────────────────────────────

class MissingFieldError(PlaceBoardError):
    """Required request field absent or blank."""
    def __init__(self, field: str):
        super().__init__(
            f"{field} is required", "MISSING_FIELD",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )
        self.field = field


class InvalidPlaceIdError(PlaceBoardError):
    """Path parameter is not a positive integer."""
    def __init__(self, raw_id: str):
        super().__init__(
            "Invalid place id", "INVALID_PLACE_ID",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )
        self.raw_id = raw_id


class AlreadyLikedError(PlaceBoardError):
    """Client identity has already liked this place."""
    def __init__(self, place_id: int, client_ip: str):
        super().__init__(
            "You have already liked this place", "ALREADY_LIKED",
            ErrorCategory.CONFLICT, ErrorSeverity.INFO, 400,
        )
        self.place_id = place_id
        self.client_ip = client_ip


class ResourceNotFoundError(PlaceBoardError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} '{resource_id}' not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PlaceBoardError):
    """Database operation failed."""
    expose_message = False

    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation


class ConstraintViolationError(DatabaseError):
    """Store rejected a write because of an integrity constraint.

    kind is one of "unique", "foreign_key", "not_null", "unknown".
    """
    def __init__(self, kind: str, operation: str):
        super().__init__(f"{kind} constraint violated", operation)
        self.code = "CONSTRAINT_VIOLATION"
        self.category = ErrorCategory.CONFLICT
        self.kind = kind


class TranslationUpstreamError(PlaceBoardError):
    """Translation service call failed or returned an unreadable body."""
    expose_message = False

    def __init__(self, message: str):
        super().__init__(
            f"Translation upstream error: {message}",
            "TRANSLATION_UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, 500,
        )


class FileStorageError(PlaceBoardError):
    """Writing an uploaded file to the file store failed."""
    expose_message = False

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(
            f"File storage error: {message}",
            "FILE_STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.filename = filename


class OperationFailedError(PlaceBoardError):
    """Endpoint-level failure with a fixed public message.

    Raised from the underlying infrastructure error so the handler can log the cause.
    """
    def __init__(self, message: str):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )
