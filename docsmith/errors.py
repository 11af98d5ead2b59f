from typing import Any, Dict, Optional


class DocsmithError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(DocsmithError):
    status_code = 400
    error_code = "VALIDATION_ERROR"


class BadRequestError(DocsmithError):
    status_code = 400
    error_code = "BAD_REQUEST"


class UnauthorizedError(DocsmithError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class ForbiddenError(DocsmithError):
    status_code = 403
    error_code = "FORBIDDEN"


class NotFoundError(DocsmithError):
    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(DocsmithError):
    status_code = 409
    error_code = "CONFLICT"


class ReferentialError(DocsmithError):
    """Raised when the database rejects a write because of a foreign key."""

    status_code = 409
    error_code = "REFERENTIAL_ERROR"


class ServiceUnavailableError(DocsmithError):
    status_code = 503
    error_code = "SERVICE_UNAVAILABLE"


class RenderTimeoutError(DocsmithError):
    status_code = 504
    error_code = "RENDER_TIMEOUT"


class InternalError(DocsmithError):
    """Unexpected failure. `debug` is kept out of the message shown to clients."""

    def __init__(self, message: str = "Internal server error", debug: Optional[str] = None):
        super().__init__(message, {"debug": debug} if debug else None)
        self.debug = debug
