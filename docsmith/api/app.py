import logging
from collections import defaultdict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docsmith.errors import DocsmithError
from docsmith.models.responses import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_docsmith_error(request: Request, exc: DocsmithError):
    if exc.status_code >= 500:
        logger.error(f"[{request.method} {request.url.path}] {exc.error_code}: {exc.message}")
    return _error_response(
        exc.status_code,
        ErrorResponse(error=exc.message, error_code=exc.error_code, details=exc.details),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    details = defaultdict(list)
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        details[".".join(location) or "request"].append(error.get("msg", "Invalid value"))
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(error="Invalid request", error_code="VALIDATION_ERROR", details=dict(details)),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"[UNHANDLED_ERROR] {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error="Internal server error", error_code="INTERNAL_ERROR"),
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    app = FastAPI(
        title="docsmith API",
        description="API for document types, user documents and themed PDF rendering",
        version="1.0.0",
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DocsmithError, handle_docsmith_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
