"""
Map Generation Service - Error Handler
Formats engine and request errors into structured JSON responses.
"""
import logging
import traceback
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mapgen.core.errors import ErrorCode, MapGenError

logger = logging.getLogger("mapgen.errors")

# HTTP status -> error code for framework-raised HTTP errors
_STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    404: ErrorCode.NOT_FOUND,
    422: ErrorCode.VALIDATION_ERROR,
    500: ErrorCode.UNKNOWN,
}


def _error_id() -> str:
    """Short id that ties a response to its log line."""
    return str(uuid.uuid4())[:8]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_response(exc: MapGenError, error_id: str) -> JSONResponse:
    """Build the JSON response for a MapGenError."""
    content = exc.to_dict()
    content["error"]["error_id"] = error_id
    content["error"]["timestamp"] = _timestamp()
    return JSONResponse(status_code=exc.http_status, content=content)


def setup_error_handlers(app: FastAPI, debug: bool = False):
    """
    Register exception handlers on the FastAPI application.

    Call after creating the app. MapGenError subclasses keep their own
    status code (400 validation, 404 preset, 422 generation failure).
    """

    @app.exception_handler(MapGenError)
    async def mapgen_error_handler(request: Request, exc: MapGenError):
        """Handle engine errors."""
        error_id = _error_id()

        logger.warning(
            f"[{error_id}] MapGenError: {exc.code.value} - {exc.message}",
            extra={
                "error_id": error_id,
                "error_code": exc.code.value,
                "path": str(request.url.path),
            }
        )

        return error_response(exc, error_id)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors from request parsing."""
        errors = []
        for error in exc.errors():
            field = " -> ".join(str(loc) for loc in error.get("loc", []))
            errors.append({
                "field": field,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "validation_error")
            })

        return JSONResponse(
            status_code=422,
            content={
                "error": {
                    "code": ErrorCode.VALIDATION_ERROR.value,
                    "message": "Request validation failed",
                    "details": {"errors": errors},
                    "recoverable": True,
                    "recovery_hint": "Check the request data and correct any invalid fields",
                    "error_id": _error_id(),
                    "timestamp": _timestamp()
                }
            }
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle standard HTTP exceptions (unknown routes, bad methods)."""
        error_code = _STATUS_CODES.get(exc.status_code, ErrorCode.UNKNOWN)

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": error_code.value,
                    "message": str(exc.detail) if exc.detail else "An error occurred",
                    "details": {},
                    "recoverable": exc.status_code < 500,
                    "recovery_hint": None,
                    "error_id": _error_id(),
                    "timestamp": _timestamp()
                }
            }
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        error_id = _error_id()

        logger.error(
            f"[{error_id}] Unhandled exception: {type(exc).__name__}: {exc}",
            extra={
                "error_id": error_id,
                "path": str(request.url.path),
                "method": request.method,
            },
            exc_info=True
        )

        content = {
            "error": {
                "code": ErrorCode.UNKNOWN.value,
                "message": "An unexpected error occurred",
                "details": {},
                "recoverable": False,
                "recovery_hint": "Please try again with different parameters",
                "error_id": error_id,
                "timestamp": _timestamp()
            }
        }

        if debug:
            content["error"]["debug"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=500,
            content=content
        )

    return app
