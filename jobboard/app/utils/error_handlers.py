"""
Centralized error types and the JSON error envelope used by every route.

All errors render as ``{"success": false, "message": ...}`` so the frontend can
handle them uniformly.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or invalid input fields."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class AuthFailure(AppError):
    """Login rejected. Never says whether the username or the password was wrong."""
    def __init__(self, message: str | None = None):
        super().__init__(message or get_error_message("invalid_credentials"), status_code=400)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class AuthRequiredError(AppError):
    """No bearer token on a protected route."""
    def __init__(self, message: str | None = None):
        super().__init__(message or get_error_message("token_required"), status_code=401)


class ForbiddenError(AppError):
    """Forbidden access error."""
    def __init__(self, message: str = "Access forbidden", details: dict | None = None):
        super().__init__(message, status_code=403, details=details)


class TokenExpired(ForbiddenError):
    def __init__(self):
        super().__init__(get_error_message("session_expired"))


class TokenMalformed(ForbiddenError):
    def __init__(self):
        super().__init__(get_error_message("invalid_token"))


class StorageError(AppError):
    """File-layer failure. The message is internal; clients get a generic one."""
    def __init__(self, message: str, collection: str | None = None):
        self.collection = collection
        super().__init__(message, status_code=500)


class StorageUnavailableError(StorageError):
    """Collection file could not be read or written (permissions, disk, ...)."""


class CorruptStoreError(StorageError):
    """Collection file exists but is not a JSON array."""


ERROR_MESSAGES = {
    # Authentication
    "invalid_credentials": "Invalid credentials",
    "token_required": "Access token required",
    "invalid_token": "Invalid token",
    "session_expired": "Your session has expired. Please login again.",
    "admin_required": "Admin access required",

    # Jobs
    "job_not_found": "Job not found",
    "invalid_status": "Status must be one of: active, inactive",

    # General
    "server_error": "Server error",
    "storage_error": "Server error",
    "validation_error": "Please check your input and try again.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "message": message,
    }

    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, StorageError):
        logger.exception(
            "Storage failure on %s %s (collection=%s): %s",
            request.method,
            request.url.path,
            exc.collection,
            exc.message,
        )
        return create_error_response(exc.status_code, get_error_message("storage_error"))

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return create_error_response(exc.status_code, exc.message, exc.details, headers=headers)


async def http_exception_handler(request: Request, exc: HTTPException):
    """Render HTTPException in the same envelope as AppError."""
    return create_error_response(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400, not FastAPI's default 422."""
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        if loc:
            fields.append(".".join(loc))
    logger.warning("Request validation failed on %s: %s", request.url.path, fields)
    return create_error_response(
        400,
        get_error_message("validation_error"),
        {"fields": fields} if fields else None,
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors globally."""
    logger.exception("Unhandled exception: %s", exc)
    return create_error_response(500, get_error_message("server_error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)
