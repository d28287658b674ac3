"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.exceptions import ViewRedirectException
from storefront.core.config import get_settings
from storefront.domain.exceptions import StorefrontException
from storefront.infrastructure.exceptions import UploadFailedException, UploadFailureKind

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "INVALID_ADMIN_CREDENTIALS": 401,
    "RESERVED_EMAIL": 400,
    "PROVIDER_REJECTED": 400,
    "PERMISSION_DENIED": 403,
    "DEMO_RESTRICTED": 403,
    "ADMIN_REQUIRED": 403,
    "NOT_FOUND": 404,
    "WRITE_FAILED": 502,
    "MALFORMED_CONFIG": 400,
    "UPLOAD_FAILED": 502,
}


def _status_for(exc: StorefrontException) -> int:
    if (
        isinstance(exc, UploadFailedException)
        and exc.kind is UploadFailureKind.MISSING_CONFIGURATION
    ):
        return 409
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _storefront_exception_handler(
    request: Request, exc: StorefrontException
) -> JSONResponse:
    """Return JSON from StorefrontException.to_dict() with appropriate status code."""
    return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())


def _view_redirect_handler(request: Request, exc: ViewRedirectException) -> JSONResponse:
    """303 See Other to the guard's redirect; the body carries the access state."""
    return JSONResponse(
        status_code=303,
        content=exc.to_dict(),
        headers={"Location": exc.location},
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: ViewRedirectException,
    StorefrontException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(ViewRedirectException, _view_redirect_handler)
    app.add_exception_handler(StorefrontException, _storefront_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
