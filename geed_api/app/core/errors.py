"""
Error types and exception handlers.

All error responses share one JSON shape::

    {"success": false, "message": "...", "errors": [{"field": ..., "message": ...}]}

Request validation problems (pydantic) and business‑rule violations
raised as ``ValidationFailed`` become HTTP 400.  ``HTTPException``
keeps its status code.  Anything else is logged with its traceback
and reported as a generic HTTP 500 without internal details.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..schemas.common import ErrorResponse


logger = logging.getLogger(__name__)


class RecordNotFound(LookupError):
    """The requested user, service or contact does not exist."""


class ValidationFailed(Exception):
    """A request that is well formed but violates a business rule."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_errors(self) -> List[Dict[str, str]]:
        return [{"field": self.field or "body", "message": self.message}]


def _error_body(message: str, errors: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return ErrorResponse(message=message, errors=errors).model_dump(exclude_none=True)


def _field_name(loc) -> str:
    # ("body", "category") -> "category"; ("query", "limit") -> "limit"
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")} for err in exc.errors()]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_error_body("Validation failed", errors))


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(exc.message, exc.to_errors()),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def not_found(resource: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found")
