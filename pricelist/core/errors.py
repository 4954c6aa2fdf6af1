"""
API error taxonomy and the exception handlers that render it.

Every non-2xx response has the body ``{"code", "message", "details"?}``.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pricelist.schemas.error import ApiError

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ApiException(Exception):
    """Base class for errors that are returned to the client as an ApiError body."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, List[str]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        self.headers = headers
        super().__init__(self.message)

    def to_response(self) -> JSONResponse:
        return error_response(self.status_code, self.code, self.message, self.details, self.headers)


class UnauthorizedError(ApiException):
    code = ErrorCode.UNAUTHORIZED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class RequestValidationFailed(ApiException):
    code = ErrorCode.VALIDATION_ERROR
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class NotFoundError(ApiException):
    code = ErrorCode.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class MethodNotAllowedError(ApiException):
    code = ErrorCode.METHOD_NOT_ALLOWED
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class ConflictError(ApiException):
    code = ErrorCode.CONFLICT
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalServerError(ApiException):
    pass


def error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    details: Optional[Dict[str, List[str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ApiError(code=code.value, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def collect_field_errors(errors) -> Dict[str, List[str]]:
    """
    Group pydantic error entries by dotted field path.

    The leading location segment (``body`` / ``query`` / ``path``) is dropped so
    clients see ``tables.0.title`` rather than ``body -> tables -> 0 -> title``.
    """
    details: Dict[str, List[str]] = {}
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "_root"
        details.setdefault(field, []).append(error["msg"])
    return details


async def api_exception_handler(request: Request, exc: ApiException):
    return exc.to_response()


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Collapse every pydantic error into one VALIDATION_ERROR body."""
    details = collect_field_errors(exc.errors())
    logger.info(f"Validation error on {request.method} {request.url.path}: {details}")
    return RequestValidationFailed(details=details).to_response()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(
            exc.status_code,
            ErrorCode.METHOD_NOT_ALLOWED,
            f"Method {request.method} not allowed",
            headers=getattr(exc, "headers", None),
        )
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(exc.status_code, ErrorCode.NOT_FOUND, "Resource not found")
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        return error_response(exc.status_code, ErrorCode.UNAUTHORIZED, "Authentication required")
    if exc.status_code < 500:
        return error_response(exc.status_code, ErrorCode.VALIDATION_ERROR, str(exc.detail))
    return error_response(exc.status_code, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
