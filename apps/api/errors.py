"""
HTTP error mapping.

Domain exceptions and failed handler Results share one JSON envelope:
{"status": <http status>, "message": <reason phrase>, "detail": <error>}
plus an "errors" list for validation failures.
"""
from http import HTTPStatus
from typing import Any, Dict, List, Optional, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.application.result import Result, ResultKind
from core.domain.exceptions import (
    ConflictException,
    DomainException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

STATUS_BY_CODE: Dict[str, int] = {
    "invalid": status.HTTP_400_BAD_REQUEST,
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "conflict": status.HTTP_409_CONFLICT,
}

_EXCEPTION_BY_KIND = {
    ResultKind.NOT_FOUND: NotFoundException,
    ResultKind.UNAUTHORIZED: UnauthorizedException,
    ResultKind.FORBIDDEN: ForbiddenException,
    ResultKind.CONFLICT: ConflictException,
}


def unwrap(result: Result[T]) -> T:
    """Value of a successful Result; a failed one is raised as its DomainException."""
    if result.succeeded:
        return result.value
    exception_class = _EXCEPTION_BY_KIND.get(result.kind, DomainException)
    raise exception_class(result.error)


def error_response(status_code: int, detail: str, errors: Optional[List[str]] = None) -> JSONResponse:
    content: Dict[str, Any] = {
        "status": status_code,
        "message": HTTPStatus(status_code).phrase,
        "detail": detail,
    }
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def _field_error(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
    errors = exc.errors if isinstance(exc, ValidationException) else None
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return error_response(status_code, exc.message, errors)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Malformed values rejected by entity setters."""
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_field_error(error) for error in exc.errors()]
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(errors), errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
