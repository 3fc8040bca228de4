"""Structured error helpers for API responses."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.base import FieldError

logger = logging.getLogger(__name__)

ErrorItem = Union[FieldError, Dict[str, str]]


def build_error_payload(message: str, errors: Optional[Sequence[ErrorItem]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"success": False, "data": None, "message": message, "errors": None}
    if errors:
        payload["errors"] = [
            e.model_dump() if isinstance(e, FieldError) else {"field": e["field"], "message": e["message"]}
            for e in errors
        ]
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Optional[Sequence[ErrorItem]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.headers = headers
        self.payload = build_error_payload(message, errors)


class ValidationFailed(AppError):
    """Request failed field validation (400)."""

    def __init__(self, errors: List[FieldError], message: str = "Validation failed"):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, errors)
        self.errors = errors


class NotFound(AppError):
    def __init__(self, message: str = "Task not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class BadRequest(AppError):
    def __init__(self, message: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


class Unauthorized(AppError):
    def __init__(self, message: str = "Invalid authentication credentials"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )


@contextmanager
def operation_guard(failure_message: str, **log_context: Any) -> Iterator[None]:
    """
    Run an endpoint body, turning unexpected exceptions into a safe 500.

    AppError passes through untouched; anything else is logged with its
    traceback and replaced by ``failure_message``.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        logger.exception("%s %s", failure_message, log_context or "")
        raise AppError(status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message) from exc


def _field_name(loc: Sequence[Union[str, int]]) -> str:
    names = [str(part) for part in loc if isinstance(part, str) and part not in ("body", "query", "path")]
    if not names:
        return "Request"
    name = names[-1]
    return name[:1].upper() + name[1:]


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload, headers=exc.headers)


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")} for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_payload("Validation failed", errors),
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_payload(message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_payload("An unexpected error occurred"),
    )
