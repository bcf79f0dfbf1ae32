"""Structured error kinds and their translation to API responses."""

from __future__ import annotations

import enum
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    PERSISTENCE_FAILURE = "persistence_failure"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONSTRAINT_VIOLATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PERSISTENCE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def build_error_payload(code: str, message: str, details: Optional[List[str]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"success": False, "code": code, "message": message}
    if details:
        payload["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    kind: ErrorKind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, message: str, details: Optional[List[str]] = None, debug_detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = list(details) if details else []
        # Only exposed to clients when DEBUG is on
        self.debug_detail = debug_detail

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_payload(self, debug: bool = False) -> Dict[str, Any]:
        details = list(self.details)
        if debug and self.debug_detail:
            details.append(self.debug_detail)
        return build_error_payload(self.kind.value, self.message, details)


class ValidationError(AppError):
    """Malformed, missing or out-of-range input."""

    kind = ErrorKind.VALIDATION


class NotFoundError(AppError):
    """The referenced row does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConstraintViolation(AppError):
    """The database refused the write (duplicate key, dangling reference, check)."""

    kind = ErrorKind.CONSTRAINT_VIOLATION

    @classmethod
    def from_integrity_error(cls, exc: IntegrityError) -> "ConstraintViolation":
        return cls(_constraint_message(exc), debug_detail=str(exc.orig))


class PersistenceFailure(AppError):
    """Connection exhaustion, network failure or a query error of unknown cause."""

    kind = ErrorKind.PERSISTENCE_FAILURE


def _constraint_message(exc: IntegrityError) -> str:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    text = str(orig).lower()
    if sqlstate == UNIQUE_VIOLATION or "unique" in text or "duplicate" in text:
        return "Duplicate entry detected"
    if sqlstate == FOREIGN_KEY_VIOLATION or "foreign key" in text:
        return "Invalid reference in request"
    return "Constraint violation"


@asynccontextmanager
async def translate_persistence_errors(action: str) -> AsyncIterator[None]:
    """
    Re-raise database exceptions as AppError kinds.

    `action` becomes the client-facing message of a PersistenceFailure,
    e.g. "Failed to fetch tasks". AppErrors raised inside the block pass
    through untouched.
    """
    try:
        yield
    except AppError:
        raise
    except IntegrityError as exc:
        logger.warning("%s: constraint violation: %s", action, exc.orig)
        raise ConstraintViolation.from_integrity_error(exc) from exc
    except PoolTimeoutError as exc:
        logger.error("%s: connection pool exhausted: %s", action, exc)
        raise PersistenceFailure(action, debug_detail=str(exc)) from exc
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("%s", action)
        raise PersistenceFailure(action, debug_detail=str(exc)) from exc


def _debug_enabled(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.DEBUG)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload(_debug_enabled(request)))


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_payload(ErrorKind.VALIDATION.value, "Validation error", details),
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        payload = build_error_payload(ErrorKind.NOT_FOUND.value, "Route not found")
    else:
        payload = build_error_payload("http_error", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    message = str(exc) if _debug_enabled(request) else "Internal server error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_payload(ErrorKind.PERSISTENCE_FAILURE.value, message),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
