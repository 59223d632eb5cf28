"""
Translate application and domain failures into JSON error responses.

Every error body carries a short human-readable ``error``; validation
failures add a per-field ``details`` list. Store failures never leak
internals.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError

from takatena.api.schemas.base import ErrorResponse, FieldErrorResponse, ValidationErrorResponse
from takatena.application.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
)
from takatena.domain.state_machine.listing_status_machine import InvalidStatusTransitionError
from takatena.domain.validation import ValidationError

logger = structlog.get_logger(__name__)

_REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header"})


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(by_alias=True),
    )


def _validation_response(details: list[FieldErrorResponse]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationErrorResponse(details=details).model_dump(by_alias=True),
    )


async def _on_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        details.append(
            FieldErrorResponse(field=".".join(loc), message=err["msg"], code=err["type"])
        )
    return _validation_response(details)


async def _on_validation(request: Request, exc: ValidationError) -> JSONResponse:
    return _validation_response(
        [
            FieldErrorResponse(field=to_camel(e.field), message=e.message, code=e.code)
            for e in exc.errors
        ]
    )


async def _on_unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, str(exc))


async def _on_forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return _error(status.HTTP_403_FORBIDDEN, str(exc))


async def _on_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


async def _on_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, str(exc))


async def _on_invalid_transition(
    request: Request, exc: InvalidStatusTransitionError
) -> JSONResponse:
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))


async def _on_store_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "store_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database operation failed")


async def _on_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _on_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, _on_validation)  # type: ignore[arg-type]
    app.add_exception_handler(UnauthorizedError, _on_unauthorized)  # type: ignore[arg-type]
    app.add_exception_handler(ForbiddenError, _on_forbidden)  # type: ignore[arg-type]
    app.add_exception_handler(NotFoundError, _on_not_found)  # type: ignore[arg-type]
    app.add_exception_handler(ConflictError, _on_conflict)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidStatusTransitionError, _on_invalid_transition)  # type: ignore[arg-type]
    app.add_exception_handler(StoreError, _on_store_error)
    app.add_exception_handler(SQLAlchemyError, _on_store_error)
    app.add_exception_handler(Exception, _on_unexpected)
