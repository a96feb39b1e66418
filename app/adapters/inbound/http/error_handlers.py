"""Map domain exceptions to HTTP error responses."""

from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.adapters.inbound.http.schemas import ErrorResponse
from app.domain.exceptions import (
    InvalidListingInputError,
    InvalidSortFieldError,
    ListingNotFoundError,
    ListingPermissionError,
    ListingStateError,
)
from app.infrastructure.logging.logger import log_event

# Only domain errors map to client errors; anything else stays a 500
_STATUS_BY_EXCEPTION: tuple[tuple[type[Exception], int], ...] = (
    (ListingNotFoundError, status.HTTP_404_NOT_FOUND),
    (ListingPermissionError, status.HTTP_403_FORBIDDEN),
    (ListingStateError, status.HTTP_409_CONFLICT),
    (InvalidSortFieldError, status.HTTP_400_BAD_REQUEST),
    (InvalidListingInputError, status.HTTP_400_BAD_REQUEST),
)


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _handler_for(status_code: int):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        log_event(
            "http",
            path=request.url.path,
            status_code=status_code,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return _error_response(request, status_code, str(exc))

    return handle


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    # Raised when query parameters are turned into a filter inside a route
    log_event("http", path=request.url.path, status_code=422, error_type="ValidationError")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors(include_url=False, include_context=False))},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the domain exception handlers on an application.

    Args:
        app: FastAPI application
    """
    for exception_type, status_code in _STATUS_BY_EXCEPTION:
        app.add_exception_handler(exception_type, _handler_for(status_code))
    app.add_exception_handler(ValidationError, _validation_error_handler)
