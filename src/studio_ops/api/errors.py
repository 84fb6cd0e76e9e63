"""Translation of domain errors into HTTP responses."""

import logging
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from studio_ops.domain.errors import (
    CouponUnavailableError,
    DuplicateIdentifierError,
    EmptyIdentifierError,
    GenerationExhaustedError,
    InvalidInputError,
    RecordNotFoundError,
    StudioOpsError,
)

_logger = logging.getLogger(__name__)

_ERROR_RESPONSES: dict[type[StudioOpsError], tuple[int, str]] = {
    GenerationExhaustedError: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "generation_exhausted",
    ),
    DuplicateIdentifierError: (status.HTTP_409_CONFLICT, "duplicate_identifier"),
    EmptyIdentifierError: (
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "empty_identifier",
    ),
    InvalidInputError: (status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_input"),
    RecordNotFoundError: (status.HTTP_404_NOT_FOUND, "not_found"),
    CouponUnavailableError: (status.HTTP_409_CONFLICT, "coupon_unavailable"),
}


def register_error_handlers(app: FastAPI) -> None:
    """Register JSON handlers for every domain error type."""
    for error_type, (status_code, code) in _ERROR_RESPONSES.items():
        app.add_exception_handler(error_type, _handler(status_code, code))


def _handler(
    status_code: int, code: str
) -> Callable[[Request, Exception], Awaitable[JSONResponse]]:
    async def handle(_request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error": code},
        )

    return handle


@contextmanager
def persistence_errors(action: str) -> Iterator[None]:
    """Turn unexpected storage failures during a write into a generic 500."""
    try:
        yield
    except StudioOpsError:
        raise
    except Exception as exc:
        _logger.exception("Failed to %s", action)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}",
        ) from exc
