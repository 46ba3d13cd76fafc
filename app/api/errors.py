"""Map domain errors raised by the services onto HTTP responses."""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    DomainError,
    DoubleBookingError,
    InvalidRequestError,
    NotFoundError,
    VenueUnavailableError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (VenueUnavailableError, status.HTTP_409_CONFLICT),
    (DoubleBookingError, status.HTTP_409_CONFLICT),
    (InvalidRequestError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = status_for(exc)
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc}")
        return JSONResponse(
            status_code=status_code,
            content={
                "success": False,
                "error": {"code": exc.code.value, "message": exc.message},
            },
        )
