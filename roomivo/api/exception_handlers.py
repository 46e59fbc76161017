"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from roomivo.errors import (
    DUPLICATE_RESOURCE,
    EXTERNAL_SERVICE_ERROR,
    FORBIDDEN,
    INTERNAL_ERROR,
    MISSING_CREDENTIALS,
    NOT_FOUND,
    UNAUTHORIZED,
    VALIDATION_ERROR,
    DomainError,
    DomainValidationError,
    DuplicateResourceError,
    ExternalServiceError,
    ForbiddenError,
    MissingCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from roomivo.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

# Most specific classes first: MissingCredentialsError is a DomainValidationError.
_DOMAIN_ERRORS: tuple[tuple[type[DomainError], int, str], ...] = (
    (MissingCredentialsError, status.HTTP_400_BAD_REQUEST, MISSING_CREDENTIALS),
    (DomainValidationError, status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR),
    (DuplicateResourceError, status.HTTP_400_BAD_REQUEST, DUPLICATE_RESOURCE),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED, UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND, NOT_FOUND),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY, EXTERNAL_SERVICE_ERROR),
)


def describe_error(exc: DomainError) -> tuple[int, ErrorResponse]:
    """Status code and body for a domain exception (shared with the WebSocket channel)."""
    for exc_type, status_code, code in _DOMAIN_ERRORS:
        if isinstance(exc, exc_type):
            return status_code, ErrorResponse(detail=str(exc), code=code)
    return (
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(detail=str(exc), code=VALIDATION_ERROR),
    )


def domain_error_handler(_request: Request, exc: DomainError) -> JSONResponse:
    status_code, body = describe_error(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback, never echo the raw message to the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = ErrorResponse(detail="Internal server error", code=INTERNAL_ERROR)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump()
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
