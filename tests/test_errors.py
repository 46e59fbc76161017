import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient

from roomivo.api.exception_handlers import describe_error
from roomivo.errors import (
    DomainValidationError,
    DuplicateResourceError,
    ExternalServiceError,
    ForbiddenError,
    MissingCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from roomivo.main import app


@pytest.mark.parametrize(
    "exc, status_code, code",
    [
        (MissingCredentialsError("x"), 400, "MISSING_CREDENTIALS"),
        (DomainValidationError("x"), 400, "VALIDATION_ERROR"),
        (DuplicateResourceError("x"), 400, "DUPLICATE_RESOURCE"),
        (UnauthorizedError("x"), 401, "UNAUTHORIZED"),
        (ForbiddenError("x"), 403, "FORBIDDEN"),
        (NotFoundError("x"), 404, "NOT_FOUND"),
        (ExternalServiceError("x"), 502, "EXTERNAL_SERVICE_ERROR"),
    ],
)
def test_describe_error(exc, status_code, code):
    mapped_status, body = describe_error(exc)
    assert mapped_status == status_code
    assert body.code == code
    assert body.detail == "x"


def test_unhandled_error_returns_generic_500():
    router = APIRouter()

    @router.get("/api/test-boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    app.include_router(router)
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/test-boom")
    finally:
        app.router.routes[:] = [
            route for route in app.router.routes if getattr(route, "path", None) != "/api/test-boom"
        ]

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error", "code": "INTERNAL_ERROR"}
    assert "hunter2" not in response.text
