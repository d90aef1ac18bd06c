"""Tests for error bodies and exception handlers."""
import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from pydantic import BaseModel

from userapi.core.errors import (
    AppError,
    AuthenticationError,
    EmailError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    StorageUnavailableError,
    ValidationFailure,
    register_exception_handlers,
)


@pytest.mark.parametrize(
    "error, status_code, message_key",
    [
        (AuthenticationError(), 401, "authentication_failure"),
        (ForbiddenError("unauthorised_user_update"), 403, "unauthorised_user_update"),
        (NotFoundError("user_not_found"), 404, "user_not_found"),
        (InvalidTokenError(), 400, "account_activation_failure"),
        (EmailError(), 502, "email_failure"),
        (StorageUnavailableError(), 503, "service_unavailable"),
        (ValidationFailure({"email": "email_in_use"}), 400, "validation_failure"),
    ],
)
def test_error_status_and_message(error, status_code, message_key):
    assert isinstance(error, AppError)
    assert error.status_code == status_code
    assert error.message_key == message_key


class Body(BaseModel):
    value: int


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/forbidden")
    async def forbidden():
        raise ForbiddenError("unauthorised_user_delete")

    @app.get("/invalid")
    async def invalid():
        raise ValidationFailure({"username": "username_size", "email": "email_in_use"})

    @app.post("/typed")
    async def typed(body: Body):
        return body

    return app


@pytest.mark.asyncio
async def test_app_error_rendered_as_error_body():
    transport = ASGITransport(app=_build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/forbidden")

    assert response.status_code == 403
    body = response.json()
    assert set(body) == {"message", "timestamp", "path"}
    assert body["message"] == "You are not authorized to delete user"
    assert body["path"] == "/forbidden"
    assert body["timestamp"] > 1_600_000_000_000


@pytest.mark.asyncio
async def test_validation_failure_lists_fields_in_request_language():
    transport = ASGITransport(app=_build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/invalid", headers={"Accept-Language": "is-IS,is;q=0.9"})

    assert response.status_code == 400
    assert response.json()["validationErrors"] == {
        "username": "Verður að vera minnst 4 og mest 32 stafir",
        "email": "Netfang er þegar í notkun",
    }


@pytest.mark.asyncio
async def test_framework_validation_error_becomes_400():
    transport = ASGITransport(app=_build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/typed", json={"value": "not-a-number"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failure"
    assert body["validationErrors"] == {}
