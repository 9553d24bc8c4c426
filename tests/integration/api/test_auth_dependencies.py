"""Integration tests for the optional and verified-email auth dependencies.

No production route uses these two yet, so the tests mount small routes
of their own on the application.
"""

import pytest
from fastapi import APIRouter

from shopfront.presentation.api.app import API_V1_PREFIX, create_app
from shopfront.presentation.api.dependencies import OptionalAuth, VerifiedAuth

pytestmark = pytest.mark.integration

AUTH = f"{API_V1_PREFIX}/auth"


def _guarded_router() -> APIRouter:
    router = APIRouter()

    @router.get("/whoami")
    async def whoami(auth: OptionalAuth) -> dict:
        if auth is None:
            return {"success": True, "data": None}
        return {"success": True, "data": {"email": auth.email, "role": auth.role.value}}

    @router.get("/verified-only")
    async def verified_only(auth: VerifiedAuth) -> dict:
        return {"success": True, "data": {"email": auth.email}}

    return router


@pytest.fixture
def app(api_settings):
    application = create_app(api_settings)
    application.include_router(_guarded_router(), prefix="/guarded")
    return application


def _verify_email(client, headers) -> None:
    issued = client.post(f"{AUTH}/verify-email/request", headers=headers)
    token = issued.json()["data"]["verification_token"]
    assert client.post(f"{AUTH}/verify-email", json={"token": token}).status_code == 200


class TestOptionalAuth:
    def test_anonymous_request(self, client):
        response = client.get("/guarded/whoami")

        assert response.status_code == 200
        assert response.json()["data"] is None

    def test_valid_token(self, client, auth_headers):
        response = client.get("/guarded/whoami", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"email": "alice@example.com", "role": "CUSTOMER"}

    @pytest.mark.parametrize(
        "headers",
        [
            {"Authorization": "Bearer not-a-jwt"},
            {"Authorization": "Token abc"},
        ],
    )
    def test_bad_credentials_fall_back_to_anonymous(self, client, headers):
        response = client.get("/guarded/whoami", headers=headers)

        assert response.status_code == 200
        assert response.json()["data"] is None


class TestVerifiedAuth:
    def test_unverified_user_is_forbidden(self, client, auth_headers):
        response = client.get("/guarded/verified-only", headers=auth_headers)

        assert response.status_code == 403
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "EMAIL_VERIFICATION_REQUIRED"

    def test_anonymous_request_is_unauthorized(self, client):
        response = client.get("/guarded/verified-only")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_verified_user_passes(self, client, auth_headers):
        _verify_email(client, auth_headers)

        response = client.get("/guarded/verified-only", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"email": "alice@example.com"}
