"""Integration tests for the authentication endpoints."""

import pytest

from shopfront.presentation.api.app import API_V1_PREFIX

pytestmark = pytest.mark.integration

AUTH = f"{API_V1_PREFIX}/auth"
PASSWORD = "Passw0rd!"
NEW_PASSWORD = "N3wPassw0rd!"


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _login(client, email="alice@example.com", password=PASSWORD):
    return client.post(f"{AUTH}/login", json={"email": email, "password": password})


def _assert_error(response, status_code: int, code: str) -> dict:
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["success"] is False
    assert body["code"] == code
    return body


class TestRegister:
    def test_register_returns_user_and_tokens(self, register_user):
        response = register_user(email="Alice@Example.com", phone="+1 555 0100")

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"

        user = body["data"]["user"]
        assert user["email"] == "alice@example.com"
        assert user["first_name"] == "Alice"
        assert user["last_name"] == "Lee"
        assert user["phone"] == "+1 555 0100"
        assert user["role"] == "CUSTOMER"
        assert user["is_active"] is True
        assert user["email_verified"] is False
        assert "password" not in user
        assert "password_hash" not in user

        tokens = body["data"]["tokens"]
        assert tokens["token_type"] == "bearer"
        assert tokens["expires_in"] == 7 * 24 * 3600
        assert tokens["access_token"] != tokens["refresh_token"]

    def test_duplicate_email(self, register_user):
        register_user()

        response = register_user(email="ALICE@example.com")

        body = _assert_error(response, 409, "DUPLICATE_EMAIL")
        assert body["error"] == "Conflict"
        assert body["message"] == "User with this email already exists"

    def test_weak_password_lists_every_violation(self, register_user):
        response = register_user(password="short")

        body = _assert_error(response, 400, "WEAK_PASSWORD")
        reasons = body["details"]["reasons"]
        assert "Password must be at least 8 characters long" in reasons
        assert "Password must contain at least one number" in reasons

    def test_invalid_email_is_a_validation_error(self, register_user):
        response = register_user(email="not-an-email")

        body = _assert_error(response, 400, "VALIDATION_ERROR")
        assert body["message"] == "Please check your input data"
        assert "email" in [e["field"] for e in body["details"]["errors"]]

    def test_invalid_name(self, register_user):
        response = register_user(first_name="A")

        body = _assert_error(response, 400, "VALIDATION_ERROR")
        assert "first_name" in [e["field"] for e in body["details"]["errors"]]

    def test_names_are_trimmed_but_password_is_kept_verbatim(self, client, register_user):
        padded = "  Passw0rd!  "
        response = register_user(password=padded, first_name="  Alice ", last_name=" Lee")

        assert response.status_code == 201, response.text
        user = response.json()["data"]["user"]
        assert (user["first_name"], user["last_name"]) == ("Alice", "Lee")
        assert _login(client, password=padded).status_code == 200
        _assert_error(_login(client, password="Passw0rd!"), 401, "INVALID_CREDENTIALS")


class TestLogin:
    def test_login_issues_fresh_tokens(self, client, registered):
        response = _login(client, email="ALICE@example.com")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"]["id"] == registered["user"]["id"]
        tokens = body["data"]["tokens"]
        assert tokens["access_token"] != registered["tokens"]["access_token"]
        assert tokens["refresh_token"] != registered["tokens"]["refresh_token"]

    def test_wrong_password_and_unknown_email_match(self, client, registered):
        wrong = _login(client, password="Wr0ngPass!")
        unknown = _login(client, email="nobody@example.com")

        wrong_body = _assert_error(wrong, 401, "INVALID_CREDENTIALS")
        unknown_body = _assert_error(unknown, 401, "INVALID_CREDENTIALS")
        assert wrong_body["message"] == unknown_body["message"] == "Invalid email or password"
        assert wrong.headers["WWW-Authenticate"] == "Bearer"

    def test_missing_password(self, client):
        response = client.post(f"{AUTH}/login", json={"email": "alice@example.com"})

        _assert_error(response, 400, "VALIDATION_ERROR")

    def test_repeated_failures_are_rate_limited(self, client, registered):
        for _ in range(5):
            _assert_error(_login(client, password="Wr0ngPass!"), 401, "INVALID_CREDENTIALS")

        blocked = _login(client)

        body = _assert_error(blocked, 429, "RATE_LIMITED")
        assert body["error"] == "Too Many Requests"
        assert int(blocked.headers["Retry-After"]) > 0
        assert body["details"]["max_attempts"] == 5

    def test_successful_logins_do_not_count(self, client, registered):
        for _ in range(8):
            assert _login(client).status_code == 200


class TestProfile:
    def test_get_profile(self, client, registered, auth_headers):
        response = client.get(f"{AUTH}/profile", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile retrieved successfully"
        assert body["data"]["id"] == registered["user"]["id"]
        assert body["data"]["email"] == "alice@example.com"

    @pytest.mark.parametrize(
        ("headers", "code", "message"),
        [
            ({}, "MISSING_AUTH_HEADER", "Authorization header required"),
            (
                {"Authorization": "Basic abc"},
                "MALFORMED_AUTH_HEADER",
                "Invalid authorization format. Use: Bearer <token>",
            ),
            ({"Authorization": "Bearer garbage"}, "INVALID_TOKEN", "Invalid access token"),
        ],
    )
    def test_authentication_failures(self, client, headers, code, message):
        response = client.get(f"{AUTH}/profile", headers=headers)

        body = _assert_error(response, 401, code)
        assert body["message"] == message
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_refresh_token_cannot_be_used_as_access_token(self, client, registered):
        headers = _bearer(registered["tokens"]["refresh_token"])

        response = client.get(f"{AUTH}/profile", headers=headers)

        _assert_error(response, 401, "INVALID_TOKEN_TYPE")

    def test_update_profile_is_partial(self, client, auth_headers):
        response = client.put(
            f"{AUTH}/profile",
            headers=auth_headers,
            json={"phone": "+49 30 1234567"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["phone"] == "+49 30 1234567"
        assert data["first_name"] == "Alice"

        profile = client.get(f"{AUTH}/profile", headers=auth_headers).json()["data"]
        assert profile["phone"] == "+49 30 1234567"

    def test_update_profile_rejects_bad_name(self, client, auth_headers):
        response = client.put(
            f"{AUTH}/profile",
            headers=auth_headers,
            json={"last_name": "L33t"},
        )

        _assert_error(response, 400, "VALIDATION_ERROR")

    def test_status(self, client, registered, auth_headers):
        response = client.get(f"{AUTH}/status", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["authenticated"] is True
        assert data["user_id"] == registered["user"]["id"]
        assert data["role"] == "CUSTOMER"

    def test_logout(self, client, auth_headers):
        response = client.post(f"{AUTH}/logout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Logout successful"
        # Stateless tokens remain valid
        assert client.get(f"{AUTH}/profile", headers=auth_headers).status_code == 200


class TestChangePassword:
    def test_change_password(self, client, auth_headers):
        response = client.put(
            f"{AUTH}/change-password",
            headers=auth_headers,
            json={"current_password": PASSWORD, "new_password": NEW_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Password changed successfully"
        assert _login(client, password=NEW_PASSWORD).status_code == 200
        _assert_error(_login(client), 401, "INVALID_CREDENTIALS")

    def test_wrong_current_password(self, client, auth_headers):
        response = client.put(
            f"{AUTH}/change-password",
            headers=auth_headers,
            json={"current_password": "Wr0ngPass!", "new_password": NEW_PASSWORD},
        )

        body = _assert_error(response, 401, "INCORRECT_CURRENT_PASSWORD")
        assert body["message"] == "Current password is incorrect"

    def test_weak_new_password(self, client, auth_headers):
        response = client.put(
            f"{AUTH}/change-password",
            headers=auth_headers,
            json={"current_password": PASSWORD, "new_password": "password"},
        )

        _assert_error(response, 400, "WEAK_PASSWORD")

    def test_confirmation_mismatch(self, client, auth_headers):
        response = client.put(
            f"{AUTH}/change-password",
            headers=auth_headers,
            json={
                "current_password": PASSWORD,
                "new_password": NEW_PASSWORD,
                "confirm_password": "Something3lse!",
            },
        )

        _assert_error(response, 400, "VALIDATION_ERROR")


class TestRefresh:
    def test_refresh_issues_usable_access_token(self, client, registered):
        response = client.post(
            f"{AUTH}/refresh",
            json={"refresh_token": registered["tokens"]["refresh_token"]},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 7 * 24 * 3600
        profile = client.get(f"{AUTH}/profile", headers=_bearer(data["access_token"]))
        assert profile.status_code == 200

    def test_access_token_is_rejected(self, client, registered):
        response = client.post(
            f"{AUTH}/refresh",
            json={"refresh_token": registered["tokens"]["access_token"]},
        )

        body = _assert_error(response, 401, "INVALID_REFRESH_TOKEN")
        assert body["message"] == "Invalid refresh token"

    def test_garbage_token(self, client):
        response = client.post(f"{AUTH}/refresh", json={"refresh_token": "nope"})

        _assert_error(response, 401, "INVALID_REFRESH_TOKEN")


class TestEmailVerification:
    def test_request_and_verify(self, client, auth_headers):
        issued = client.post(f"{AUTH}/verify-email/request", headers=auth_headers)
        assert issued.status_code == 200
        token = issued.json()["data"]["verification_token"]
        assert issued.json()["data"]["expires_in"] == 24 * 3600

        verified = client.post(f"{AUTH}/verify-email", json={"token": token})

        assert verified.status_code == 200
        assert verified.json()["data"]["email_verified"] is True

        again = client.post(f"{AUTH}/verify-email", json={"token": token})
        _assert_error(again, 409, "EMAIL_ALREADY_VERIFIED")

        requested = client.post(f"{AUTH}/verify-email/request", headers=auth_headers)
        _assert_error(requested, 409, "EMAIL_ALREADY_VERIFIED")

    def test_access_token_is_not_a_verification_token(self, client, registered):
        response = client.post(
            f"{AUTH}/verify-email",
            json={"token": registered["tokens"]["access_token"]},
        )

        _assert_error(response, 400, "INVALID_VERIFICATION_TOKEN")


class TestAdmin:
    def test_customer_cannot_read_stats(self, client, auth_headers):
        response = client.get(f"{AUTH}/admin/stats", headers=auth_headers)

        body = _assert_error(response, 403, "INSUFFICIENT_ROLE")
        assert body["message"] == "Access denied. Required role: ADMIN"

    def test_stats_require_authentication(self, client):
        response = client.get(f"{AUTH}/admin/stats")

        _assert_error(response, 401, "MISSING_AUTH_HEADER")

    def test_admin_reads_stats(self, client, registered, admin_headers):
        response = client.get(f"{AUTH}/admin/stats", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["by_role"] == {"CUSTOMER": 1, "ADMIN": 1}
        assert data["by_status"] == {"active": 2, "inactive": 0}
        assert data["by_verification"] == {"verified": 0, "unverified": 2}

    def test_deactivation_lifecycle(self, client, registered, auth_headers, admin_headers):
        user_id = registered["user"]["id"]

        deactivated = client.post(
            f"{AUTH}/admin/users/{user_id}/deactivate",
            headers=admin_headers,
        )
        assert deactivated.status_code == 200
        assert deactivated.json()["data"]["is_active"] is False

        body = _assert_error(_login(client), 403, "ACCOUNT_DEACTIVATED")
        assert body["error"] == "Forbidden"

        existing = client.get(f"{AUTH}/profile", headers=auth_headers)
        body = _assert_error(existing, 401, "AUTH_USER_INACTIVE")
        assert body["message"] == "Account is deactivated"

        refreshed = client.post(
            f"{AUTH}/refresh",
            json={"refresh_token": registered["tokens"]["refresh_token"]},
        )
        _assert_error(refreshed, 401, "USER_INACTIVE")

        activated = client.post(
            f"{AUTH}/admin/users/{user_id}/activate",
            headers=admin_headers,
        )
        assert activated.status_code == 200
        assert activated.json()["message"] == "User activated successfully"
        assert _login(client).status_code == 200

    def test_deactivate_unknown_user(self, client, admin_headers):
        response = client.post(
            f"{AUTH}/admin/users/00000000-0000-0000-0000-000000000000/deactivate",
            headers=admin_headers,
        )

        _assert_error(response, 404, "USER_NOT_FOUND")

    def test_customer_cannot_deactivate(self, client, registered, auth_headers):
        response = client.post(
            f"{AUTH}/admin/users/{registered['user']['id']}/deactivate",
            headers=auth_headers,
        )

        _assert_error(response, 403, "INSUFFICIENT_ROLE")
