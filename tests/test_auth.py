"""Tests for Auth API endpoints."""
import time
from unittest.mock import MagicMock

import pytest

from storefront.api.deps import get_auth_service


def login(auth_client, email, password):
    return auth_client.post("/v1/", json={"email": email, "password": password})


def test_authenticate(auth_client, registered_user, user_password):
    """Test valid credentials return a token valid for one hour."""
    response = login(auth_client, registered_user.email, user_password)

    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert abs(data["expires_in"] - (time.time() + 3600)) < 60
    assert "expires_at" in data


def test_authenticate_wrong_password(auth_client, registered_user):
    response = login(auth_client, registered_user.email, "wrong-password")

    assert response.status_code == 401
    assert response.json() == {"error": "user not found"}


def test_authenticate_unknown_email_matches_wrong_password(auth_client, registered_user, user_password):
    """Test an unknown email is indistinguishable from a wrong password."""
    unknown = login(auth_client, "nobody@example.com", user_password)
    wrong = login(auth_client, registered_user.email, "wrong-password")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


@pytest.mark.parametrize("email", ["not-an-email", "", "jdoe@"])
def test_authenticate_malformed_email(auth_client, email):
    response = login(auth_client, email, "password")

    assert response.status_code == 400
    assert response.json() == {"error": "incorrect email format"}


def test_authenticate_malformed_body(auth_client):
    response = auth_client.post(
        "/v1/",
        content="email=jdoe",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "incorrect request body format"}


def test_authenticate_service_error(auth_app, auth_client):
    service = MagicMock()
    service.authenticate.side_effect = RuntimeError("error on service")
    auth_app.dependency_overrides[get_auth_service] = lambda: service

    response = login(auth_client, "jdoe@example.com", "password")

    assert response.status_code == 500
    assert response.json() == {"error": "error on service"}


def test_protected_with_issued_token(auth_client, registered_user, user_password):
    token = login(auth_client, registered_user.email, user_password).json()["token"]

    response = auth_client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"status": "OK"}


@pytest.mark.parametrize("header", [
    None,
    "",
    "Token abc",
    "bearer {token}",
    "Bearer",
    "Bearer ",
    "Bearer {token} extra",
    "Bearer  {token}",
    "Bearer not-a-jwt",
])
def test_protected_rejects_bad_authorization(auth_client, registered_user, user_password, header):
    """Test every malformed or invalid header gets the same generic 401."""
    token = login(auth_client, registered_user.email, user_password).json()["token"]
    headers = {} if header is None else {"Authorization": header.format(token=token)}

    response = auth_client.get("/protected", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"error": "unauthorized"}
