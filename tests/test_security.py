"""Tests for token signing and verification."""
import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from storefront.errors import InvalidTokenError
from storefront.utils.security import create_access_token, get_claims_from_token

SECRET = "unit-test-secret"


def issue(issued_at=None, lifetime=timedelta(hours=1), secret=SECRET):
    issued_at = issued_at or datetime.now(timezone.utc)
    return create_access_token(
        email="jdoe@example.com",
        username="jdoe",
        secret_key=secret,
        issuer="test_app",
        issued_at=issued_at,
        expires_at=issued_at + lifetime,
    )


def b64(data: dict) -> str:
    raw = json.dumps(data).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("utf-8")


def test_token_round_trip():
    claims = get_claims_from_token(issue(), SECRET)

    assert claims.email == "jdoe@example.com"
    assert claims.username == "jdoe"


def test_token_carries_registered_claims():
    issued_at = datetime.now(timezone.utc)
    payload = jwt.get_unverified_claims(issue(issued_at=issued_at))

    assert payload["iss"] == "test_app"
    assert payload["exp"] - payload["iat"] == 3600
    assert payload["jti"]
    assert jwt.get_unverified_claims(issue())["jti"] != payload["jti"]


def test_token_signed_with_other_secret_is_rejected():
    with pytest.raises(InvalidTokenError):
        get_claims_from_token(issue(secret="other-secret"), SECRET)


def test_expired_token_is_rejected():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)

    with pytest.raises(InvalidTokenError):
        get_claims_from_token(issue(issued_at=issued_at), SECRET)


def test_unsigned_token_is_rejected():
    token = ".".join([
        b64({"alg": "none", "typ": "JWT"}),
        b64({"email": "jdoe@example.com", "username": "jdoe"}),
        "",
    ])

    with pytest.raises(InvalidTokenError, match="invalid signing method"):
        get_claims_from_token(token, SECRET)


def test_other_hmac_algorithm_is_rejected():
    token = jwt.encode(
        {"email": "jdoe@example.com", "username": "jdoe"}, SECRET, algorithm="HS512"
    )

    with pytest.raises(InvalidTokenError):
        get_claims_from_token(token, SECRET)


@pytest.mark.parametrize("claims", [
    {"username": "jdoe"},
    {"email": "jdoe@example.com"},
    {"email": 42, "username": "jdoe"},
])
def test_token_missing_identity_claims_is_rejected(claims):
    token = jwt.encode(claims, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        get_claims_from_token(token, SECRET)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidTokenError):
        get_claims_from_token("not-a-token", SECRET)
