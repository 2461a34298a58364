"""
Password hashing and JWT helpers for the auth service.

Passwords are hashed with bcrypt through passlib's ``CryptContext``.
Tokens are signed with HS256 using python-jose and carry the user's
email and username alongside the registered ``iat``, ``exp``, ``jti`` and
``iss`` claims.
"""
import uuid
from datetime import datetime

from jose import JWTError, jwt
from passlib.context import CryptContext

from storefront.errors import InvalidTokenError
from storefront.schemas.auth import TokenClaims

ALGORITHM = "HS256"


def build_password_context(rounds: int = 12) -> CryptContext:
    """
    Build the bcrypt password context.

    Args:
        rounds: bcrypt cost factor

    Returns:
        CryptContext hashing with bcrypt
    """
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=rounds,
    )


def create_access_token(
    email: str,
    username: str,
    secret_key: str,
    issuer: str,
    issued_at: datetime,
    expires_at: datetime,
) -> str:
    """
    Create a signed JWT for the given user.

    Args:
        email: User email, stored in the ``email`` claim
        username: User name, stored in the ``username`` claim
        secret_key: HMAC secret used to sign the token
        issuer: Value of the ``iss`` claim
        issued_at: Issue instant (``iat``)
        expires_at: Expiry instant (``exp``)

    Returns:
        Encoded token
    """
    claims = {
        "email": email,
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "jti": str(uuid.uuid4()),
        "iss": issuer,
    }
    return jwt.encode(claims, secret_key, algorithm=ALGORITHM)


def get_claims_from_token(token: str, secret_key: str) -> TokenClaims:
    """
    Verify a token and extract its identity claims.

    Tokens signed with anything other than an HMAC algorithm are rejected
    before the signature is checked. Expired tokens and tokens missing the
    ``email`` or ``username`` claims are invalid as well.

    Raises:
        InvalidTokenError: If the token can't be trusted
    """
    try:
        header = jwt.get_unverified_header(token)
        if not str(header.get("alg", "")).startswith("HS"):
            raise InvalidTokenError("invalid signing method")

        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError(str(e))

    email = payload.get("email")
    username = payload.get("username")
    if not isinstance(email, str) or not isinstance(username, str):
        raise InvalidTokenError()

    return TokenClaims(email=email, username=username)
