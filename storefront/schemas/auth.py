from pydantic import BaseModel, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError
from datetime import datetime


class AuthRequest(BaseModel):
    """Credentials posted to the authenticate endpoint."""
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        try:
            validate_email(value)
        except PydanticCustomError:
            raise ValueError("incorrect email format")
        return value


class AuthResponse(BaseModel):
    """
    Issued token.

    ``expires_in`` is the Unix timestamp of expiry, ``expires_at`` the same
    instant as a datetime.
    """
    token: str
    expires_in: int
    expires_at: datetime


class TokenClaims(BaseModel):
    """Identity claims carried by a verified token."""
    email: str
    username: str
