import logging
from datetime import datetime, timedelta, timezone
from typing import Protocol

from storefront.config import AuthSettings
from storefront.repositories.user_repository import UserRepository
from storefront.schemas.auth import AuthResponse, TokenClaims
from storefront.utils.security import create_access_token, get_claims_from_token

logger = logging.getLogger(__name__)

# Lifetime of issued tokens
TOKEN_LIFETIME = timedelta(hours=1)


class AuthServiceInterface(Protocol):
    """Operations the auth routes call."""

    def authenticate(self, email: str, password: str) -> AuthResponse: ...

    def verify_token(self, token: str) -> TokenClaims: ...


class AuthService:
    """
    Service class for credential checks and token issuance.

    Credentials are verified by the user repository; on success a signed
    token valid for one hour is issued.
    """

    def __init__(self, repository: UserRepository, settings: AuthSettings):
        self.repository = repository
        self.settings = settings

    def authenticate(self, email: str, password: str) -> AuthResponse:
        """
        Authenticate a user and issue a token.

        Args:
            email: User email
            password: Plain password

        Returns:
            Token with its expiry instant and Unix timestamp

        Raises:
            UserNotFoundError: If the credentials are invalid
        """
        user = self.repository.authenticate(email, password)

        now = datetime.now(timezone.utc)
        expires = now + TOKEN_LIFETIME

        token = create_access_token(
            email=user.email,
            username=user.username,
            secret_key=self.settings.SECRET_KEY,
            issuer=self.settings.TOKEN_ISSUER,
            issued_at=now,
            expires_at=expires,
        )
        logger.info(f"Issued token for user {user.id}")

        return AuthResponse(
            token=token,
            expires_in=int(expires.timestamp()),
            expires_at=expires,
        )

    def verify_token(self, token: str) -> TokenClaims:
        """Verify a token signed by this service and return its claims."""
        return get_claims_from_token(token, self.settings.SECRET_KEY)
