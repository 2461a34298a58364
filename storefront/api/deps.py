import logging

from fastapi import Depends, HTTPException, Request, status

from storefront.errors import InvalidTokenError
from storefront.schemas.auth import TokenClaims
from storefront.services.auth_service import AuthServiceInterface
from storefront.services.product_service import ProductServiceInterface

logger = logging.getLogger(__name__)

# "Bearer <token>"
BEARER_HEADER_PARTS = 2


def get_product_service(request: Request) -> ProductServiceInterface:
    """Dependency returning the catalog service built at startup."""
    return request.app.state.product_service


def get_auth_service(request: Request) -> AuthServiceInterface:
    """Dependency returning the auth service built at startup."""
    return request.app.state.auth_service


def require_bearer_token(
    request: Request,
    service: AuthServiceInterface = Depends(get_auth_service),
) -> TokenClaims:
    """
    Dependency guarding protected routes.

    The Authorization header must be exactly ``Bearer <token>`` and the
    token must verify. Every failure is answered with the same 401 so
    callers learn nothing about why they were rejected.
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="unauthorized",
    )

    parts = request.headers.get("Authorization", "").split(" ")
    if len(parts) != BEARER_HEADER_PARTS or parts[0] != "Bearer" or not parts[1]:
        raise unauthorized

    try:
        return service.verify_token(parts[1])
    except InvalidTokenError as e:
        logger.debug(f"Rejected bearer token: {e}")
        raise unauthorized
