import logging

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.api.deps import get_auth_service, require_bearer_token
from storefront.errors import UserNotFoundError
from storefront.schemas.auth import AuthRequest, AuthResponse, TokenClaims
from storefront.services.auth_service import AuthServiceInterface

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/v1/",
    response_model=AuthResponse,
    summary="Authenticate",
    description="Exchange email and password for a token valid for one hour."
)
def authenticate(
    credentials: AuthRequest,
    service: AuthServiceInterface = Depends(get_auth_service)
):
    """
    Authenticate a user.

    - **email**: User email (required)
    - **password**: User password (required)
    """
    try:
        return service.authenticate(credentials.email, credentials.password)
    except UserNotFoundError as e:
        logger.info("Authentication failed: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get(
    "/protected",
    summary="Protected resource",
    description="Only reachable with a valid `Authorization: Bearer <token>` header."
)
def protected(claims: TokenClaims = Depends(require_bearer_token)):
    return {"status": "OK"}
