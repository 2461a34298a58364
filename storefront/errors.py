"""Domain errors raised by repositories and services."""
from typing import Optional


class StorefrontError(Exception):
    """Base class for domain errors. ``message`` is safe to send to clients."""
    message = "storefront error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class ProductNotFoundError(StorefrontError):
    """Raised when the requested product doesn't exist."""
    message = "product not found"


class ProductSKUAlreadyExistError(StorefrontError):
    """Raised when a product with the same SKU is already stored."""
    message = "product sku already exist"


class UserNotFoundError(StorefrontError):
    """
    Raised when a user doesn't exist or the supplied credentials are wrong.

    Authentication uses this error for both cases so callers can't tell
    which part of the credentials was invalid.
    """
    message = "user not found"


class UserAlreadyExistError(StorefrontError):
    """Raised when a user with the same email is already stored."""
    message = "user already exist"


class InvalidTokenError(StorefrontError):
    """Raised when a bearer token can't be verified."""
    message = "invalid token"
