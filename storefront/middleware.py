import logging

from fastapi import Request, status

from storefront.utils.responses import error_json

logger = logging.getLogger(__name__)


async def panic_recovery_middleware(request: Request, call_next):
    """
    Turn any unhandled exception into a 500 JSON response.

    Registered as an HTTP middleware on both services so a failing request
    never takes the worker down or leaks a traceback to the client.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_json(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")
