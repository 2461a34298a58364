"""Exception handlers rendering every error as ``{"error": "<message>"}``."""
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Validation error types meaning the body couldn't be read as the expected object
BODY_FORMAT_ERRORS = {"json_invalid", "model_attributes_type", "dict_type"}


def error_json(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    """Build a JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=headers,
    )


def validation_error_message(exc: RequestValidationError) -> str:
    """
    Pick a client-facing message for a validation failure.

    Messages raised by our own validators are returned as is; anything
    else is reported as a format error of the offending field.
    """
    errors = exc.errors()
    if not errors:
        return "incorrect request format"

    error = errors[0]
    loc = tuple(error.get("loc", ()))
    ctx = error.get("ctx") or {}

    if error.get("type") in BODY_FORMAT_ERRORS or loc == ("body",):
        return "incorrect request body format"
    if "error" in ctx:
        return str(ctx["error"])
    if len(loc) > 1:
        return f"incorrect {loc[-1]} format"
    return error.get("msg", "incorrect request format")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_json(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_json(status.HTTP_400_BAD_REQUEST, validation_error_message(exc))
