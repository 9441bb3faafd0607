"""
Exception handlers that render every failure through the response envelope.

- ``ApiError`` subclasses carry their own status and message.
- Request validation reports the first failing rule (path errors are a 404,
  matching an unresolvable resource id).
- Framework HTTP errors (unknown route, wrong method) keep their status.
- Anything else is logged with its traceback and becomes a generic 500.
"""
import logging
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from storekeeper.api.responses import failure
from storekeeper.errors import (
    ApiError,
    AuthenticationError,
    NOT_AUTHENTICATED_MESSAGE,
    NOT_FOUND_MESSAGE,
    UNEXPECTED_MESSAGE,
    ValidationError,
)
from storekeeper.utils.validation import attribute_name, required_message

logger = logging.getLogger("storekeeper.errors")

_LOCATION_PARTS = {"body", "query", "path", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "


def first_error_message(errors: Sequence[Dict[str, Any]]) -> str:
    """Turn the first pydantic/FastAPI error into a human-readable message."""
    if not errors:
        return ValidationError.default_message
    err = errors[0]
    ctx_error = (err.get("ctx") or {}).get("error")
    if isinstance(ctx_error, ValueError):
        return str(ctx_error)
    msg = str(err.get("msg") or "")
    if err.get("type") == "value_error" and msg.startswith(_VALUE_ERROR_PREFIX):
        return msg[len(_VALUE_ERROR_PREFIX):]
    fields = [p for p in err.get("loc", ()) if isinstance(p, str) and p not in _LOCATION_PARTS]
    field = fields[-1] if fields else None
    if field is None:
        return ValidationError.default_message
    if err.get("type") == "missing":
        return required_message(field)
    return f"The {attribute_name(field)} field is invalid."


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return failure(exc.status_code, exc.message, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("loc", (None,))[0] == "path" for err in errors):
        return failure(404, NOT_FOUND_MESSAGE)
    return failure(422, first_error_message(errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        msg = NOT_FOUND_MESSAGE
    elif exc.status_code == 401:
        msg = NOT_AUTHENTICATED_MESSAGE
    else:
        msg = str(exc.detail) if exc.detail else UNEXPECTED_MESSAGE
    return failure(exc.status_code, msg, headers=getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc_info=exc,
    )
    return failure(500, UNEXPECTED_MESSAGE)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the envelope-rendering exception handlers on ``app``."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered")
