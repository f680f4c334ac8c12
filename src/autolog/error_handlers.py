"""Exception handlers producing non-exposed error responses.

Clients get a stable ``{error, message}`` body where ``message`` is the
standard reason phrase for the status code. The detailed message raised
by the handler is only written to the log.
"""

import logging
from http import HTTPStatus
from typing import cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from autolog.schemas.errors import ErrorResponse

logger = logging.getLogger(__name__)


def _map_http_status_to_error(status_code: int) -> str:
    mapping: dict[int, str] = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        413: "payload_too_large",
        429: "rate_limited",
        500: "internal_error",
        502: "upstream_error",
    }
    return mapping.get(status_code, f"http_{status_code}")


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_response(status_code: int, headers: dict[str, str] | None = None) -> JSONResponse:
    """Build the generic error response for ``status_code``."""
    payload = ErrorResponse(
        error=_map_http_status_to_error(status_code),
        message=_reason_phrase(status_code),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(payload),
        headers=headers,
    )


async def _http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    logger.warning(
        "%s %s -> %s: %s",
        request.method,
        request.url.path,
        http_exc.status_code,
        http_exc.detail,
    )
    return error_response(http_exc.status_code, getattr(http_exc, "headers", None))


async def _validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    logger.warning(
        "%s %s -> 400: %s",
        request.method,
        request.url.path,
        validation_exc.errors(),
    )
    return error_response(400)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # ServerErrorMiddleware re-raises after this response, so the server logs
    # the traceback; only the request context is logged here.
    logger.error(
        "unhandled exception method=%s path=%s: %r",
        request.method,
        request.url.path,
        exc,
    )
    return error_response(500)


def register_error_handlers(app: FastAPI) -> None:
    """Register the error handlers on a FastAPI application."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
