"""
Exception handlers mapping errors to generic JSON responses.

Clients only ever see a status code, a short error code and a fixed
message. Details stay in the server log.
"""

import logging
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from schemas.api import ErrorResponse
from core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

ERROR_BAD_REQUEST = "bad_request"
ERROR_NOT_FOUND = "not_found"
ERROR_METHOD_NOT_ALLOWED = "method_not_allowed"
ERROR_INTERNAL = "internal_error"

_STATUS_ERRORS = {
    400: (ERROR_BAD_REQUEST, "Bad Request"),
    404: (ERROR_NOT_FOUND, "Not Found"),
    405: (ERROR_METHOD_NOT_ALLOWED, "Method Not Allowed"),
    500: (ERROR_INTERNAL, "Internal Server Error"),
}


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def create_error_response(request: Request, status_code: int) -> JSONResponse:
    error, message = _STATUS_ERRORS.get(status_code, (ERROR_INTERNAL, "Internal Server Error"))
    body = ErrorResponse(error=error, message=message, request_id=_request_id(request))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable path or query parameters are a plain 400"""
    logger.warning(
        f"[{_request_id(request)}] Bad request on {request.url.path}: {exc.errors()}"
    )
    return create_error_response(request, status.HTTP_400_BAD_REQUEST)


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    logger.warning(f"[{_request_id(request)}] {exc}")
    return create_error_response(request, status.HTTP_400_BAD_REQUEST)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info(f"[{_request_id(request)}] {exc.message}")
    return create_error_response(request, status.HTTP_404_NOT_FOUND)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[{_request_id(request)}] HTTP {exc.status_code}: {exc.detail}")
    return create_error_response(request, exc.status_code)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback, return a bare 500"""
    logger.error(
        f"[{_request_id(request)}] Unhandled exception on {request.method} {request.url.path}: "
        f"{type(exc).__name__}: {exc}",
        exc_info=True,
    )
    return create_error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR)


def setup_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(BadRequestError, bad_request_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
