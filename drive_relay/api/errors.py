"""
Exception handlers.

Every failure leaves the API as {"error": "<short message>"}. Details
(upstream status, stack traces) are logged server-side and never sent
to the caller.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import (
    ClientInputError,
    ConfigurationError,
    PayloadTooLarge,
    RelayError,
    RemoteServiceError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[RelayError], int] = {
    ClientInputError: status.HTTP_400_BAD_REQUEST,
    PayloadTooLarge: status.HTTP_413_CONTENT_TOO_LARGE,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    RemoteServiceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: RelayError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_CODES:
            return STATUS_CODES[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    status_code = status_code_for(exc)
    context = {
        "path": request.url.path,
        "error_type": type(exc).__name__,
        "error": exc.message,
    }

    if status_code >= 500:
        if isinstance(exc, RemoteServiceError):
            context["upstream_status"] = exc.status_code
        logger.error("Upload failed", extra=context, exc_info=exc)
    else:
        logger.warning("Upload rejected", extra=context)

    return error_response(status_code, exc.message)


async def http_error_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Framework errors: malformed multipart, wrong method, unknown route, body limit."""
    context = {
        "path": request.url.path,
        "method": request.method,
        "status": exc.status_code,
        "error": str(exc.detail),
    }

    if exc.status_code >= 500:
        logger.error("Request failed", extra=context, exc_info=exc)
    else:
        logger.warning("Request rejected", extra=context)

    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    logger.warning(
        "Invalid request",
        extra={"path": request.url.path, "errors": exc.errors()}
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid upload request")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler.

    Prevents stack traces from leaking to clients. The full error is
    logged server-side; the caller gets a generic message.
    """
    logger.error(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error": str(exc),
        },
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        RemoteServiceError.DEFAULT_MESSAGE,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
