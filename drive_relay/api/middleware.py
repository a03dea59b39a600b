"""
Request body limit for uploads.

Starlette parses and spools the whole multipart body before the route
runs, so the per-file check in the upload route alone would still read
an oversized request to the end. This middleware bounds the body of
POST /api/upload first:

- a declared Content-Length over the limit is answered with 413 before
  any body byte is read;
- a body without Content-Length (chunked) is counted as it streams and
  parsing stops with 413 once the limit is passed.

The limit is the file limit plus room for the rest of the form, the
exact per-file check stays in the route.
"""

import logging

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.errors import PayloadTooLarge

logger = logging.getLogger(__name__)

# A full-size 'meta' part (Starlette caps non-file parts at 1 MiB) plus
# part headers and boundaries.
FORM_OVERHEAD_BYTES = 1024 * 1024 + 16 * 1024

UPLOAD_PATH = "/api/upload"


class UploadSizeLimitMiddleware:
    """Pure ASGI middleware; it has to wrap receive, which BaseHTTPMiddleware cannot."""

    def __init__(self, app: ASGIApp, max_file_bytes: int) -> None:
        self.app = app
        self.max_file_bytes = max_file_bytes
        self.max_body_bytes = max_file_bytes + FORM_OVERHEAD_BYTES

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] != "http"
            or scope["method"] != "POST"
            or scope["path"] != UPLOAD_PATH
        ):
            await self.app(scope, receive, send)
            return

        message = PayloadTooLarge(self.max_file_bytes).message

        content_length = self._content_length(scope)
        if content_length is not None and content_length > self.max_body_bytes:
            logger.warning(
                "Upload rejected before reading body",
                extra={"content_length": content_length, "limit_bytes": self.max_body_bytes}
            )
            response = JSONResponse(
                status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                content={"error": message},
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            incoming = await receive()
            if incoming["type"] == "http.request":
                received += len(incoming.get("body", b""))
                if received > self.max_body_bytes:
                    # Re-raised by FastAPI's body parsing, rendered by the HTTPException handler
                    raise HTTPException(
                        status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                        detail=message,
                    )
            return incoming

        await self.app(scope, limited_receive, send)

    @staticmethod
    def _content_length(scope: Scope) -> int | None:
        for name, value in scope.get("headers", []):
            if name == b"content-length":
                try:
                    return int(value)
                except ValueError:
                    return None
        return None
