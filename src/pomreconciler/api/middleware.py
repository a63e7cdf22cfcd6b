"""Middleware: request timing and body size limits."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

# Editor events may carry document text; everything else is small.
_EVENT_PATH_MARKER = "/events/"
_MAX_BODY_EVENT = 5 * 1024 * 1024  # 5 MB for editor/file events
_MAX_BODY_DEFAULT = 1 * 1024 * 1024  # 1 MB for everything else


def _declared_length(value: str | None) -> int | None:
    """Parse a Content-Length header; malformed or negative values are ignored."""
    if value is None:
        return None
    try:
        length = int(value)
    except ValueError:
        return None
    return length if length >= 0 else None


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Add X-Request-Duration header with processing time."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        return response


class RequestBodyLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies that exceed size limits.

    Event endpoints allow up to 5 MB; all other endpoints are capped at 1 MB.
    A well-formed Content-Length header is checked first, then the streamed
    byte count (which alone applies to chunked or mislabelled requests),
    so an oversized body is never buffered in full.  Consumed bytes are cached
    on ``request._body`` for downstream handlers.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limit = _MAX_BODY_EVENT if _EVENT_PATH_MARKER in request.url.path else _MAX_BODY_DEFAULT
        limit_mb = limit // (1024 * 1024)

        content_length = _declared_length(request.headers.get("content-length"))
        if content_length is not None and content_length > limit:
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request body too large (max {limit_mb} MB)"},
            )

        if request.method in ("POST", "PUT", "PATCH"):
            chunks: list[bytes] = []
            total = 0
            async for chunk in request.stream():
                total += len(chunk)
                if total > limit:
                    return JSONResponse(
                        status_code=413,
                        content={"detail": f"Request body too large (max {limit_mb} MB)"},
                    )
                chunks.append(chunk)
            request._body = b"".join(chunks)  # noqa: SLF001

        return await call_next(request)
