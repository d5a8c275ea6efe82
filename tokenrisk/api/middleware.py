"""Response headers and access logging for the JSON API."""

from __future__ import annotations

import time

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

# Analyses go stale within minutes; only the index and health are cacheable
_NO_STORE_PREFIXES = ("/api/check-", "/api/token-lists", "/api/categories")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """JSON-only API: no framing, no sniffing, no inline content."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        response.headers["X-Response-Time"] = f"{elapsed_ms:.0f}ms"
        if request.url.path.startswith(_NO_STORE_PREFIXES):
            response.headers["Cache-Control"] = "no-store"

        logger.debug(
            f"[API] {request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.0f}ms)"
        )
        return response
