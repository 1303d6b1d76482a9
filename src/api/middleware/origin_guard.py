"""CORS origin guard middleware.

Applies the allow-list decision to every request:
- No Origin header: same-origin or non-browser caller, passed through untouched
  (bare OPTIONS requests get an empty 204).
- Origin not allowed: 403 with a ``forbidden_origin`` error and no CORS headers.
- Origin allowed: CORS headers added; OPTIONS preflights answered with 204.
"""

import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT, HTTP_403_FORBIDDEN

from api.responses import error_response
from api.settings import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_MAX_AGE_SECONDS
from domain.model.origin import WILDCARD, AllowList

logger = logging.getLogger(__name__)


def cors_headers(allow_list: AllowList, origin: str) -> dict[str, str]:
    """Headers for an allowed origin; echoes the literal header value in allow-list mode."""
    headers = {}
    if allow_list.wildcard:
        headers["Access-Control-Allow-Origin"] = WILDCARD
    else:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
    headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
    headers["Access-Control-Max-Age"] = str(CORS_MAX_AGE_SECONDS)
    return headers


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject cross-origin requests from origins outside the allow-list."""

    def __init__(self, app: Callable, allow_list: AllowList) -> None:
        super().__init__(app)
        self.allow_list = allow_list

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[override]
        origin = (request.headers.get("origin") or "").strip()
        if not origin:
            if request.method == "OPTIONS":
                return Response(status_code=HTTP_204_NO_CONTENT)
            return await call_next(request)

        if not self.allow_list.is_allowed(origin):
            logger.warning("Rejected request from disallowed origin", extra={
                "origin": origin,
                "method": request.method,
                "path": request.url.path,
            })
            return error_response(
                request,
                HTTP_403_FORBIDDEN,
                "forbidden_origin",
                f"Origin not allowed: {origin}",
            )

        headers = cors_headers(self.allow_list, origin)
        if request.method == "OPTIONS":
            return Response(status_code=HTTP_204_NO_CONTENT, headers=headers)

        response = await call_next(request)
        for name, value in headers.items():
            response.headers[name] = value
        return response
