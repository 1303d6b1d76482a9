"""Per-request ID assignment and structured access logging."""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    return uuid.uuid4().hex[:16]


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log one line when it finishes."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[override]
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip() or generate_request_id()
        request.state.request_id = request_id
        started = time.perf_counter()
        logger.debug("Request started", extra={
            "requestId": request_id,
            "method": request.method,
            "path": request.url.path,
            "origin": (request.headers.get("origin") or "").strip(),
        })

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error while processing request", extra={
                "requestId": request_id,
                "method": request.method,
                "path": request.url.path,
            })
            raise

        duration_ms = int((time.perf_counter() - started) * 1000)
        error_code = getattr(request.state, "error_code", None)
        template_id = getattr(request.state, "template_id", None)
        extra = {
            "requestId": request_id,
            "method": request.method,
            "path": request.url.path,
            "origin": (request.headers.get("origin") or "").strip(),
            "status": response.status_code,
            "durationMillis": duration_ms,
        }
        if template_id:
            extra["templateId"] = template_id
        if error_code:
            extra["errorCode"] = error_code

        if response.status_code >= 500:
            logger.error("Request finished", extra=extra)
        elif response.status_code >= 400:
            logger.warning("Request finished", extra=extra)
        else:
            logger.info("Request finished", extra=extra)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
