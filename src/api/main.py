"""FastAPI application entry point."""

import sys
import logging
import tomllib
from pathlib import Path
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before load_settings() reads them
load_dotenv()

# Add src to path
# main.py is at /app/src/api/main.py
# src is at /app/src, so we go up 2 levels
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.middleware.origin_guard import OriginGuardMiddleware
from api.middleware.request_log import RequestLogMiddleware
from api.responses import error_response
from api.routes import health, issues
from api.settings import Settings, load_settings
from port.issue_tracker import IssueTrackerPort
from services.origin_guard_service import build_allow_list, log_allow_list_summary
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "EOS Roadmap Intake API"

# Error codes for HTTP errors raised by FastAPI itself or by dependencies
HTTP_ERROR_CODES = {
    400: "invalid_request",
    404: "not_found",
    405: "method_not_allowed",
    503: "service_unavailable",
}


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    code = HTTP_ERROR_CODES.get(exc.status_code, "http_error")
    return error_response(request, exc.status_code, code, str(exc.detail), headers=exc.headers)


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid JSON"
    if errors and errors[0].get("type") != "json_invalid":
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return error_response(request, 400, "invalid_request", message)


def create_app(
    settings: Optional[Settings] = None,
    issue_tracker: Optional[IssueTrackerPort] = None,
) -> FastAPI:
    """Build the application with an allow-list computed once from settings.

    Each call returns an independent app, so tests can run side by side
    with different origin policies.
    """
    settings = settings or load_settings()

    allow_list = build_allow_list(settings.allowed_origin, settings.default_allowed_origin)
    log_allow_list_summary(allow_list)
    if issue_tracker is None:
        logger.warning("No issue tracker configured; POST /issues will answer 503")

    app = FastAPI(
        title=SERVICE_NAME,
        description="Turns roadmap web-form submissions into GitHub issues",
        version=VERSION,
    )
    app.state.settings = settings
    app.state.allow_list = allow_list
    app.state.issue_tracker = issue_tracker

    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # Last added runs first: request IDs must exist before the origin check
    app.add_middleware(OriginGuardMiddleware, allow_list=allow_list)
    app.add_middleware(RequestLogMiddleware)

    app.include_router(issues.router)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running",
            "repository": settings.github_repo,
        }

    return app


_settings = load_settings()

# Set up structured JSON logging
setup_structured_logging(_settings.log_level)

app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn
    # Disable uvicorn access logs; RequestLogMiddleware emits one line per request
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=_settings.port,
        access_log=False,
    )
