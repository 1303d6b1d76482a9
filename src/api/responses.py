"""JSON response helpers shared by routes and middleware."""

from typing import Optional

from fastapi.responses import JSONResponse
from starlette.requests import Request

from api.models import ApiError, IssueResponse


def request_id_of(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def issue_response(
    request: Request,
    status_code: int,
    issue_url: Optional[str] = None,
    code: Optional[str] = None,
    message: Optional[str] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build an IssueResponse body, tagging it with the request ID."""
    body = IssueResponse(
        issue_url=issue_url,
        error=ApiError(code=code, message=message or "") if code else None,
        debug_id=request_id_of(request),
    )
    if code:
        # Picked up by the request logging middleware
        request.state.error_code = code
    return JSONResponse(
        content=body.model_dump(by_alias=True, exclude_none=True),
        status_code=status_code,
        headers=headers,
    )


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build the ``{"error": {"code", "message"}, "debugId"}`` body."""
    return issue_response(request, status_code, code=code, message=message, headers=headers)
