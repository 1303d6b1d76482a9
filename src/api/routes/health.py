"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Request

from api.dependencies import get_allow_list
from domain.model.origin import AllowList

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def describe_cors_mode(allow_list: AllowList) -> str:
    if allow_list.wildcard:
        return "wildcard"
    if allow_list.is_empty:
        return "closed"
    return "allow-list"


@router.get("")
async def health(
    request: Request,
    allow_list: AllowList = Depends(get_allow_list),
):
    """Health check with CORS policy and tracker wiring status."""
    tracker_configured = getattr(request.app.state, "issue_tracker", None) is not None
    return {
        "status": "healthy" if tracker_configured else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {
            "cors": {
                "mode": describe_cors_mode(allow_list),
                "originCount": len(allow_list.entries),
                "rejectedCount": len(allow_list.rejected),
            },
            "issueTracker": {
                "status": "configured" if tracker_configured else "not configured",
            },
        },
    }
