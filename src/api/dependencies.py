from fastapi import HTTPException, Request

from domain.model.origin import AllowList
from port.issue_tracker import IssueTrackerPort


def get_allow_list(request: Request) -> AllowList:
    return request.app.state.allow_list


def get_issue_tracker(request: Request) -> IssueTrackerPort:
    """Get the configured issue tracker, raising 503 if none is wired in."""
    tracker = getattr(request.app.state, "issue_tracker", None)
    if tracker is None:
        raise HTTPException(status_code=503, detail="Issue tracker unavailable")
    return tracker
