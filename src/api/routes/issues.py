"""Roadmap issue intake route.

- POST /issues: validate the form against its template, file the issue,
  and attach it to the project board.

Flow:
    Browser form → POST /issues → create issue → add to board → { issueUrl }
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_issue_tracker
from api.models import IssueRequest
from api.responses import error_response, issue_response
from domain.model.errors import IssueCreationError, UnknownTemplateError, ValidationError
from port.issue_tracker import IssueTrackerPort
from services.issue_submission_service import submit_issue

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/issues", tags=["issues"])


@router.post("")
async def create_issue(
    payload: IssueRequest,
    request: Request,
    tracker: IssueTrackerPort = Depends(get_issue_tracker),
) -> JSONResponse:
    """File a roadmap issue from a web form submission."""
    request.state.template_id = payload.template_id

    try:
        result = submit_issue(payload.template_id, payload.title, payload.field_values, tracker)
    except UnknownTemplateError:
        return error_response(request, 400, "invalid_template", "Invalid template")
    except ValidationError as e:
        return error_response(request, 400, "invalid_request", str(e))
    except IssueCreationError as e:
        logger.error("GitHub issue creation failed", extra={
            "templateId": payload.template_id,
            "error": str(e),
        })
        return error_response(request, 502, "github_issue_error", "Could not create the GitHub issue")

    if not result.linked_to_project:
        return issue_response(
            request,
            200,
            issue_url=result.issue.html_url,
            code="github_project_error",
            message="Issue created but could not be added to the project",
        )

    return issue_response(request, 200, issue_url=result.issue.html_url)
