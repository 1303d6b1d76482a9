"""Issue submission service — turns a roadmap form into a tracked issue.

API-side flow: template lookup → validate → create issue → link to board
"""

import logging

from domain.model.errors import IssueCreationError, ProjectLinkError, ValidationError
from domain.model.issue import CreatedIssue, IssueDraft, SubmissionResult, get_template
from port.issue_tracker import IssueTrackerPort

logger = logging.getLogger(__name__)


def prepare_issue(template_id: str, title: str, fields: dict[str, str] | None) -> IssueDraft:
    """Validate a form submission against its template.

    Raises UnknownTemplateError or ValidationError.
    """
    template = get_template(template_id)

    clean_title = (title or '').strip()
    if not clean_title:
        raise ValidationError("Title is required")

    clean_fields = {key: (value or '').strip() for key, value in (fields or {}).items()}
    body = template.render_body(clean_fields)

    return IssueDraft(
        template_id=template.id,
        title=clean_title,
        labels=template.labels,
        body=body,
    )


def submit_issue(
    template_id: str,
    title: str,
    fields: dict[str, str] | None,
    tracker: IssueTrackerPort,
) -> SubmissionResult:
    """Create the issue and attach it to the project board.

    Returns a SubmissionResult; ``project_error`` is set when the board
    link failed after the issue was created.
    Raises ValidationError or IssueCreationError.
    """
    draft = prepare_issue(template_id, title, fields)
    logger.info("Issue submission requested", extra={"templateId": draft.template_id})

    issue = _create_issue(tracker, draft)
    logger.info("Issue created", extra={"issueNumber": issue.number, "issueUrl": issue.html_url})

    try:
        _link_to_project(tracker, issue)
    except ProjectLinkError as e:
        logger.error("Failed to add issue to project", extra={
            "issueNumber": e.issue_number,
            "error": str(e.cause),
        })
        return SubmissionResult(issue=issue, project_error=str(e))

    return SubmissionResult(issue=issue)


def _create_issue(tracker: IssueTrackerPort, draft: IssueDraft) -> CreatedIssue:
    """Create issue or raise IssueCreationError."""
    try:
        issue = tracker.create_issue(draft.title, draft.labels, draft.body)
    except IssueCreationError:
        raise
    except Exception as e:
        raise IssueCreationError(f"Issue tracker error: {e}") from e

    if not issue.node_id.strip():
        raise IssueCreationError("Issue tracker response without node_id")
    return issue


def _link_to_project(tracker: IssueTrackerPort, issue: CreatedIssue) -> None:
    """Add issue to the project board or raise ProjectLinkError."""
    try:
        tracker.add_to_project(issue.node_id)
    except Exception as e:
        raise ProjectLinkError(issue.number, issue.html_url, cause=e) from e
