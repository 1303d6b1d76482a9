"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers and middleware catch them and map to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class UnknownTemplateError(ValidationError):
    """Requested issue template does not exist."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Unknown issue template: {template_id!r}")


class NormalizationError(DomainError):
    """An origin string could not be reduced to scheme://host[:port]."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid origin {value!r}: {reason}")


class IssueCreationError(DomainError):
    """The issue tracker failed to create the issue."""


class ProjectLinkError(DomainError):
    """The issue was created but could not be attached to the project board."""

    def __init__(self, issue_number: int, issue_url: str, cause: Exception | None = None):
        self.issue_number = issue_number
        self.issue_url = issue_url
        self.cause = cause
        super().__init__(f"Issue #{issue_number} created but not added to the project")
