"""In-memory implementation of IssueTrackerPort for testing."""

from domain.model.errors import IssueCreationError
from domain.model.issue import CreatedIssue


class FakeIssueTracker:
    """Records created issues and project links; failures are switchable."""

    def __init__(
        self,
        base_url: str = "https://github.com/example/roadmap/issues",
        fail_create: bool = False,
        fail_project: bool = False,
        omit_node_id: bool = False,
    ):
        self.base_url = base_url.rstrip("/")
        self.fail_create = fail_create
        self.fail_project = fail_project
        self.omit_node_id = omit_node_id
        self.issues: list[dict] = []
        self.project_items: list[str] = []

    def create_issue(self, title: str, labels: tuple[str, ...], body: str) -> CreatedIssue:
        if self.fail_create:
            raise IssueCreationError("unexpected status 422")

        number = len(self.issues) + 1
        self.issues.append({
            'number': number,
            'title': title,
            'labels': list(labels),
            'body': body,
        })
        node_id = '' if self.omit_node_id else f"I_fake{number}"
        return CreatedIssue(
            number=number,
            html_url=f"{self.base_url}/{number}",
            node_id=node_id,
        )

    def add_to_project(self, node_id: str) -> None:
        if self.fail_project:
            raise RuntimeError("project mutation failed")
        self.project_items.append(node_id)
