"""Issue tracker port — outbound interface to the issue host and project board."""

from typing import Protocol

from domain.model.issue import CreatedIssue


class IssueTrackerPort(Protocol):
    """Port for filing issues and linking them to the roadmap board.

    create_issue() raises IssueCreationError when the host rejects the issue.
    add_to_project() raises any exception on failure; the caller reports it
    as a partial success since the issue already exists.
    """

    def create_issue(self, title: str, labels: tuple[str, ...], body: str) -> CreatedIssue: ...

    def add_to_project(self, node_id: str) -> None: ...
