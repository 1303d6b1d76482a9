"""Pydantic models for API request/response."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class IssueRequest(BaseModel):
    """Request model for the roadmap issue form."""
    model_config = ConfigDict(populate_by_name=True)

    template_id: str = Field("", alias="templateId", description="Issue template ID")
    title: str = Field("", description="Issue title")
    field_values: dict[str, str] = Field(default_factory=dict, alias="fields", description="Template field values by field ID")


class ApiError(BaseModel):
    """Machine-readable error code plus human-readable message."""
    code: str
    message: str


class IssueResponse(BaseModel):
    """Response model for issue submission and every error body."""
    model_config = ConfigDict(populate_by_name=True)

    issue_url: Optional[str] = Field(None, alias="issueUrl", description="URL of the created issue")
    error: Optional[ApiError] = None
    debug_id: Optional[str] = Field(None, alias="debugId", description="Request ID for log lookup")
