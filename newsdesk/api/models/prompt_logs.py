"""Prompt log viewer models."""

from pydantic import Field

from newsdesk.models.research import CamelModel
from newsdesk.models.settings import PromptLog


class PromptLogListResponse(CamelModel):
    """Prompt logs, newest first."""

    logs: list[PromptLog] = Field(default_factory=list)
    count: int = Field(default=0, description="Number of logs returned")


class PromptLogDeleteResponse(CamelModel):
    """Result of deleting expired prompt logs."""

    deleted: int = Field(..., description="Number of deleted logs")
    retention_days: int = Field(..., description="Retention window applied")
