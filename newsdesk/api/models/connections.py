"""Connection check and context document models."""

from typing import Any

from pydantic import Field

from newsdesk.models.research import CamelModel


class ConnectionStatus(CamelModel):
    """Result of a backend connection check."""

    connected: bool
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class VectorDocumentRequest(CamelModel):
    """Context document to store in the vector index."""

    id: str | None = Field(None, description="Document id; generated when omitted")
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorDocumentResponse(CamelModel):
    id: str
    status: str
