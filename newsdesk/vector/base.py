"""Vector index interface for company context lookup."""

from abc import ABC, abstractmethod
from typing import Any

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger(__name__)


class VectorDocument(BaseModel):
    """Context document stored in the index."""

    id: str
    title: str
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorMatch(BaseModel):
    """Similarity lookup match."""

    id: str
    score: float
    title: str = "Untitled"
    content: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorIndex(ABC):
    """Abstract base class for vector index implementations."""

    @abstractmethod
    async def query(self, text: str, top_k: int = 5) -> list[VectorMatch]:
        """
        Find documents similar to a text.

        Args:
            text: Query text
            top_k: Number of matches to return

        Returns:
            Matches ordered by descending score
        """
        pass

    @abstractmethod
    async def upsert(self, document: VectorDocument) -> None:
        """Insert or replace a document."""
        pass

    @abstractmethod
    async def delete(self, document_id: str) -> None:
        """Delete a document by id."""
        pass

    @abstractmethod
    async def describe(self) -> dict[str, Any]:
        """Get index statistics."""
        pass

    async def check_connection(self) -> bool:
        """Check the index is reachable."""
        try:
            await self.describe()
            return True
        except Exception as e:
            logger.error("Vector index connection check failed", error=str(e))
            return False
