"""In-memory vector index (cosine similarity over numpy arrays)."""

from typing import Any

import numpy as np
import structlog

from newsdesk.embeddings.base import EmbeddingProvider
from newsdesk.vector.base import VectorDocument, VectorIndex, VectorMatch

logger = structlog.get_logger(__name__)


class InMemoryVectorIndex(VectorIndex):
    """Non-persistent index for development, tests and mock mode."""

    def __init__(self, embedding_provider: EmbeddingProvider):
        self.embedding_provider = embedding_provider
        self.documents: dict[str, VectorDocument] = {}
        self.vectors: dict[str, np.ndarray] = {}
        logger.info("In-memory vector index initialized")

    async def upsert(self, document: VectorDocument) -> None:
        embedding = await self.embedding_provider.embed_text(f"{document.title}\n{document.content}")
        self.documents[document.id] = document
        self.vectors[document.id] = np.asarray(embedding, dtype=np.float32)
        logger.debug("Upserted document", document_id=document.id, total=len(self.documents))

    async def query(self, text: str, top_k: int = 5) -> list[VectorMatch]:
        if not self.documents:
            return []

        query_vector = np.asarray(await self.embedding_provider.embed_text(text), dtype=np.float32)
        query_norm = np.linalg.norm(query_vector)

        scored = []
        for doc_id, vector in self.vectors.items():
            denom = query_norm * np.linalg.norm(vector)
            score = float(np.dot(query_vector, vector) / denom) if denom else 0.0
            scored.append((score, doc_id))

        # Stable on ties: insertion order
        scored.sort(key=lambda item: item[0], reverse=True)

        matches = []
        for score, doc_id in scored[:top_k]:
            document = self.documents[doc_id]
            matches.append(
                VectorMatch(
                    id=doc_id,
                    score=score,
                    title=document.title,
                    content=document.content,
                    metadata=document.metadata,
                )
            )
        return matches

    async def delete(self, document_id: str) -> None:
        self.documents.pop(document_id, None)
        self.vectors.pop(document_id, None)

    async def describe(self) -> dict[str, Any]:
        return {
            "type": "memory",
            "dimension": self.embedding_provider.get_dimension(),
            "total_vectors": len(self.documents),
        }
