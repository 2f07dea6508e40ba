"""ChromaDB-backed vector index."""

from typing import Any

import chromadb
import structlog

from newsdesk.embeddings.base import EmbeddingProvider
from newsdesk.vector.base import VectorDocument, VectorIndex, VectorMatch

logger = structlog.get_logger(__name__)


class ChromaVectorIndex(VectorIndex):
    """Persistent Chroma collection of company context documents."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        persist_directory: str = "./chroma_db",
        collection_name: str = "company_context",
        client: Any = None,
    ):
        """Initialize ChromaDB client and collection."""
        self.embedding_provider = embedding_provider
        self.client = client or chromadb.PersistentClient(path=persist_directory)
        self.collection = self.client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )
        logger.info(
            "Chroma vector index initialized",
            persist_directory=persist_directory,
            collection=collection_name,
        )

    async def upsert(self, document: VectorDocument) -> None:
        embedding = await self.embedding_provider.embed_text(f"{document.title}\n{document.content}")
        metadata = {
            key: value
            for key, value in document.metadata.items()
            if isinstance(value, (str, int, float, bool))
        }
        metadata["title"] = document.title

        self.collection.upsert(
            ids=[document.id],
            embeddings=[embedding],
            documents=[document.content],
            metadatas=[metadata],
        )
        logger.debug("Upserted document to Chroma", document_id=document.id)

    async def query(self, text: str, top_k: int = 5) -> list[VectorMatch]:
        embedding = await self.embedding_provider.embed_text(text)
        results = self.collection.query(query_embeddings=[embedding], n_results=top_k)

        matches = []
        if results["ids"] and len(results["ids"][0]) > 0:
            for i, doc_id in enumerate(results["ids"][0]):
                metadata = results["metadatas"][0][i] or {}
                matches.append(
                    VectorMatch(
                        id=doc_id,
                        score=1.0 - results["distances"][0][i],
                        title=metadata.get("title") or "Untitled",
                        content=results["documents"][0][i] or "",
                        metadata=metadata,
                    )
                )
        return matches

    async def delete(self, document_id: str) -> None:
        self.collection.delete(ids=[document_id])
        logger.debug("Deleted document from Chroma", document_id=document_id)

    async def describe(self) -> dict[str, Any]:
        return {
            "type": "chroma",
            "total_vectors": self.collection.count(),
            "collection_name": self.collection.name,
        }
