"""Vector index factory."""

import structlog

from newsdesk.config.settings import Settings
from newsdesk.embeddings.base import EmbeddingProvider
from newsdesk.vector.base import VectorIndex
from newsdesk.vector.memory import InMemoryVectorIndex

logger = structlog.get_logger(__name__)


def create_vector_index(settings: Settings, embedding_provider: EmbeddingProvider) -> VectorIndex:
    """
    Create vector index based on configuration.

    Args:
        settings: Application settings
        embedding_provider: Provider used to embed documents and queries

    Returns:
        Configured VectorIndex instance
    """
    if settings.vector_store == "memory" or settings.mock_mode:
        logger.info("Creating InMemoryVectorIndex")
        return InMemoryVectorIndex(embedding_provider)

    if settings.vector_store == "chroma":
        from newsdesk.vector.chroma import ChromaVectorIndex

        logger.info("Creating ChromaVectorIndex", persist_directory=settings.chroma_persist_directory)
        return ChromaVectorIndex(
            embedding_provider,
            persist_directory=settings.chroma_persist_directory,
            collection_name=settings.chroma_collection,
        )

    raise ValueError(f"Unknown vector store: {settings.vector_store}. Supported: chroma, memory")
