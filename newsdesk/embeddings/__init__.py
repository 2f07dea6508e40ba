"""Embedding providers."""

from newsdesk.embeddings.base import EmbeddingProvider
from newsdesk.embeddings.factory import create_embedding_provider
from newsdesk.embeddings.mock_provider import MockEmbeddingProvider

__all__ = ["EmbeddingProvider", "MockEmbeddingProvider", "create_embedding_provider"]
