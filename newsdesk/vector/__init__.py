"""Vector index capability."""

from newsdesk.vector.base import VectorDocument, VectorIndex, VectorMatch
from newsdesk.vector.factory import create_vector_index
from newsdesk.vector.memory import InMemoryVectorIndex

__all__ = [
    "VectorDocument",
    "VectorIndex",
    "VectorMatch",
    "InMemoryVectorIndex",
    "create_vector_index",
]
