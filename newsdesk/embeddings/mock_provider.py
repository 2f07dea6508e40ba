"""Mock embedding provider for offline runs."""

from __future__ import annotations

import hashlib
import re

from newsdesk.embeddings.base import EmbeddingProvider


class MockEmbeddingProvider(EmbeddingProvider):
    """Deterministic bag-of-words embeddings.

    Each token is hashed into a bucket, so texts sharing words get similar
    vectors without any model.
    """

    def __init__(self, dimension: int = 256) -> None:
        self.dimension = dimension

    async def embed_text(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in re.findall(r"\w+", text.lower()):
            digest = hashlib.md5(token.encode("utf-8")).digest()
            vector[int.from_bytes(digest[:4], "big") % self.dimension] += 1.0
        return vector

    def get_dimension(self) -> int:
        return self.dimension
