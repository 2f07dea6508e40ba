"""OpenAI embedding provider."""

import structlog
from openai import AsyncOpenAI

from newsdesk.embeddings.base import EmbeddingProvider

logger = structlog.get_logger(__name__)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embedding provider using text-embedding-3-small."""

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimension: int = 1536,
        base_url: str | None = None,
    ):
        """
        Initialize OpenAI embedding provider.

        Args:
            api_key: OpenAI API key
            model: Model name
            dimension: Embedding dimension
            base_url: Optional OpenAI-compatible endpoint
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.dimension = dimension

    def _dimensions_arg(self) -> dict:
        # Only v3 models accept an explicit dimension
        return {"dimensions": self.dimension} if "3" in self.model else {}

    async def embed_text(self, text: str) -> list[float]:
        """Generate embedding for single text."""
        try:
            response = await self.client.embeddings.create(input=text, model=self.model, **self._dimensions_arg())
            return response.data[0].embedding
        except Exception as e:
            logger.error("Failed to generate embedding", error=str(e), model=self.model)
            raise

    def get_dimension(self) -> int:
        """Get embedding dimension."""
        return self.dimension
