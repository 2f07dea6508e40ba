"""Text generation capability interface."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from newsdesk.models.research import Image, Source
from newsdesk.models.settings import NewsSettings


class GenerationResult(BaseModel):
    """Response of a research query.

    Any field may be missing; callers apply their own defaults.
    """

    content: str | None = None
    sources: list[Source] | None = None
    images: list[Image] | None = None


class TextGenerator(ABC):
    """Abstract text generation / search capability."""

    @abstractmethod
    async def generate(self, query: str, settings: NewsSettings) -> GenerationResult:
        """
        Answer a research query.

        Args:
            query: Search query string
            settings: Per-run settings (may carry API overrides)

        Returns:
            GenerationResult with content, cited sources and images
        """
        pass

    @abstractmethod
    async def complete(self, prompt: str, settings: NewsSettings, system_prompt: str | None = None) -> str:
        """
        Run a raw prompt and return the generated text.

        Args:
            prompt: User prompt
            settings: Per-run settings (may carry API overrides)
            system_prompt: Optional system instruction

        Returns:
            Generated text
        """
        pass
