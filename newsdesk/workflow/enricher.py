"""Context enrichment of base prompts."""

import structlog

from newsdesk.models.settings import NewsSettings, PromptLog, Provider
from newsdesk.prompt_logs.base import PromptLogStore
from newsdesk.vector.base import VectorIndex
from newsdesk.workflow.prompts import ARTICLE_JSON_INSTRUCTIONS

logger = structlog.get_logger(__name__)


def render_profile(settings: NewsSettings) -> str:
    """Textual rendering of the organization profile. Never empty."""
    return "\n".join(
        [
            f"Company Name: {settings.company_name or 'Your Company'}",
            f"Industry: {settings.industry or 'Technology'}",
            f"Key Products: {', '.join(settings.key_products) or 'Various products and services'}",
            f"Competitors: {', '.join(settings.competitors) or 'Various market competitors'}",
            f"Interests: {', '.join(settings.interests) or 'Industry trends, market developments'}",
        ]
    )


def lookup_text(settings: NewsSettings) -> str:
    """Composite string used for the similarity lookup."""
    parts = [
        settings.company_name or "",
        settings.industry or "",
        " ".join(settings.key_products),
        " ".join(settings.interests),
    ]
    return " ".join(part for part in parts if part)


def assemble_prompt(base_prompt: str, context: str, settings: NewsSettings) -> str:
    """Join prefix, context, base prompt, suffix and the JSON instructions."""
    blocks = []
    if settings.prompt_prefix:
        blocks.append(settings.prompt_prefix)
    blocks.append(f"CONTEXT:\n{context}")
    blocks.append(f"BASE PROMPT:\n{base_prompt}")
    if settings.prompt_suffix:
        blocks.append(settings.prompt_suffix)
    blocks.append(ARTICLE_JSON_INSTRUCTIONS)
    return "\n\n".join(blocks)


class ContextEnricher:
    """Augments base prompts with company context.

    Context comes from the vector index when it is enabled and returns
    matches, otherwise from the organization profile in the settings.
    Enrichment never raises; on any failure the base prompt is returned.
    """

    def __init__(
        self,
        vector_index: VectorIndex | None = None,
        log_store: PromptLogStore | None = None,
        provider: Provider = "perplexity",
        top_k: int = 5,
    ):
        """
        Initialize enricher.

        Args:
            vector_index: Index queried for context documents
            log_store: Store receiving prompt logs
            provider: Provider tag recorded in prompt logs
            top_k: Number of context matches to use
        """
        self.vector_index = vector_index
        self.log_store = log_store
        self.provider = provider
        self.top_k = top_k

    async def enhance(self, base_prompt: str, settings: NewsSettings) -> str:
        """Return the enhanced prompt for a base prompt."""
        enhanced, _ = await self.enhance_with_log(base_prompt, settings)
        return enhanced

    async def enhance_with_log(self, base_prompt: str, settings: NewsSettings) -> tuple[str, str | None]:
        """
        Enhance a base prompt and record a prompt log.

        Returns:
            Tuple of enhanced prompt and the prompt log id (None when no log
            was written)
        """
        try:
            context = await self.build_context(settings)
            enhanced = assemble_prompt(base_prompt, context, settings)
        except Exception as e:
            logger.error("Prompt enhancement failed, using base prompt", error=str(e))
            return base_prompt, None

        log_id = await self._record(base_prompt, enhanced, settings)
        return enhanced, log_id

    async def build_context(self, settings: NewsSettings) -> str:
        """Context block: vector matches, or the profile rendering."""
        if settings.vector_db_enabled and self.vector_index is not None:
            try:
                matches = await self.vector_index.query(lookup_text(settings), top_k=self.top_k)
                if matches:
                    logger.debug("Vector context found", matches=len(matches))
                    return "\n\n".join(f"{match.title}: {match.content}" for match in matches)
                logger.info("No vector context matches, using company profile")
            except Exception as e:
                logger.warning("Vector context lookup failed, using company profile", error=str(e))

        return render_profile(settings)

    async def _record(self, base_prompt: str, enhanced: str, settings: NewsSettings) -> str | None:
        if not settings.enable_prompt_logging or self.log_store is None:
            return None

        log = PromptLog(
            original_prompt=base_prompt,
            enhanced_prompt=enhanced,
            provider=self.provider,
            article_count=0,
            status="success",
        )
        try:
            await self.log_store.save(log)
        except Exception as e:
            logger.warning("Failed to save prompt log", error=str(e))
            return None
        return log.id
