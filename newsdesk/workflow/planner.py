"""Research planning."""

import json
import re
from typing import Any

import structlog

from newsdesk.llm.base import TextGenerator
from newsdesk.models.research import PlanStatus, ResearchPlan, ResearchSection, TableOfContents
from newsdesk.models.settings import NewsSettings
from newsdesk.workflow.enricher import ContextEnricher
from newsdesk.workflow.prompts import OUTLINE_PROMPT, get_base_prompt

logger = structlog.get_logger(__name__)

DEFAULT_SECTIONS: tuple[ResearchSection, ...] = (
    ResearchSection(
        id="section-1",
        title="Industry Overview",
        description="Current state of the industry and major trends",
    ),
    ResearchSection(
        id="section-2",
        title="Competitor Analysis",
        description="Recent developments from major competitors",
    ),
    ResearchSection(
        id="section-3",
        title="Market Opportunities",
        description="Emerging opportunities and potential growth areas",
    ),
    ResearchSection(
        id="section-4",
        title="Regulatory Changes",
        description="Recent and upcoming regulatory changes affecting the industry",
    ),
    ResearchSection(
        id="section-5",
        title="Technology Innovations",
        description="New technologies and innovations relevant to the business",
    ),
)


def default_outline(settings: NewsSettings) -> TableOfContents:
    """Fixed five-section outline."""
    return TableOfContents(
        title=f"Research Plan for {settings.company_name or 'Your Company'}",
        sections=DEFAULT_SECTIONS,
    )


def parse_outline(text: str, fallback_title: str) -> TableOfContents | None:
    """
    Parse a generated JSON outline.

    Sections get positional ids (``section-1``...).

    Returns:
        TableOfContents, or None when the text holds no usable outline
    """
    match = re.search(r"\{.*\}", text, re.DOTALL)
    if not match:
        return None
    try:
        data: Any = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    sections = []
    for item in data.get("sections") or []:
        if not isinstance(item, dict) or not item.get("title"):
            continue
        sections.append(
            ResearchSection(
                id=f"section-{len(sections) + 1}",
                title=str(item["title"]).strip(),
                description=str(item.get("description") or "").strip(),
            )
        )
    if not sections:
        return None

    return TableOfContents(title=str(data.get("title") or fallback_title), sections=tuple(sections))


class ResearchPlanner:
    """Produces the research plan for a pipeline run."""

    def __init__(
        self,
        enricher: ContextEnricher,
        generator: TextGenerator | None = None,
        generate_outline: bool = False,
    ):
        """
        Initialize planner.

        Args:
            enricher: Context enricher for the base prompt
            generator: Text generator used for generated outlines
            generate_outline: Ask the generator for the outline
        """
        self.enricher = enricher
        self.generator = generator
        self.generate_outline = generate_outline

    async def plan(self, settings: NewsSettings) -> ResearchPlan:
        """
        Create a research plan.

        Errors from enrichment or outline generation propagate.
        """
        base_prompt = get_base_prompt(settings.base_prompt)
        enhanced_prompt = await self.enricher.enhance(base_prompt, settings)

        outline = default_outline(settings)
        if self.generate_outline and self.generator is not None:
            outline = await self._generated_outline(enhanced_prompt, settings, outline)

        plan = ResearchPlan(
            original_prompt=enhanced_prompt,
            table_of_contents=outline,
            status=PlanStatus.CREATED,
        )
        logger.info("Research plan created", plan_id=plan.id, sections=len(outline.sections))
        return plan

    async def _generated_outline(
        self, enhanced_prompt: str, settings: NewsSettings, fallback: TableOfContents
    ) -> TableOfContents:
        text = await self.generator.complete(OUTLINE_PROMPT.format(enhanced_prompt=enhanced_prompt), settings)
        outline = parse_outline(text, fallback.title)
        if outline is None:
            logger.warning("Generated outline unusable, using default outline", preview=text[:200])
            return fallback
        return outline
