"""Breaks a research plan into research tasks."""

import structlog

from newsdesk.models.research import (
    ResearchDepth,
    ResearchPlan,
    ResearchSection,
    ResearchTask,
    TaskPriority,
    TaskStatus,
)
from newsdesk.models.settings import NewsSettings

logger = structlog.get_logger(__name__)


def priority_for_index(index: int) -> TaskPriority:
    """Priority of the section at a zero-based outline position."""
    if index < 2:
        return TaskPriority.HIGH
    if index < 4:
        return TaskPriority.MEDIUM
    return TaskPriority.LOW


def depth_for_priority(priority: TaskPriority) -> ResearchDepth:
    return ResearchDepth.DEEP if priority == TaskPriority.HIGH else ResearchDepth.STANDARD


SECTION_ROLES = {
    "industry overview": "industry",
    "competitor analysis": "competitors",
    "market opportunities": "opportunities",
    "regulatory changes": "regulation",
    "technology innovations": "technology",
}


def section_role(section: ResearchSection) -> str | None:
    """Known research role of a section, from its title; None for other sections."""
    return SECTION_ROLES.get(" ".join(section.title.lower().split()))


def search_queries(section: ResearchSection, settings: NewsSettings) -> list[str]:
    """
    Templated search queries for a section.

    Templates follow the section's role, so generated outlines get the same
    queries as the default one for the same topics.
    """
    company = settings.company_name or "the company"
    industry = settings.industry or "the industry"
    role = section_role(section)

    if role == "industry":
        return [
            f"Latest trends in {industry}",
            f"Current state of {industry} market",
            f"{industry} outlook 2023-2024",
        ]
    if role == "competitors":
        competitors = " OR ".join(settings.competitors) or f"{industry} competitors"
        return [
            f"{competitors} recent developments",
            f"{competitors} market strategy",
            f"{competitors} new products",
        ]
    if role == "opportunities":
        return [
            f"Emerging opportunities in {industry}",
            f"Growth areas for {company} in {industry}",
            f"Untapped markets in {industry}",
        ]
    if role == "regulation":
        return [
            f"{industry} regulation changes",
            f"New compliance requirements for {industry}",
            f"Regulatory impact on {industry}",
        ]
    if role == "technology":
        return [
            f"New technologies in {industry}",
            f"Technology disruption in {industry}",
            f"Innovation trends affecting {industry}",
        ]
    return [
        f"{section.title} in {industry}",
        f"{section.title} related to {company}",
    ]


class TaskDecomposer:
    """Maps each outline section to one research task, in outline order."""

    def decompose(self, plan: ResearchPlan, settings: NewsSettings) -> list[ResearchTask]:
        """
        Create research tasks for a plan.

        Raises:
            ValueError: If the plan has no table of contents
        """
        toc = getattr(plan, "table_of_contents", None)
        if toc is None or toc.sections is None:
            raise ValueError("Research plan has no table of contents")

        tasks = []
        for index, section in enumerate(toc.sections):
            priority = priority_for_index(index)
            tasks.append(
                ResearchTask(
                    id=f"task-{section.id}",
                    section_id=section.id,
                    title=section.title,
                    description=section.description,
                    priority=priority,
                    depth=depth_for_priority(priority),
                    status=TaskStatus.PENDING,
                    assigned_to=None,
                    search_queries=search_queries(section, settings),
                    results=[],
                )
            )

        logger.info("Research plan decomposed", plan_id=plan.id, tasks=len(tasks))
        return tasks
