"""Compiles research tasks into the final article."""

import structlog

from newsdesk.models.research import (
    Article,
    ArticleStatus,
    Image,
    ResearchTask,
    Source,
    TaskPriority,
)
from newsdesk.models.settings import NewsSettings

logger = structlog.get_logger(__name__)

MAX_ARTICLE_IMAGES = 3
ARTICLE_RELEVANCE_SCORE = 90


class ArticleCompiler:
    """Merges completed research results into one article.

    Tasks are ordered by priority (stable), each task becomes a ``## title``
    section built from its completed results. Sources are kept in order
    without deduplication; images are capped at ``MAX_ARTICLE_IMAGES``.
    """

    def compile(self, tasks: list[ResearchTask], settings: NewsSettings) -> Article:
        ordered = sorted(tasks, key=lambda task: task.priority.rank)
        high_priority = [task for task in ordered if task.priority == TaskPriority.HIGH]

        sections: list[str] = []
        sources: list[Source] = []
        images: list[Image] = []
        for task in ordered:
            completed = task.completed_results()
            merged = "\n\n".join(result.content for result in completed)
            sections.append(f"## {task.title}\n\n{merged}")
            for result in completed:
                sources.extend(result.sources)
                images.extend(result.images)

        article = Article(
            title=self._title(high_priority, settings),
            summary=self._summary(high_priority, settings),
            content="\n\n".join(sections),
            sources=sources,
            images=images[:MAX_ARTICLE_IMAGES],
            category=settings.industry or "General",
            relevance_score=ARTICLE_RELEVANCE_SCORE,
            status=ArticleStatus.PUBLISHED,
        )
        logger.info(
            "Article compiled",
            article_id=article.id,
            sections=len(sections),
            sources=len(article.sources),
            images=len(article.images),
        )
        return article

    def _title(self, high_priority: list[ResearchTask], settings: NewsSettings) -> str:
        industry = settings.industry or "Industry"
        if high_priority:
            return f"{industry} Update: {high_priority[0].title}"
        return f"{industry} News Update"

    def _summary(self, high_priority: list[ResearchTask], settings: NewsSettings) -> str:
        focus = " and ".join(task.title.lower() for task in high_priority)
        return (
            f"This article provides an overview of recent developments in the "
            f"{settings.industry or 'industry'}, focusing on {focus}."
        )
