"""News feed service."""

from collections import Counter
from datetime import datetime, timezone

import structlog

from newsdesk.llm.base import TextGenerator
from newsdesk.models.news import CategoryCount, DailySummary, NewsArticle, NewsFilter
from newsdesk.models.settings import NewsSettings
from newsdesk.news.parsing import parse_generated_articles, parse_published
from newsdesk.prompt_logs.base import PromptLogStore
from newsdesk.workflow.enricher import ContextEnricher
from newsdesk.workflow.prompts import NEWS_SYSTEM_PROMPT, get_base_prompt

logger = structlog.get_logger(__name__)

TOP_ARTICLES = 3


def sort_articles(
    articles: list[NewsArticle],
    sort_by: str = "relevance",
    sort_order: str | None = None,
) -> list[NewsArticle]:
    """
    Sort articles without modifying the input.

    Relevance and date sort descending, source ascending, unless
    ``sort_order`` overrides the direction. Unknown keys sort by relevance.
    """
    if sort_by == "date":
        key, descending = (lambda article: parse_published(article.published_at)), True
    elif sort_by == "source":
        key, descending = (lambda article: article.source.lower()), False
    else:
        key, descending = (lambda article: article.relevance_score), True

    if sort_order is not None:
        descending = sort_order == "desc"
    return sorted(articles, key=key, reverse=descending)


def _matches_search(article: NewsArticle, term: str) -> bool:
    needle = term.lower()
    fields = [article.title, article.summary, article.content, article.source, article.category]
    return any(needle in field.lower() for field in fields) or any(needle in tag.lower() for tag in article.tags)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def filter_articles(articles: list[NewsArticle], news_filter: NewsFilter) -> list[NewsArticle]:
    """Apply a dashboard filter: search, categories, sources, date range, minimum relevance."""
    filtered = []
    for article in articles:
        if news_filter.search and not _matches_search(article, news_filter.search):
            continue
        if news_filter.categories and article.category not in news_filter.categories:
            continue
        if news_filter.sources and article.source not in news_filter.sources:
            continue
        published = parse_published(article.published_at)
        if news_filter.date_from and published < _aware(news_filter.date_from):
            continue
        if news_filter.date_to and published > _aware(news_filter.date_to):
            continue
        if news_filter.min_relevance_score is not None and article.relevance_score < news_filter.min_relevance_score:
            continue
        filtered.append(article)
    return filtered


def process_articles(articles: list[NewsArticle], settings: NewsSettings) -> list[NewsArticle]:
    """Filter by trusted sources, minimum relevance and categories, then sort and limit."""
    processed = []
    for article in articles:
        if settings.filter_by_trusted_sources and settings.trusted_sources:
            if article.source not in settings.trusted_sources:
                continue
        if settings.min_relevance_score is not None and article.relevance_score < settings.min_relevance_score:
            continue
        if settings.categories and article.category not in settings.categories:
            continue
        processed.append(article)

    processed = sort_articles(processed, settings.sort_by)
    if settings.max_articles is not None and settings.max_articles > 0:
        processed = processed[: settings.max_articles]
    return processed


def generate_daily_summary(articles: list[NewsArticle]) -> DailySummary:
    """Digest with the top articles by relevance and per-category counts."""
    today = datetime.now(timezone.utc).date().isoformat()
    top_articles = sort_articles(articles, "relevance")[:TOP_ARTICLES]

    # Counter keeps first-seen order
    counts = Counter(article.category for article in articles)
    categories = [CategoryCount(name=name, count=count) for name, count in counts.items()]

    topics = ", ".join(category.name for category in categories[:3])
    summary = (
        f"Today's news highlights {len(top_articles)} key articles across {len(categories)} categories. "
        f"The most relevant topics include {topics}."
    )

    return DailySummary(
        id=f"summary-{today}",
        date=today,
        summary=summary,
        article_count=len(articles),
        top_articles=top_articles,
        categories=categories,
    )


class NewsService:
    """Fetches, scores and filters generated news for the dashboard feed."""

    def __init__(
        self,
        generator: TextGenerator,
        enricher: ContextEnricher,
        log_store: PromptLogStore | None = None,
    ):
        """
        Initialize news service.

        Args:
            generator: Text generator producing the article JSON
            enricher: Context enricher for the base prompt
            log_store: Store whose prompt log article counts are updated
        """
        self.generator = generator
        self.enricher = enricher
        self.log_store = log_store

    async def fetch_news(self, settings: NewsSettings) -> list[NewsArticle]:
        """Generate, parse and process news articles for the settings."""
        base_prompt = get_base_prompt(settings.base_prompt)
        enhanced_prompt, log_id = await self.enricher.enhance_with_log(base_prompt, settings)

        text = await self.generator.complete(enhanced_prompt, settings, system_prompt=NEWS_SYSTEM_PROMPT)
        articles = process_articles(parse_generated_articles(text, settings), settings)
        logger.info("News fetched", articles=len(articles), company=settings.company_name)

        if log_id and self.log_store is not None:
            try:
                await self.log_store.update_article_count(log_id, len(articles))
            except Exception as e:
                logger.warning("Failed to update prompt log article count", log_id=log_id, error=str(e))

        return articles

    async def refresh_news(
        self,
        settings: NewsSettings,
        news_filter: NewsFilter | None = None,
    ) -> tuple[list[NewsArticle], DailySummary]:
        """
        Fetch fresh news and build the daily summary.

        The summary covers every fetched article; the optional filter only
        narrows the returned list.
        """
        articles = await self.fetch_news(settings)
        summary = generate_daily_summary(articles)

        if news_filter is not None:
            articles = sort_articles(
                filter_articles(articles, news_filter), news_filter.sort_by, news_filter.sort_order
            )
        return articles, summary
