"""News feed."""

from newsdesk.news.parsing import calculate_relevance_score, parse_generated_articles
from newsdesk.news.service import (
    NewsService,
    filter_articles,
    generate_daily_summary,
    process_articles,
    sort_articles,
)

__all__ = [
    "NewsService",
    "calculate_relevance_score",
    "filter_articles",
    "generate_daily_summary",
    "parse_generated_articles",
    "process_articles",
    "sort_articles",
]
