"""News feed models."""

from pydantic import Field

from newsdesk.models.news import DailySummary, NewsArticle, NewsFilter
from newsdesk.models.research import CamelModel
from newsdesk.models.settings import NewsSettings


class NewsRequest(CamelModel):
    """News refresh request."""

    settings: NewsSettings = Field(default_factory=NewsSettings)
    filter: NewsFilter | None = Field(None, description="Optional filter applied to the returned articles")


class NewsResponse(CamelModel):
    """Fetched articles with their daily summary."""

    articles: list[NewsArticle] = Field(default_factory=list)
    daily_summary: DailySummary
