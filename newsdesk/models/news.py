"""News feed models."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from newsdesk.models.research import CamelModel, utc_now_iso

DEFAULT_IMAGE_URL = "https://images.unsplash.com/photo-1504711434969-e33886168f5c"


class NewsArticle(CamelModel):
    """Article parsed from a generated news response."""

    id: str
    title: str = "Untitled Article"
    summary: str = ""
    content: str = ""
    url: str = ""
    source: str = "Unknown Source"
    source_url: str = ""
    image_url: str = DEFAULT_IMAGE_URL
    relevance_score: float = 0
    published_at: str = Field(default_factory=utc_now_iso)
    scraped_at: str = Field(default_factory=utc_now_iso)
    category: str = "Uncategorized"
    tags: list[str] = Field(default_factory=list)
    suggestion: str = ""
    is_bookmarked: bool = False


class NewsFilter(CamelModel):
    """Client-side filter over fetched articles."""

    search: str = ""
    categories: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    date_from: datetime | None = None
    date_to: datetime | None = None
    min_relevance_score: float | None = None
    sort_by: Literal["relevance", "date", "source"] = "relevance"
    # None keeps each field's natural direction (relevance/date desc, source asc)
    sort_order: Literal["asc", "desc"] | None = None


class CategoryCount(CamelModel):
    name: str
    count: int


class DailySummary(CamelModel):
    """Digest of a batch of articles."""

    id: str
    date: str
    summary: str
    article_count: int
    top_articles: list[NewsArticle] = Field(default_factory=list)
    categories: list[CategoryCount] = Field(default_factory=list)
