"""Data models shared across the pipeline, stores and API."""

from newsdesk.models.news import CategoryCount, DailySummary, NewsArticle, NewsFilter
from newsdesk.models.research import (
    Article,
    ArticleStatus,
    Image,
    PlanStatus,
    ResearchDepth,
    ResearchPlan,
    ResearchResult,
    ResearchSection,
    ResearchTask,
    ResultStatus,
    Source,
    TableOfContents,
    TaskPriority,
    TaskStatus,
)
from newsdesk.models.settings import NewsSettings, PromptLog, Provider

__all__ = [
    # Research
    "Article",
    "ArticleStatus",
    "Image",
    "PlanStatus",
    "ResearchDepth",
    "ResearchPlan",
    "ResearchResult",
    "ResearchSection",
    "ResearchTask",
    "ResultStatus",
    "Source",
    "TableOfContents",
    "TaskPriority",
    "TaskStatus",
    # Settings
    "NewsSettings",
    "PromptLog",
    "Provider",
    # News
    "CategoryCount",
    "DailySummary",
    "NewsArticle",
    "NewsFilter",
]
