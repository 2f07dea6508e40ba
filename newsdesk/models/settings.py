"""Per-run research configuration and prompt log records."""

from typing import Literal

from pydantic import Field

from newsdesk.models.research import CamelModel, new_id, utc_now_iso

Provider = Literal["perplexity", "openai", "anthropic"]


class NewsSettings(CamelModel):
    """Dashboard settings consumed by the pipeline.

    Every field is optional; components apply their own documented defaults.
    """

    # API overrides for the generation capability
    api_key: str | None = None
    api_endpoint: str | None = None
    model: str | None = None
    max_tokens: int | None = None
    temperature: float | None = None

    # Prompt configuration
    base_prompt: str | None = None
    prompt_prefix: str | None = None
    prompt_suffix: str | None = None

    vector_db_enabled: bool = False

    # Company context
    company_name: str | None = None
    industry: str | None = None
    key_products: list[str] = Field(default_factory=list)
    competitors: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)

    # Filtering and sorting
    trusted_sources: list[str] = Field(default_factory=list)
    filter_by_trusted_sources: bool = False
    min_relevance_score: float | None = None
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    max_articles: int | None = None
    sort_by: Literal["relevance", "date", "source"] = "relevance"

    # Prompt logging
    enable_prompt_logging: bool = False
    prompt_log_retention_days: int = 30


class PromptLog(CamelModel):
    """Audit record of one prompt enhancement."""

    id: str = Field(default_factory=lambda: new_id("log"))
    timestamp: str = Field(default_factory=utc_now_iso)
    original_prompt: str
    enhanced_prompt: str
    provider: Provider = "perplexity"
    article_count: int = 0
    status: Literal["success", "error"] = "success"
    error_message: str | None = None
