"""Application settings with environment variable support."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    These are process-level settings chosen at startup. Per-run research
    configuration (company profile, prompts, filters) lives in
    ``NewsSettings`` and arrives with each request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    # LLM Settings
    llm_mode: Literal["live", "mock"] = Field(default="live", description="LLM mode: live or mock")
    generation_model: str = Field(
        default="perplexity:sonar", description="Text generation model as provider:model"
    )
    generation_api_base: str = Field(
        default="https://api.perplexity.ai", description="OpenAI-compatible base URL for perplexity models"
    )
    generation_api_key: Optional[str] = Field(default=None, description="API key for the generation endpoint")
    generation_max_tokens: int = Field(default=1024, description="Generation max tokens")
    generation_temperature: float = Field(default=0.7, description="Generation temperature")

    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_base_url: Optional[str] = Field(default=None, description="OpenAI API base URL")
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic API key")

    # Embedding Settings
    embedding_provider: Literal["openai", "mock"] = Field(default="openai", description="Embedding provider")
    embedding_dimension: int = Field(default=1536, description="Embedding vector dimension")
    openai_embedding_model: str = Field(default="text-embedding-3-small", description="OpenAI embedding model")

    # Vector Store Settings
    vector_store: Literal["chroma", "memory"] = Field(default="chroma", description="Vector store backend")
    chroma_persist_directory: str = Field(default="./chroma_db", description="Chroma persistence directory")
    chroma_collection: str = Field(default="company_context", description="Chroma collection name")
    vector_top_k: int = Field(default=5, description="Matches used to build prompt context")

    # Prompt Log Settings
    prompt_log_store: Literal["sqlite", "memory"] = Field(default="sqlite", description="Prompt log backend")
    sqlite_db_path: str = Field(default="./data/newsdesk.sqlite", description="SQLite database path")

    # Pipeline Settings
    max_concurrent_tasks: int = Field(
        default=1, ge=1, description="Research tasks executed at once (1 keeps execution sequential)"
    )
    generate_outline: bool = Field(
        default=False, description="Ask the generator for the research outline instead of the fixed one"
    )
    max_pipeline_runs: int = Field(default=100, ge=1, description="Finished runs kept for status lookups")
    pipeline_run_ttl_seconds: int = Field(
        default=3600, ge=0, description="Seconds a finished run stays available for status lookups"
    )

    debug_mode: bool = Field(default=False, description="Enable debug logging")

    @property
    def mock_mode(self) -> bool:
        """True when offline implementations should back every capability."""
        return self.llm_mode == "mock"

    @property
    def database_url(self) -> str:
        """Construct async SQLite database URL."""
        return f"sqlite+aiosqlite:///{self.sqlite_db_path}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
