"""Configuration models."""

from pydantic import BaseModel, Field


class ConfigResponse(BaseModel):
    """Application configuration response."""

    llm_mode: str = Field(..., description="LLM mode (live, mock)")
    generation_model: str = Field(..., description="Text generation model as provider:model")
    embedding_provider: str = Field(..., description="Embedding provider (openai, mock)")
    vector_store: str = Field(..., description="Vector store backend (chroma, memory)")
    prompt_log_store: str = Field(..., description="Prompt log backend (sqlite, memory)")
    max_concurrent_tasks: int = Field(..., description="Research tasks executed at once")
    vector_top_k: int = Field(..., description="Context matches used for prompt enrichment")
    generate_outline: bool = Field(..., description="Whether research outlines are generated")
