"""Configuration endpoint."""

from fastapi import APIRouter, Request

from newsdesk.api.models.config import ConfigResponse
from newsdesk.config.settings import Settings

router = APIRouter(prefix="/api", tags=["config"])


@router.get("/config", response_model=ConfigResponse)
async def get_config(request: Request) -> ConfigResponse:
    """Get application configuration."""
    settings: Settings = request.app.state.settings

    return ConfigResponse(
        llm_mode=settings.llm_mode,
        generation_model=settings.generation_model,
        embedding_provider="mock" if settings.mock_mode else settings.embedding_provider,
        vector_store="memory" if settings.mock_mode else settings.vector_store,
        prompt_log_store="memory" if settings.mock_mode else settings.prompt_log_store,
        max_concurrent_tasks=settings.max_concurrent_tasks,
        vector_top_k=settings.vector_top_k,
        generate_outline=settings.generate_outline,
    )
