"""API routes."""

from newsdesk.api.routes.config import router as config_router
from newsdesk.api.routes.connections import router as connections_router
from newsdesk.api.routes.health import router as health_router
from newsdesk.api.routes.news import router as news_router
from newsdesk.api.routes.pipeline import router as pipeline_router
from newsdesk.api.routes.prompt_logs import router as prompt_logs_router
from newsdesk.api.routes.prompts import router as prompts_router
from newsdesk.api.routes.vector import router as vector_router

__all__ = [
    "health_router",
    "config_router",
    "pipeline_router",
    "prompt_logs_router",
    "prompts_router",
    "news_router",
    "connections_router",
    "vector_router",
]
