"""FastAPI application initialization and configuration."""

import asyncio
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from newsdesk import __version__
from newsdesk.api.routes import (
    config_router,
    connections_router,
    health_router,
    news_router,
    pipeline_router,
    prompt_logs_router,
    prompts_router,
    vector_router,
)
from newsdesk.config.logging_config import configure_logging
from newsdesk.config.settings import get_settings
from newsdesk.database.connection import create_session_factory, create_sqlite_engine, create_tables
from newsdesk.embeddings.factory import create_embedding_provider
from newsdesk.llm.factory import create_text_generator
from newsdesk.news.service import NewsService
from newsdesk.prompt_logs.factory import create_prompt_log_store
from newsdesk.vector.factory import create_vector_index
from newsdesk.workflow.dependencies import PipelineDependencies

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.debug_mode)

    # Startup
    logger.info("Starting up newsdesk API...", llm_mode=settings.llm_mode)

    # Initialize prompt log storage
    engine = None
    session_factory = None
    if settings.prompt_log_store == "sqlite" and not settings.mock_mode:
        logger.info("Initializing database connection...")
        engine = create_sqlite_engine(settings)
        await create_tables(engine)
        session_factory = create_session_factory(engine)
    app.state.engine = engine
    prompt_log_store = create_prompt_log_store(settings, session_factory)

    # Initialize embedding provider and vector index
    logger.info("Initializing embedding provider...", provider=settings.embedding_provider)
    embedding_provider = create_embedding_provider(settings)
    vector_index = create_vector_index(settings, embedding_provider)

    # Initialize text generator and pipeline
    logger.info("Initializing text generator...", model=settings.generation_model)
    generator = create_text_generator(settings)

    dependencies = PipelineDependencies(
        settings=settings,
        generator=generator,
        vector_index=vector_index,
        log_store=prompt_log_store,
    )
    enricher = dependencies.create_enricher()

    app.state.settings = settings
    app.state.dependencies = dependencies
    app.state.prompt_log_store = prompt_log_store
    app.state.vector_index = vector_index
    app.state.enricher = enricher
    app.state.orchestrator = dependencies.create_orchestrator()
    app.state.news_service = NewsService(generator, enricher, log_store=prompt_log_store)

    # Run registry for status and cancellation
    app.state.pipeline_runs = {}
    app.state.cancel_tokens = {}
    app.state.active_tasks: dict[str, asyncio.Task] = {}

    logger.info(
        "newsdesk API started successfully",
        max_concurrent_tasks=settings.max_concurrent_tasks,
        mock_mode=settings.mock_mode,
    )

    yield

    # Shutdown
    logger.info("Shutting down newsdesk API...")

    for task in list(app.state.active_tasks.values()):
        task.cancel()

    if app.state.engine is not None:
        await app.state.engine.dispose()

    logger.info("newsdesk API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title="newsdesk API",
        description="Multi-agent news research pipeline with prompt enrichment and prompt logging",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Run-ID"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(config_router)
    app.include_router(pipeline_router)
    app.include_router(prompt_logs_router)
    app.include_router(prompts_router)
    app.include_router(news_router)
    app.include_router(connections_router)
    app.include_router(vector_router)

    logger.info("FastAPI app created")

    return app


# Create app instance
app = create_app()
