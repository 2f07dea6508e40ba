"""Prompt log store factory."""

import structlog
from sqlalchemy.ext.asyncio import async_sessionmaker

from newsdesk.config.settings import Settings
from newsdesk.prompt_logs.base import PromptLogStore
from newsdesk.prompt_logs.memory import InMemoryPromptLogStore
from newsdesk.prompt_logs.sql import SQLPromptLogStore

logger = structlog.get_logger(__name__)


def create_prompt_log_store(
    settings: Settings,
    session_factory: async_sessionmaker | None = None,
) -> PromptLogStore:
    """
    Create prompt log store based on configuration.

    Args:
        settings: Application settings
        session_factory: Session factory, required for the sqlite store

    Returns:
        Configured PromptLogStore instance
    """
    if settings.prompt_log_store == "memory" or settings.mock_mode:
        logger.info("Creating InMemoryPromptLogStore")
        return InMemoryPromptLogStore()

    if settings.prompt_log_store == "sqlite":
        if session_factory is None:
            raise ValueError("A database session factory is required for the sqlite prompt log store")
        logger.info("Creating SQLPromptLogStore", db_path=settings.sqlite_db_path)
        return SQLPromptLogStore(session_factory)

    raise ValueError(f"Unknown prompt log store: {settings.prompt_log_store}. Supported: sqlite, memory")
