"""Tests for prompt log stores (in-memory and SQLite)."""

from datetime import datetime, timedelta, timezone
from typing import get_type_hints

import pytest

from newsdesk.config.settings import Settings
from newsdesk.database.connection import create_session_factory, create_sqlite_engine, create_tables
from newsdesk.models.settings import PromptLog
from newsdesk.prompt_logs.base import PromptLogStore
from newsdesk.prompt_logs.factory import create_prompt_log_store
from newsdesk.prompt_logs.memory import InMemoryPromptLogStore
from newsdesk.prompt_logs.sql import SQLPromptLogStore


def _days_ago(days: float) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()


def _log(log_id: str, days: float, provider="perplexity", original="Find news", enhanced="CONTEXT: HPC") -> PromptLog:
    return PromptLog(
        id=log_id,
        timestamp=_days_ago(days),
        original_prompt=original,
        enhanced_prompt=enhanced,
        provider=provider,
    )


async def _make_store(kind: str, tmp_path):
    if kind == "memory":
        return InMemoryPromptLogStore(), None

    settings = Settings(prompt_log_store="sqlite", sqlite_db_path=str(tmp_path / "logs.sqlite"))
    engine = create_sqlite_engine(settings)
    await create_tables(engine)
    return SQLPromptLogStore(create_session_factory(engine)), engine


STORE_KINDS = ["memory", "sqlite"]


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", STORE_KINDS)
async def test_list_newest_first_with_limit_and_provider(kind, tmp_path):
    store, engine = await _make_store(kind, tmp_path)
    try:
        await store.save(_log("old", 3))
        await store.save(_log("new", 1, provider="openai"))
        await store.save(_log("mid", 2))

        assert [log.id for log in await store.list_logs()] == ["new", "mid", "old"]
        assert [log.id for log in await store.list_logs(limit=2)] == ["new", "mid"]
        assert [log.id for log in await store.list_logs(provider="perplexity")] == ["mid", "old"]
    finally:
        if engine is not None:
            await engine.dispose()


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", STORE_KINDS)
async def test_update_article_count(kind, tmp_path):
    store, engine = await _make_store(kind, tmp_path)
    try:
        await store.save(_log("log-1", 0))
        await store.update_article_count("log-1", 12)
        await store.update_article_count("missing", 3)

        logs = await store.list_logs()
        assert len(logs) == 1
        assert logs[0].article_count == 12
    finally:
        if engine is not None:
            await engine.dispose()


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", STORE_KINDS)
async def test_delete_older_than_retention(kind, tmp_path):
    store, engine = await _make_store(kind, tmp_path)
    try:
        await store.save(_log("expired", 45))
        await store.save(_log("kept", 5))

        assert await store.delete_older_than(30) == 1
        assert [log.id for log in await store.list_logs()] == ["kept"]
    finally:
        if engine is not None:
            await engine.dispose()


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", STORE_KINDS)
async def test_search_is_case_insensitive_over_both_prompts(kind, tmp_path):
    store, engine = await _make_store(kind, tmp_path)
    try:
        await store.save(_log("a", 2, original="Bitcoin mining efficiency"))
        await store.save(_log("b", 1, enhanced="Context about ENERGY storage"))
        await store.save(_log("c", 3, original="Unrelated", enhanced="Nothing here"))

        assert [log.id for log in await store.search("bitcoin")] == ["a"]
        assert [log.id for log in await store.search("energy")] == ["b"]
        assert len(await store.search("n", limit=2)) == 2
        assert await store.check_connection() is True
    finally:
        if engine is not None:
            await engine.dispose()


def test_factory_uses_memory_in_mock_mode():
    store = create_prompt_log_store(Settings(llm_mode="mock", prompt_log_store="sqlite"))

    assert isinstance(store, InMemoryPromptLogStore)


def test_factory_requires_session_factory_for_sqlite():
    with pytest.raises(ValueError):
        create_prompt_log_store(Settings(llm_mode="live", prompt_log_store="sqlite"))


@pytest.mark.parametrize("store_class", [PromptLogStore, InMemoryPromptLogStore, SQLPromptLogStore])
def test_store_annotations_resolve_to_builtin_list(store_class):
    """Method names must not shadow the builtins used in the class's annotations."""
    for method in ("list_logs", "search"):
        assert get_type_hints(getattr(store_class, method))["return"] == list[PromptLog]
