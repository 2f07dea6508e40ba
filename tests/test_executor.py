"""Tests for research task execution."""

import pytest

from newsdesk.llm.base import GenerationResult, TextGenerator
from newsdesk.models.research import ResearchDepth, ResearchTask, ResultStatus, TaskPriority
from newsdesk.workflow.executor import ERROR_CONTENT, PLACEHOLDER_CONTENT, TaskExecutor
from tests.mocks import StubTextGenerator


def _task(queries: list[str]) -> ResearchTask:
    return ResearchTask(
        id="task-section-1",
        section_id="section-1",
        title="Industry Overview",
        priority=TaskPriority.HIGH,
        depth=ResearchDepth.DEEP,
        search_queries=queries,
    )


class EmptyGenerator(TextGenerator):
    async def generate(self, query, settings):
        return GenerationResult()

    async def complete(self, prompt, settings, system_prompt=None):
        return ""


@pytest.mark.asyncio
async def test_failing_query_does_not_abort_task(news_settings):
    """The second of three queries fails; all three results are returned."""
    generator = StubTextGenerator(fail_on={"q2"})
    results = await TaskExecutor(generator).execute(_task(["q1", "q2", "q3"]), news_settings)

    assert len(results) == 3
    assert [result.query for result in results] == ["q1", "q2", "q3"]
    assert results[1].status == ResultStatus.ERROR
    assert results[1].content == ERROR_CONTENT
    assert results[1].sources == []
    assert results[1].images == []
    assert "q2" in results[1].error
    assert results[0].status == ResultStatus.COMPLETED
    assert results[2].status == ResultStatus.COMPLETED
    assert generator.queries == ["q1", "q2", "q3"]


@pytest.mark.asyncio
async def test_successful_results_capture_response(news_settings):
    results = await TaskExecutor(StubTextGenerator(images_per_query=2)).execute(_task(["q1"]), news_settings)

    assert results[0].content == "Findings for q1"
    assert len(results[0].sources) == 1
    assert len(results[0].images) == 2
    assert results[0].error is None


@pytest.mark.asyncio
async def test_missing_response_fields_get_defaults(news_settings):
    results = await TaskExecutor(EmptyGenerator()).execute(_task(["q1", "q2"]), news_settings)

    assert [result.content for result in results] == [PLACEHOLDER_CONTENT, PLACEHOLDER_CONTENT]
    assert all(result.status == ResultStatus.COMPLETED for result in results)
    assert all(result.sources == [] and result.images == [] for result in results)


@pytest.mark.asyncio
async def test_all_queries_failing_still_returns_every_result(news_settings):
    generator = StubTextGenerator(fail_on={"a", "b"})
    results = await TaskExecutor(generator).execute(_task(["a", "b"]), news_settings)

    assert [result.status for result in results] == [ResultStatus.ERROR, ResultStatus.ERROR]


@pytest.mark.asyncio
async def test_task_without_queries_yields_no_results(news_settings):
    assert await TaskExecutor(StubTextGenerator()).execute(_task([]), news_settings) == []
