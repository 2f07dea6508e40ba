"""Research task execution."""

import structlog

from newsdesk.llm.base import TextGenerator
from newsdesk.models.research import ResearchResult, ResearchTask, ResultStatus
from newsdesk.models.settings import NewsSettings

logger = structlog.get_logger(__name__)

PLACEHOLDER_CONTENT = "No content found"
ERROR_CONTENT = "Error executing query"


class TaskExecutor:
    """Runs a task's search queries against the text generator."""

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    async def execute(self, task: ResearchTask, settings: NewsSettings) -> list[ResearchResult]:
        """
        Execute every search query of a task, in order.

        A failing query yields an error result and the remaining queries
        still run, so the result list always matches the query list.
        """
        results = []
        for query in task.search_queries:
            results.append(await self._run_query(query, settings))

        failed = sum(1 for result in results if result.status == ResultStatus.ERROR)
        logger.info("Task executed", task_id=task.id, queries=len(results), failed=failed)
        return results

    async def _run_query(self, query: str, settings: NewsSettings) -> ResearchResult:
        try:
            response = await self.generator.generate(query, settings)
        except Exception as e:
            logger.warning("Search query failed", query=query[:100], error=str(e))
            return ResearchResult(
                query=query,
                content=ERROR_CONTENT,
                sources=[],
                images=[],
                status=ResultStatus.ERROR,
                error=str(e),
            )

        return ResearchResult(
            query=query,
            content=response.content or PLACEHOLDER_CONTENT,
            sources=list(response.sources or []),
            images=list(response.images or []),
            status=ResultStatus.COMPLETED,
        )
