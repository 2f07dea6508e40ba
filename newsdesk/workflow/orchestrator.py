"""Pipeline orchestration: plan, decompose, execute, compile."""

import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

import structlog
from pydantic import Field

from newsdesk.exceptions import PipelineCancelled, PipelineStageError
from newsdesk.models.research import (
    Article,
    CamelModel,
    ResearchPlan,
    ResearchResult,
    ResearchTask,
    TaskStatus,
    new_id,
    utc_now_iso,
)
from newsdesk.models.settings import NewsSettings
from newsdesk.workflow.compiler import ArticleCompiler
from newsdesk.workflow.decomposer import TaskDecomposer
from newsdesk.workflow.executor import TaskExecutor
from newsdesk.workflow.planner import ResearchPlanner

logger = structlog.get_logger(__name__)

# May return an awaitable, which is awaited.
ProgressCallback = Callable[[str, str], Any]


class PipelineStage(str, Enum):
    IDLE = "idle"
    PLANNING = "planning"
    PLANNED = "planned"
    DECOMPOSING = "decomposing"
    DECOMPOSED = "decomposed"
    EXECUTING = "executing"
    COMPILING = "compiling"
    COMPLETED = "completed"
    ERROR = "error"
    CANCELLED = "cancelled"


TERMINAL_STAGES = {PipelineStage.COMPLETED, PipelineStage.ERROR, PipelineStage.CANCELLED}


class CancellationToken:
    """Cooperative cancellation flag checked between stages and tasks."""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class TaskOutcome:
    """Terminal result of executing one task: results or a failure message."""

    task: ResearchTask
    results: tuple[ResearchResult, ...] = ()
    error: str | None = None

    @classmethod
    def success(cls, task: ResearchTask, results: list[ResearchResult]) -> "TaskOutcome":
        return cls(task=task, results=tuple(results))

    @classmethod
    def failure(cls, task: ResearchTask, error: str) -> "TaskOutcome":
        return cls(task=task, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_task(self) -> ResearchTask:
        """New task record in its terminal status."""
        if self.succeeded:
            return self.task.model_copy(
                update={"status": TaskStatus.COMPLETED, "results": list(self.results), "error": None}
            )
        return self.task.model_copy(update={"status": TaskStatus.ERROR, "error": self.error})


class PipelineRun(CamelModel):
    """State of one pipeline run.

    Fields are reassigned at each transition; task records are replaced, not
    modified.
    """

    id: str = Field(default_factory=lambda: new_id("run"))
    stage: PipelineStage = PipelineStage.IDLE
    message: str = ""
    plan: ResearchPlan | None = None
    tasks: list[ResearchTask] = Field(default_factory=list)
    article: Article | None = None
    error: str | None = None
    failed_stage: PipelineStage | None = None
    started_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    finished_at: str | None = None

    @property
    def finished(self) -> bool:
        return self.stage in TERMINAL_STAGES

    def replace_task(self, index: int, task: ResearchTask) -> None:
        tasks = list(self.tasks)
        tasks[index] = task
        self.tasks = tasks


class PipelineOrchestrator:
    """Runs the research pipeline for one set of news settings.

    Planning, decomposition and compilation failures end the run with a
    ``PipelineStageError``. A task whose execution raises is marked as
    failed and the remaining tasks still run. Tasks execute through a pool
    of ``max_concurrent_tasks`` workers; compilation starts once every task
    is terminal and sees the tasks in decomposition order.
    """

    def __init__(
        self,
        planner: ResearchPlanner,
        decomposer: TaskDecomposer,
        executor: TaskExecutor,
        compiler: ArticleCompiler,
        max_concurrent_tasks: int = 1,
    ):
        self.planner = planner
        self.decomposer = decomposer
        self.executor = executor
        self.compiler = compiler
        self.max_concurrent_tasks = max(1, max_concurrent_tasks)

    async def run(
        self,
        settings: NewsSettings,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancellationToken | None = None,
        run: PipelineRun | None = None,
    ) -> Article:
        """
        Execute the pipeline.

        Args:
            settings: News settings for this run
            on_progress: Observer called with (stage, message)
            cancel_token: Token checked before each stage and task
            run: Run record to update; a new one is created when omitted

        Returns:
            Compiled article

        Raises:
            PipelineStageError: Planning, decomposition or compilation failed
            PipelineCancelled: The token was cancelled
        """
        run = run if run is not None else PipelineRun()
        logger.info("Pipeline run started", run_id=run.id, company=settings.company_name)

        try:
            self._check_cancelled(cancel_token, PipelineStage.PLANNING)
            await self._advance(run, PipelineStage.PLANNING, "Creating research plan...", on_progress)
            plan = await self._stage(run, PipelineStage.PLANNING, self.planner.plan(settings))
            run.plan = plan
            await self._advance(run, PipelineStage.PLANNED, "Research plan created successfully", on_progress)

            self._check_cancelled(cancel_token, PipelineStage.DECOMPOSING)
            await self._advance(
                run, PipelineStage.DECOMPOSING, "Breaking down research plan into tasks...", on_progress
            )
            tasks = await self._stage(run, PipelineStage.DECOMPOSING, self._decompose(plan, settings))
            run.tasks = tasks
            await self._advance(run, PipelineStage.DECOMPOSED, "Research tasks created successfully", on_progress)

            self._check_cancelled(cancel_token, PipelineStage.EXECUTING)
            await self._advance(
                run, PipelineStage.EXECUTING, f"Executing {len(tasks)} research tasks...", on_progress
            )
            await self._execute_all(run, settings, on_progress, cancel_token)

            self._check_cancelled(cancel_token, PipelineStage.COMPILING)
            await self._advance(run, PipelineStage.COMPILING, "Compiling research into article...", on_progress)
            article = await self._stage(run, PipelineStage.COMPILING, self._compile(run.tasks, settings))
            run.article = article
            await self._advance(run, PipelineStage.COMPLETED, "Article compiled successfully", on_progress)
            run.finished_at = utc_now_iso()

        except PipelineCancelled as e:
            self._mark_cancelled(run)
            logger.info("Pipeline run cancelled", run_id=run.id, before_stage=e.stage)
            await self._notify(on_progress, PipelineStage.CANCELLED, "Pipeline run cancelled")
            raise
        except asyncio.CancelledError:
            self._mark_cancelled(run)
            logger.info("Pipeline run task cancelled", run_id=run.id)
            raise

        logger.info("Pipeline run completed", run_id=run.id, article_id=article.id)
        return article

    async def _decompose(self, plan: ResearchPlan, settings: NewsSettings) -> list[ResearchTask]:
        return self.decomposer.decompose(plan, settings)

    async def _compile(self, tasks: list[ResearchTask], settings: NewsSettings) -> Article:
        return self.compiler.compile(tasks, settings)

    async def _stage(self, run: PipelineRun, stage: PipelineStage, work: Awaitable[Any]) -> Any:
        """Await a run-fatal stage, wrapping failures in PipelineStageError."""
        try:
            return await work
        except Exception as e:
            run.stage = PipelineStage.ERROR
            run.failed_stage = stage
            run.error = str(e)
            run.updated_at = run.finished_at = utc_now_iso()
            logger.error("Pipeline stage failed", run_id=run.id, stage=stage.value, error=str(e))
            raise PipelineStageError(stage.value, e) from e

    async def _execute_all(
        self,
        run: PipelineRun,
        settings: NewsSettings,
        on_progress: ProgressCallback | None,
        cancel_token: CancellationToken | None,
    ) -> None:
        semaphore = asyncio.Semaphore(self.max_concurrent_tasks)

        async def worker(index: int, task: ResearchTask) -> TaskOutcome:
            async with semaphore:
                self._check_cancelled(cancel_token, PipelineStage.EXECUTING)
                run.replace_task(
                    index,
                    task.model_copy(
                        update={"status": TaskStatus.IN_PROGRESS, "assigned_to": f"research-assistant-{index + 1}"}
                    ),
                )
                await self._notify(on_progress, PipelineStage.EXECUTING, f"Researching: {task.title}...")

                outcome = await self._execute_task(run.tasks[index], settings)
                run.replace_task(index, outcome.to_task())

                if outcome.succeeded:
                    message = f"Completed research on: {task.title}"
                else:
                    message = f"Error researching: {task.title}"
                await self._notify(on_progress, PipelineStage.EXECUTING, message)
                return outcome

        # Workers never raise except for cancellation, so siblings always finish.
        outcomes = await asyncio.gather(
            *(worker(index, task) for index, task in enumerate(run.tasks)),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        failed = sum(1 for outcome in outcomes if not outcome.succeeded)
        logger.info("Research tasks finished", run_id=run.id, tasks=len(outcomes), failed=failed)

    async def _execute_task(self, task: ResearchTask, settings: NewsSettings) -> TaskOutcome:
        try:
            results = await self.executor.execute(task, settings)
        except Exception as e:
            logger.error("Research task failed", task_id=task.id, error=str(e))
            return TaskOutcome.failure(task, str(e))
        return TaskOutcome.success(task, results)

    async def _advance(
        self,
        run: PipelineRun,
        stage: PipelineStage,
        message: str,
        on_progress: ProgressCallback | None,
    ) -> None:
        run.stage = stage
        run.message = message
        run.updated_at = utc_now_iso()
        logger.debug("Pipeline stage", run_id=run.id, stage=stage.value, message=message)
        await self._notify(on_progress, stage, message)

    async def _notify(self, on_progress: ProgressCallback | None, stage: PipelineStage, message: str) -> None:
        if on_progress is None:
            return
        try:
            result = on_progress(stage.value, message)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning("Progress callback failed", stage=stage.value, error=str(e))

    def _check_cancelled(self, cancel_token: CancellationToken | None, stage: PipelineStage) -> None:
        if cancel_token is not None and cancel_token.cancelled:
            raise PipelineCancelled(stage.value)

    def _mark_cancelled(self, run: PipelineRun) -> None:
        run.stage = PipelineStage.CANCELLED
        run.message = "Pipeline run cancelled"
        run.updated_at = run.finished_at = utc_now_iso()
