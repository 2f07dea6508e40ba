"""Pipeline run endpoints with structured events."""

import asyncio
from datetime import datetime, timedelta, timezone

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from newsdesk.api.models.pipeline import CancelResponse
from newsdesk.config.settings import Settings
from newsdesk.exceptions import PipelineCancelled, PipelineStageError
from newsdesk.models.research import Article
from newsdesk.models.settings import NewsSettings
from newsdesk.streaming.sse import PipelineStreamingGenerator
from newsdesk.workflow.orchestrator import CancellationToken, PipelineRun, PipelineStage

router = APIRouter(prefix="/api/pipeline", tags=["pipeline"])
logger = structlog.get_logger(__name__)


def _register_run(app_request: Request) -> tuple[PipelineRun, CancellationToken]:
    run = PipelineRun()
    token = CancellationToken()
    app_request.app.state.pipeline_runs[run.id] = run
    app_request.app.state.cancel_tokens[run.id] = token
    _prune_runs(app_request.app.state)
    return run, token


def _prune_runs(app_state: object) -> None:
    """Drop finished runs past their TTL, then the oldest finished runs over the limit.

    Active runs are never dropped.
    """
    settings: Settings = app_state.settings
    runs: dict[str, PipelineRun] = app_state.pipeline_runs
    cutoff = datetime.now(timezone.utc) - timedelta(seconds=settings.pipeline_run_ttl_seconds)

    expired = [
        run_id
        for run_id, run in runs.items()
        if run.finished and run.finished_at and datetime.fromisoformat(run.finished_at) < cutoff
    ]
    for run_id in expired:
        runs.pop(run_id, None)

    # Insertion order is start order
    finished = [run_id for run_id, run in runs.items() if run.finished]
    excess = len(runs) - settings.max_pipeline_runs
    for run_id in finished[: max(excess, 0)]:
        runs.pop(run_id, None)


@router.post("/run")
async def start_pipeline(settings: NewsSettings, app_request: Request):
    """
    Start a pipeline run.

    Returns SSE stream with stage progress, the plan, the tasks and the
    compiled article.
    """
    logger.info("Pipeline request", company=settings.company_name, industry=settings.industry)

    orchestrator = app_request.app.state.orchestrator
    run, cancel_token = _register_run(app_request)
    stream_generator = PipelineStreamingGenerator(run_id=run.id)

    def on_progress(stage: str, message: str) -> None:
        stream_generator.emit_progress(stage, message)
        if stage == PipelineStage.PLANNED.value and run.plan is not None:
            stream_generator.emit_plan(run.plan.model_dump(by_alias=True, mode="json"))
        elif stage == PipelineStage.DECOMPOSED.value:
            stream_generator.emit_tasks([task.model_dump(by_alias=True, mode="json") for task in run.tasks])

    async def run_pipeline():
        try:
            stream_generator.emit_init(company=settings.company_name)
            article = await orchestrator.run(settings, on_progress=on_progress, cancel_token=cancel_token, run=run)
            stream_generator.emit_article(article.model_dump(by_alias=True, mode="json"))

        except PipelineCancelled:
            logger.info("Pipeline run cancelled", run_id=run.id)
        except asyncio.CancelledError:
            logger.info("Pipeline task cancelled", run_id=run.id)
        except PipelineStageError as e:
            stream_generator.emit_error(error=str(e), stage=e.stage)
        except Exception as e:
            logger.error("Pipeline run failed", run_id=run.id, error=str(e), exc_info=True)
            stream_generator.emit_error(error=str(e))
        finally:
            stream_generator.emit_done(stage=run.stage.value)
            app_request.app.state.active_tasks.pop(run.id, None)
            app_request.app.state.cancel_tokens.pop(run.id, None)

    task = asyncio.create_task(run_pipeline())
    app_request.app.state.active_tasks[run.id] = task

    async def event_stream():
        try:
            async for chunk in stream_generator.stream():
                yield chunk
        finally:
            # Client went away before the run finished
            if not task.done():
                logger.info("Client disconnected, cancelling pipeline run", run_id=run.id)
                cancel_token.cancel()
                task.cancel()

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Run-ID": run.id,
        },
    )


@router.post("/run/sync", response_model=Article)
async def run_pipeline_sync(settings: NewsSettings, app_request: Request) -> Article:
    """Run the pipeline and return the compiled article."""
    orchestrator = app_request.app.state.orchestrator
    run, cancel_token = _register_run(app_request)

    try:
        return await orchestrator.run(settings, cancel_token=cancel_token, run=run)
    except PipelineStageError as e:
        raise HTTPException(status_code=500, detail={"stage": e.stage, "error": str(e.cause), "runId": run.id})
    except PipelineCancelled:
        raise HTTPException(status_code=409, detail={"stage": run.stage.value, "runId": run.id})
    finally:
        app_request.app.state.cancel_tokens.pop(run.id, None)


@router.get("/{run_id}", response_model=PipelineRun)
async def get_pipeline_run(run_id: str, app_request: Request) -> PipelineRun:
    """Get pipeline run status."""
    run = app_request.app.state.pipeline_runs.get(run_id)
    if run is None:
        raise HTTPException(status_code=404, detail="Pipeline run not found")
    return run


@router.post("/{run_id}/cancel", response_model=CancelResponse)
async def cancel_pipeline_run(run_id: str, app_request: Request) -> CancelResponse:
    """Request cancellation of an active pipeline run."""
    run = app_request.app.state.pipeline_runs.get(run_id)
    if run is None:
        raise HTTPException(status_code=404, detail="Pipeline run not found")
    if run.finished:
        raise HTTPException(status_code=400, detail="Pipeline run already finished")

    token = app_request.app.state.cancel_tokens.get(run_id)
    if token is None:
        raise HTTPException(status_code=400, detail="Pipeline run cannot be cancelled")

    token.cancel()
    logger.info("Pipeline run cancellation requested", run_id=run_id)
    return CancelResponse(status="cancelling", run_id=run_id)
