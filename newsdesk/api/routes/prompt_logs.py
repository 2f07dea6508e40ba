"""Prompt log viewer endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Query, Request

from newsdesk.api.models.prompt_logs import PromptLogDeleteResponse, PromptLogListResponse
from newsdesk.models.settings import Provider
from newsdesk.prompt_logs.base import PromptLogStore

router = APIRouter(prefix="/api/prompt-logs", tags=["prompt-logs"])
logger = structlog.get_logger(__name__)


def _store(request: Request) -> PromptLogStore:
    return request.app.state.prompt_log_store


@router.get("", response_model=PromptLogListResponse)
async def list_prompt_logs(
    request: Request,
    limit: int = Query(50, ge=1, le=500),
    provider: Provider | None = None,
) -> PromptLogListResponse:
    """Recent prompt logs, optionally for one provider."""
    try:
        logs = await _store(request).list_logs(limit=limit, provider=provider)
    except Exception as e:
        logger.error("Failed to list prompt logs", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to list prompt logs: {e}")
    return PromptLogListResponse(logs=logs, count=len(logs))


@router.get("/search", response_model=PromptLogListResponse)
async def search_prompt_logs(
    request: Request,
    q: str = Query(..., min_length=1, description="Text to find in original or enhanced prompts"),
    limit: int = Query(50, ge=1, le=500),
) -> PromptLogListResponse:
    """Search prompt logs by prompt text."""
    try:
        logs = await _store(request).search(q, limit=limit)
    except Exception as e:
        logger.error("Failed to search prompt logs", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to search prompt logs: {e}")
    return PromptLogListResponse(logs=logs, count=len(logs))


@router.delete("", response_model=PromptLogDeleteResponse)
async def delete_old_prompt_logs(
    request: Request,
    retention_days: int = Query(30, ge=0),
) -> PromptLogDeleteResponse:
    """Delete prompt logs older than the retention window."""
    try:
        deleted = await _store(request).delete_older_than(retention_days)
    except Exception as e:
        logger.error("Failed to delete prompt logs", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to delete prompt logs: {e}")
    return PromptLogDeleteResponse(deleted=deleted, retention_days=retention_days)
