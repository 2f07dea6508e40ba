"""Backend connection checks."""

import structlog
from fastapi import APIRouter, Request

from newsdesk.api.models.connections import ConnectionStatus
from newsdesk.prompt_logs.base import PromptLogStore
from newsdesk.vector.base import VectorIndex

router = APIRouter(prefix="/api/connections", tags=["connections"])
logger = structlog.get_logger(__name__)


@router.get("/vector", response_model=ConnectionStatus)
async def check_vector_connection(request: Request) -> ConnectionStatus:
    """Check the vector index and report its statistics."""
    vector_index: VectorIndex = request.app.state.vector_index
    try:
        stats = await vector_index.describe()
    except Exception as e:
        logger.warning("Vector index unreachable", error=str(e))
        return ConnectionStatus(connected=False, error=str(e))
    return ConnectionStatus(connected=True, details=stats)


@router.get("/prompt-logs", response_model=ConnectionStatus)
async def check_prompt_log_connection(request: Request) -> ConnectionStatus:
    """Check the prompt log store."""
    store: PromptLogStore = request.app.state.prompt_log_store
    if await store.check_connection():
        return ConnectionStatus(connected=True)
    return ConnectionStatus(connected=False, error="Prompt log store is not reachable")
