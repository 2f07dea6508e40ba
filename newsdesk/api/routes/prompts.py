"""Prompt enhancement endpoint."""

from fastapi import APIRouter, Request

from newsdesk.api.models.enhance import EnhanceRequest, EnhanceResponse
from newsdesk.workflow.enricher import ContextEnricher
from newsdesk.workflow.prompts import get_base_prompt

router = APIRouter(prefix="/api/prompts", tags=["prompts"])


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance_prompt(enhance_request: EnhanceRequest, request: Request) -> EnhanceResponse:
    """Preview the enhanced prompt for a base prompt and settings."""
    enricher: ContextEnricher = request.app.state.enricher
    base_prompt = enhance_request.base_prompt or get_base_prompt(enhance_request.settings.base_prompt)

    enhanced, log_id = await enricher.enhance_with_log(base_prompt, enhance_request.settings)
    return EnhanceResponse(base_prompt=base_prompt, enhanced_prompt=enhanced, log_id=log_id)
