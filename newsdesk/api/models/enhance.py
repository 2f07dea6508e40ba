"""Prompt enhancement models."""

from pydantic import Field

from newsdesk.models.research import CamelModel
from newsdesk.models.settings import NewsSettings


class EnhanceRequest(CamelModel):
    """Prompt enhancement request."""

    base_prompt: str | None = Field(None, description="Prompt to enhance; defaults to the settings' base prompt")
    settings: NewsSettings = Field(default_factory=NewsSettings)


class EnhanceResponse(CamelModel):
    """Enhanced prompt."""

    base_prompt: str
    enhanced_prompt: str
    log_id: str | None = Field(None, description="Prompt log id when logging is enabled")
