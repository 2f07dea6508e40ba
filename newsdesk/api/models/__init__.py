"""API request/response models."""

from newsdesk.api.models.config import ConfigResponse
from newsdesk.api.models.connections import ConnectionStatus, VectorDocumentRequest, VectorDocumentResponse
from newsdesk.api.models.enhance import EnhanceRequest, EnhanceResponse
from newsdesk.api.models.health import HealthResponse
from newsdesk.api.models.news import NewsRequest, NewsResponse
from newsdesk.api.models.pipeline import CancelResponse
from newsdesk.api.models.prompt_logs import PromptLogDeleteResponse, PromptLogListResponse

__all__ = [
    "CancelResponse",
    "ConfigResponse",
    "ConnectionStatus",
    "EnhanceRequest",
    "EnhanceResponse",
    "HealthResponse",
    "NewsRequest",
    "NewsResponse",
    "PromptLogDeleteResponse",
    "PromptLogListResponse",
    "VectorDocumentRequest",
    "VectorDocumentResponse",
]
