"""Context document management for the vector index."""

import structlog
from fastapi import APIRouter, HTTPException, Request

from newsdesk.api.models.connections import VectorDocumentRequest, VectorDocumentResponse
from newsdesk.models.research import new_id
from newsdesk.vector.base import VectorDocument, VectorIndex

router = APIRouter(prefix="/api/vector", tags=["vector"])
logger = structlog.get_logger(__name__)


@router.post("/documents", response_model=VectorDocumentResponse)
async def upsert_document(document_request: VectorDocumentRequest, request: Request) -> VectorDocumentResponse:
    """Insert or replace a context document."""
    vector_index: VectorIndex = request.app.state.vector_index
    document = VectorDocument(
        id=document_request.id or new_id("doc"),
        title=document_request.title,
        content=document_request.content,
        metadata=document_request.metadata,
    )
    try:
        await vector_index.upsert(document)
    except Exception as e:
        logger.error("Failed to store context document", document_id=document.id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to store document: {e}")
    return VectorDocumentResponse(id=document.id, status="stored")


@router.delete("/documents/{document_id}", response_model=VectorDocumentResponse)
async def delete_document(document_id: str, request: Request) -> VectorDocumentResponse:
    """Delete a context document."""
    vector_index: VectorIndex = request.app.state.vector_index
    try:
        await vector_index.delete(document_id)
    except Exception as e:
        logger.error("Failed to delete context document", document_id=document_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to delete document: {e}")
    return VectorDocumentResponse(id=document_id, status="deleted")
