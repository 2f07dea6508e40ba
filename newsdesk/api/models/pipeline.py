"""Pipeline run models."""

from pydantic import Field

from newsdesk.models.research import CamelModel


class CancelResponse(CamelModel):
    """Cancellation acknowledgement."""

    status: str = Field(default="cancelling", description="Cancellation status")
    run_id: str = Field(..., description="Pipeline run identifier")
