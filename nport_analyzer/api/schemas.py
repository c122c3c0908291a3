"""
API Request/Response Models (Pydantic Schemas)

Defines serialization for FastAPI endpoints. Keys are camelCase to match
what the web client expects.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from ..models import HoldingRecord


class ConfigResponse(BaseModel):
    """Client-visible configuration status"""

    user_agent_configured: bool = Field(
        ...,
        alias="userAgentConfigured",
        description="Whether SEC_USER_AGENT is set on the server"
    )

    class Config:
        populate_by_name = True


# Error Response
class ErrorResponse(BaseModel):
    """Standard error response"""

    error: str = Field(..., description="Error message")


class ParseNportResponse(BaseModel):
    """Result of fetching and filtering one NPORT-P filing"""

    success: bool = Field(..., description="Whether the filing was fetched and parsed")
    holdings: List[HoldingRecord] = Field(
        default_factory=list,
        description="Matching holdings in filing order"
    )
    message: Optional[str] = Field(None, description="Summary on success")
    error: Optional[str] = Field(None, description="Error message on failure")
