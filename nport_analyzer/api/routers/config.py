"""
Config Router

Lets the web client show a warning when the server has no SEC User-Agent.
"""

from fastapi import APIRouter, Depends

from ..schemas import ConfigResponse
from ...config import Settings, get_settings

router = APIRouter()


@router.get("/config", response_model=ConfigResponse)
async def get_config(settings: Settings = Depends(get_settings)):
    """Report whether SEC_USER_AGENT is configured."""
    return ConfigResponse(user_agent_configured=settings.user_agent_configured)
