"""
FastAPI Dependencies

Provides dependency injection for configuration and the SEC EDGAR client.
"""

from typing import AsyncGenerator
from fastapi import Depends

from ..config import Settings, get_settings
from ..ingestion.edgar_client import SECEdgarClient


async def get_edgar_client(
    settings: Settings = Depends(get_settings)
) -> AsyncGenerator[SECEdgarClient, None]:
    """
    EDGAR client dependency.

    Yields a client carrying the effective User-Agent and closes it after
    the request.

    Usage:
        @router.get("/endpoint")
        async def endpoint(client: SECEdgarClient = Depends(get_edgar_client)):
            data = await client.search_nport("apple")
    """
    async with SECEdgarClient(settings.effective_user_agent) as client:
        yield client
