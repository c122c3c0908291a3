"""
NPORT Router

Endpoints for searching NPORT-P filings and extracting holdings from one.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from ..schemas import ErrorResponse, ParseNportResponse
from ..dependencies import get_edgar_client
from ...ingestion.edgar_client import SECEdgarClient
from ...services.nport_service import parse_nport_filing

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(mode='json')
    )


@router.get(
    "/search-nport",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def search_nport(
    security: Optional[str] = Query(None, description="Security name or ticker to search for"),
    client: SECEdgarClient = Depends(get_edgar_client)
):
    """
    Search NPORT-P filings that mention a security.

    Relays the SEC EDGAR full-text search response unmodified.

    **Examples:**
    - `/api/search-nport?security=Apple` - First 100 NPORT-P filings mentioning Apple
    """
    if not security:
        return _error(status.HTTP_400_BAD_REQUEST, "security parameter required")

    try:
        data = await client.search_nport(security)
    except Exception as e:
        logger.error(f"Search error: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or type(e).__name__)

    return JSONResponse(content=data)


@router.get(
    "/parse-nport",
    response_model=ParseNportResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}}
)
async def parse_nport(
    cik: Optional[str] = Query(None, description="Fund CIK"),
    accession: Optional[str] = Query(None, description="Filing accession number"),
    security: Optional[str] = Query(None, description="Security name or ticker to match"),
    client: SECEdgarClient = Depends(get_edgar_client)
):
    """
    Fetch one NPORT-P filing and return the holdings matching a security.

    Fetch and parse failures are reported with `success: false` and HTTP 200.

    **Example:**
    - `/api/parse-nport?cik=1234567&accession=0001234567-24-000001&security=apple`
    """
    if not cik or not accession or not security:
        return _error(status.HTTP_400_BAD_REQUEST, "cik, accession, and security are required")

    return await parse_nport_filing(client, cik, accession, security)
