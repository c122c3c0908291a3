"""
NPORT Filing Service

Fetches one NPORT-P filing, parses it and returns the holdings that match a
search term. Failures are reported in the result, never raised.
"""

import logging
from typing import Any, Dict

import httpx

from ..ingestion.edgar_client import SECEdgarClient
from ..ingestion.holdings_extractor import extract_holdings
from ..ingestion.xml_tree import parse_xml

logger = logging.getLogger(__name__)


def _error_message(exc: Exception) -> str:
    """Readable message for a failed fetch or parse."""
    if isinstance(exc, httpx.TimeoutException):
        return str(exc) or "Request to SEC EDGAR timed out"
    if isinstance(exc, httpx.HTTPStatusError):
        return f"SEC EDGAR returned {exc.response.status_code} for {exc.request.url}"
    return str(exc) or type(exc).__name__


async def parse_nport_filing(
    client: SECEdgarClient,
    cik: str,
    accession_number: str,
    security: str
) -> Dict[str, Any]:
    """
    Fetch a filing and extract holdings matching a security search term.

    Args:
        client: EDGAR client used for the download
        cik: Fund CIK
        accession_number: Filing accession number (dashes optional)
        security: Search term matched against name, issuer and ticker

    Returns:
        On success: {"success": True, "holdings": [...], "message": str}
        On failure: {"success": False, "holdings": [], "error": str}
    """
    try:
        xml_content = await client.fetch_filing_document(cik, accession_number)
        tree = parse_xml(xml_content)
    except Exception as e:
        message = _error_message(e)
        logger.warning(f"Failed to load filing {accession_number} (CIK {cik}): {message}")
        return {"success": False, "holdings": [], "error": message}

    holdings = extract_holdings(tree, security)
    logger.info(f"Filing {accession_number}: {len(holdings)} holdings match {security!r}")

    return {
        "success": True,
        "holdings": [h.model_dump(mode='json', by_alias=True) for h in holdings],
        "message": "Found holdings" if holdings else "No matching holdings"
    }
