"""SEC EDGAR API client for NPORT-P full-text search and filing documents."""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

# Pause before each filing download to stay polite with www.sec.gov
FILING_FETCH_DELAY = 0.05


class SECEdgarClient:
    """
    Client for the two SEC EDGAR reads the API performs.

    SEC Requirements:
    - Must include User-Agent with name and email
    - Max 10 requests per second
    """

    BASE_URL = "https://www.sec.gov"
    SEARCH_URL = "https://efts.sec.gov/LATEST/search-index"

    def __init__(
        self,
        user_agent: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize EDGAR client.

        Args:
            user_agent: Format: "Name contact@email.com"
            timeout: Seconds before an outbound read is abandoned
            transport: Optional httpx transport (used by tests)
        """
        self.user_agent = user_agent

        self.session = httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
            transport=transport
        )

    async def search_nport(self, query: str) -> Dict[str, Any]:
        """
        Full-text search for NPORT-P filings mentioning a security.

        Args:
            query: Security name or ticker

        Returns:
            The search index JSON response, unmodified (first 100 hits)

        Raises:
            httpx.HTTPError: On network errors, timeouts and non-2xx responses
        """
        params = {
            "q": query,
            "category": "form-cat1",
            "forms": "NPORT-P",
            "page": 1,
            "from": 0,
            "size": 100
        }

        logger.info(f"Searching NPORT-P filings: q={query!r}")
        response = await self.session.get(
            self.SEARCH_URL,
            params=params,
            headers={"Accept": "application/json"}
        )
        response.raise_for_status()
        return response.json()

    def filing_url(self, cik: str, accession_number: str) -> str:
        """
        Build the primary document URL of a filing.

        Example:
            client.filing_url("1234567", "0001234567-24-000001")
            # https://www.sec.gov/Archives/edgar/data/1234567/000123456724000001/primary_doc.xml
        """
        accession_clean = accession_number.replace("-", "")
        return f"{self.BASE_URL}/Archives/edgar/data/{cik}/{accession_clean}/primary_doc.xml"

    async def fetch_filing_document(self, cik: str, accession_number: str) -> str:
        """
        Download the primary XML document of an NPORT-P filing.

        Args:
            cik: Fund CIK as it appears in search results
            accession_number: SEC filing identifier (dashes optional)

        Returns:
            Raw XML text

        Raises:
            httpx.HTTPError: On network errors, timeouts and non-2xx responses
        """
        await asyncio.sleep(FILING_FETCH_DELAY)

        url = self.filing_url(cik, accession_number)
        logger.info(f"Downloading filing: {url}")
        response = await self.session.get(url)
        response.raise_for_status()
        return response.text

    async def close(self):
        """Close HTTP session."""
        await self.session.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
