"""Unit tests for the NPORT filing service."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx

from nport_analyzer.services.nport_service import parse_nport_filing


def make_client(side_effect=None, return_value=None):
    client = MagicMock()
    client.fetch_filing_document = AsyncMock(
        side_effect=side_effect, return_value=return_value
    )
    return client


class TestParseNportFiling:
    """Tests for parse_nport_filing."""

    def test_success(self, sample_xml):
        client = make_client(return_value=sample_xml)

        result = asyncio.run(parse_nport_filing(client, "1234567", "0001234567-24-000001", "Siemens"))

        client.fetch_filing_document.assert_awaited_once_with("1234567", "0001234567-24-000001")
        assert result["success"] is True
        assert result["message"] == "Found holdings"
        assert result["holdings"][0]["currency"] == "EUR"
        assert result["holdings"][0]["priceInUSD"] == 200.0

    def test_timeout(self):
        request = httpx.Request("GET", "https://www.sec.gov/")
        client = make_client(side_effect=httpx.ReadTimeout("", request=request))

        result = asyncio.run(parse_nport_filing(client, "1", "2", "apple"))

        assert result == {
            "success": False,
            "holdings": [],
            "error": "Request to SEC EDGAR timed out"
        }

    def test_connection_error(self):
        request = httpx.Request("GET", "https://www.sec.gov/")
        client = make_client(side_effect=httpx.ConnectError("Name or service not known", request=request))

        result = asyncio.run(parse_nport_filing(client, "1", "2", "apple"))

        assert result["success"] is False
        assert result["error"] == "Name or service not known"

    def test_truncated_document(self):
        """Test that holdings before the cut-off are not returned"""
        client = make_client(return_value=(
            "<edgarSubmission><formData><invstOrSecs><invstOrSec>"
            "<name>Apple Inc.</name><balance>10</balance><valUSD>100</valUSD>"
            "</invstOrSec><invstOrSec><name>Apple Two</name><bal"
        ))

        result = asyncio.run(parse_nport_filing(client, "1", "2", "apple"))

        assert result["success"] is False
        assert result["holdings"] == []
        assert result["error"].startswith("Malformed XML document")

    def test_empty_document(self):
        client = make_client(return_value="")

        result = asyncio.run(parse_nport_filing(client, "1", "2", "apple"))

        assert result["success"] is False
        assert result["holdings"] == []
        assert result["error"]
