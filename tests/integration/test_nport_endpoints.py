"""
Integration tests for the NPORT endpoints.

SEC EDGAR is replaced by an httpx.MockTransport injected through the
get_edgar_client dependency.
"""

import httpx
import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from nport_analyzer.api.dependencies import get_edgar_client
from nport_analyzer.api.main import app
from nport_analyzer.config import Settings, get_settings
from nport_analyzer.ingestion.edgar_client import SECEdgarClient

USER_AGENT = "Test Agent test@example.com"


class FakeEdgar:
    """Records outbound requests and answers them with a handler."""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def install_edgar():
    """Install a fake SEC EDGAR for the duration of a test."""
    def install(handler):
        edgar = FakeEdgar(handler)

        async def override():
            transport = httpx.MockTransport(edgar)
            async with SECEdgarClient(USER_AGENT, transport=transport) as client:
                yield client

        app.dependency_overrides[get_edgar_client] = override
        return edgar

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    """Create test client"""
    return TestClient(app)


class TestConfigEndpoint:
    """Test suite for /api/config"""

    def test_user_agent_configured(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, sec_user_agent=USER_AGENT
        )
        try:
            response = client.get("/api/config")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json() == {"userAgentConfigured": True}

    def test_user_agent_missing(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, sec_user_agent=""
        )
        try:
            response = client.get("/api/config")
        finally:
            app.dependency_overrides.clear()

        assert response.json() == {"userAgentConfigured": False}


class TestSearchNport:
    """Test suite for /api/search-nport"""

    def test_search_passthrough(self, client, install_edgar):
        """Test that the search index response is relayed verbatim"""
        payload = {
            "hits": {
                "total": {"value": 1, "relation": "eq"},
                "hits": [{
                    "_id": "0001234567-24-000001:primary_doc.xml",
                    "_source": {"ciks": ["0001234567"], "form": "NPORT-P"}
                }]
            }
        }
        edgar = install_edgar(lambda request: httpx.Response(200, json=payload))

        response = client.get("/api/search-nport", params={"security": "Apple"})

        assert response.status_code == 200
        assert response.json() == payload
        assert len(edgar.requests) == 1
        assert edgar.requests[0].url.params["q"] == "Apple"
        assert edgar.requests[0].url.params["size"] == "100"

    @pytest.mark.parametrize("params", [{}, {"security": ""}])
    def test_missing_security(self, client, install_edgar, params):
        """Test 400 before any outbound call"""
        edgar = install_edgar(lambda request: httpx.Response(200, json={}))

        response = client.get("/api/search-nport", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "security parameter required"}
        assert edgar.requests == []

    def test_upstream_error(self, client, install_edgar):
        """Test that upstream failures become a 500 with an error message"""
        install_edgar(lambda request: httpx.Response(503, text="Service Unavailable"))

        response = client.get("/api/search-nport", params={"security": "Apple"})

        assert response.status_code == 500
        assert "503" in response.json()["error"]

    def test_upstream_timeout(self, client, install_edgar):
        def handler(request):
            raise httpx.ConnectTimeout("connect timed out", request=request)

        install_edgar(handler)

        response = client.get("/api/search-nport", params={"security": "Apple"})

        assert response.status_code == 500
        assert response.json()["error"]


class TestParseNport:
    """Test suite for /api/parse-nport"""

    PARAMS = {
        "cik": "1234567",
        "accession": "0001234567-24-000001",
        "security": "apple",
    }

    def test_parse_success(self, client, install_edgar, sample_xml):
        """Test holdings extraction from a fetched filing"""
        edgar = install_edgar(lambda request: httpx.Response(200, text=sample_xml))

        response = client.get("/api/parse-nport", params=self.PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Found holdings"
        assert "error" not in data
        assert len(data["holdings"]) == 1

        holding = data["holdings"][0]
        assert holding["name"] == "Apple Inc."
        assert holding["ticker"] == "AAPL"
        assert holding["marketValue"] == 190000.0
        assert holding["priceInUSD"] == 190.0
        assert holding["pricePerShare"] == 190.0
        assert holding["reportDate"] == "2024-12-31"

        assert str(edgar.requests[0].url) == (
            "https://www.sec.gov/Archives/edgar/data/1234567/"
            "000123456724000001/primary_doc.xml"
        )
        assert edgar.requests[0].headers["User-Agent"] == USER_AGENT

    def test_parse_no_match(self, client, install_edgar, sample_xml):
        install_edgar(lambda request: httpx.Response(200, text=sample_xml))

        response = client.get("/api/parse-nport", params={**self.PARAMS, "security": "tesla"})

        data = response.json()
        assert data["success"] is True
        assert data["holdings"] == []
        assert data["message"] == "No matching holdings"

    @pytest.mark.parametrize("missing", ["cik", "accession", "security"])
    def test_missing_parameter(self, client, install_edgar, missing):
        """Test 400 before any outbound call"""
        edgar = install_edgar(lambda request: httpx.Response(200, text="<x/>"))
        params = {k: v for k, v in self.PARAMS.items() if k != missing}

        response = client.get("/api/parse-nport", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "cik, accession, and security are required"}
        assert edgar.requests == []

    def test_timeout_is_not_an_http_error(self, client, install_edgar):
        """Test that an outbound timeout yields 200 with success=false"""
        def handler(request):
            raise httpx.ReadTimeout("", request=request)

        install_edgar(handler)

        response = client.get("/api/parse-nport", params=self.PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["holdings"] == []
        assert data["error"]

    def test_upstream_not_found(self, client, install_edgar):
        install_edgar(lambda request: httpx.Response(404, text="Not Found"))

        response = client.get("/api/parse-nport", params=self.PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert "404" in data["error"]

    @pytest.mark.parametrize("body", [
        "<edgarSubmission><formData><invstOrSecs><invstOrSec>"
        "<name>Apple Inc.</name><balance>10</balance><valUSD>100</valUSD>"
        "</invstOrSec><invstOrSec><name>Apple Two</name><bal",
        "<a><b></a>",
        "<html><body><p>Rate limited<br></body></html>",
    ])
    def test_malformed_document(self, client, install_edgar, body):
        """Test that a truncated or non-XML body is reported as a failed parse"""
        install_edgar(lambda request: httpx.Response(200, text=body))

        response = client.get("/api/parse-nport", params=self.PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["holdings"] == []
        assert data["error"]

    @patch("nport_analyzer.services.nport_service.parse_xml")
    def test_parse_failure(self, mock_parse_xml, client, install_edgar):
        """Test that parser errors are reported, not raised"""
        mock_parse_xml.side_effect = ValueError("Document has no root element")
        install_edgar(lambda request: httpx.Response(200, text=""))

        response = client.get("/api/parse-nport", params=self.PARAMS)

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "holdings": [],
            "error": "Document has no root element"
        }
