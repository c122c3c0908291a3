"""Data ingestion components for SEC NPORT-P filings."""

from .edgar_client import SECEdgarClient
from .holdings_extractor import extract_holdings
from .xml_tree import XMLTreeError, parse_xml

__all__ = ["SECEdgarClient", "extract_holdings", "parse_xml", "XMLTreeError"]
