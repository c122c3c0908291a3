"""NPORT Analyzer - search SEC NPORT-P filings and extract matching holdings."""

__version__ = "0.1.0"
