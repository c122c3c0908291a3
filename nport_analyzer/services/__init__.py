"""Request-level services built on the ingestion components."""

from .nport_service import parse_nport_filing

__all__ = ["parse_nport_filing"]
