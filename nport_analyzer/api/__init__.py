"""
FastAPI Application Module

Provides REST API for the NPORT Analyzer.
"""

from .main import app

__all__ = ["app"]
