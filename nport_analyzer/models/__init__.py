"""Pydantic data models for NPORT-P data."""

from .holding import HoldingRecord

__all__ = ["HoldingRecord"]
