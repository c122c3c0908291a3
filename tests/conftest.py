"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

from nport_analyzer.ingestion.xml_tree import parse_xml


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def fixtures_dir():
    """Return the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_xml(fixtures_dir):
    """NPORT-P document with four positions (one short)."""
    return (fixtures_dir / "nport_sample.xml").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def single_holding_xml(fixtures_dir):
    """NPORT-P document with exactly one position."""
    return (fixtures_dir / "nport_single_holding.xml").read_text(encoding="utf-8")


@pytest.fixture
def sample_tree(sample_xml):
    """Parsed tree of the four-position document."""
    return parse_xml(sample_xml)
