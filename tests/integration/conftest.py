"""Shared fixtures for integration tests."""

import pytest

from arxiv_scout.data_sources.arxiv import ArxivClient


@pytest.fixture
async def arxiv_client():
    """Create and tear down an ArxivClient."""
    c = ArxivClient()
    yield c
    await c.close()
