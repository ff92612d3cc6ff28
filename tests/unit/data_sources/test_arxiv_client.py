"""Unit tests for ArxivClient."""

from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qsl, urlsplit

import pytest

from arxiv_scout.constants import ARXIV_QUERY_URL
from arxiv_scout.data_sources.arxiv import ArxivClient
from arxiv_scout.data_sources.base_client import EntryNotFoundError, ParsingError
from arxiv_scout.models.model_query import ArxivQuery, SortBy

EMPTY_FEED = b'<feed xmlns="http://www.w3.org/2005/Atom"></feed>'


def _requested_url(mock_get: AsyncMock) -> str:
    return mock_get.call_args.args[0]


def _requested_params(mock_get: AsyncMock) -> dict[str, str]:
    return dict(parse_qsl(urlsplit(_requested_url(mock_get)).query))


@pytest.mark.asyncio
class TestGetEntries:
    """Tests for get_entries / get_page."""

    async def test_get_entries_parses_feed(self, h1_feed):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=h1_feed.encode()
        ) as mock_get:
            entries = await client.get_entries(ArxivQuery().add_search("electron"))

        assert [e.id for e in entries] == ["hep-ex/0307015v1"]
        assert _requested_url(mock_get).startswith(
            f"{ARXIV_QUERY_URL}?search_query=all:electron&start=0"
        )
        assert mock_get.call_args.kwargs["context"].method == "get_entries"

    async def test_get_page_exposes_paging_counters(self, h1_feed):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=h1_feed.encode()
        ):
            page = await client.get_page(ArxivQuery())

        assert page.total_results == 1000
        assert len(page.entries) == 1

    async def test_custom_base_url(self):
        client = ArxivClient(base_url="https://mirror.example.org/api/query")
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=EMPTY_FEED
        ) as mock_get:
            await client.get_entries(ArxivQuery())

        assert _requested_url(mock_get).startswith("https://mirror.example.org/api/query?")

    async def test_malformed_body_raises_parsing_error(self):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=b"<html>oops"
        ):
            with pytest.raises(ParsingError):
                await client.get_entries(ArxivQuery())


@pytest.mark.asyncio
class TestGetEntry:
    """Tests for get_entry."""

    async def test_returns_first_entry(self, h1_feed):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=h1_feed.encode()
        ) as mock_get:
            entry = await client.get_entry("hep-ex/0307015v1")

        assert entry.id == "hep-ex/0307015v1"
        params = _requested_params(mock_get)
        assert params["max_results"] == "1"
        assert _requested_url(mock_get).startswith(
            f"{ARXIV_QUERY_URL}?search_query=id:hep-ex%2F0307015v1&"
        )

    async def test_not_found_raises(self):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=EMPTY_FEED
        ):
            with pytest.raises(EntryNotFoundError, match="2301.99999"):
                await client.get_entry("2301.99999")


@pytest.mark.asyncio
class TestConvenienceSearches:
    """Tests for search_by_* and get_latest_entries."""

    @pytest.mark.parametrize(
        "method, tag, sort_by",
        [
            ("search_by_author", "au", "relevance"),
            ("search_by_title", "ti", "relevance"),
            ("search_by_abstract", "abs", "relevance"),
            ("search_by_category", "cat", "submittedDate"),
        ],
    )
    async def test_search_defaults(self, method, tag, sort_by):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=EMPTY_FEED
        ) as mock_get:
            result = await getattr(client, method)("value")

        assert result == []
        assert f"search_query={tag}:value&" in _requested_url(mock_get)
        params = _requested_params(mock_get)
        assert params["max_results"] == "10"
        assert params["sortBy"] == sort_by
        assert params["sortOrder"] == "descending"

    async def test_search_by_author_overrides(self):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=EMPTY_FEED
        ) as mock_get:
            await client.search_by_author(
                "Hinton", max_results=5000, sort_by=SortBy.LAST_UPDATED
            )

        params = _requested_params(mock_get)
        assert params["max_results"] == "2000"
        assert params["sortBy"] == "lastUpdatedDate"

    async def test_latest_entries_without_category(self):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=EMPTY_FEED
        ) as mock_get:
            await client.get_latest_entries(max_results=3)

        assert "search_query=all:*&" in _requested_url(mock_get)
        params = _requested_params(mock_get)
        assert params["max_results"] == "3"
        assert params["sortBy"] == "submittedDate"

    async def test_latest_entries_in_category(self):
        client = ArxivClient()
        with patch.object(
            client, "_rest_get_bytes", new_callable=AsyncMock, return_value=EMPTY_FEED
        ) as mock_get:
            await client.get_latest_entries(category="cs.AI")

        assert "search_query=cat:cs.AI&" in _requested_url(mock_get)
