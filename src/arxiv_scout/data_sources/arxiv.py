"""
arXiv API client.

Methods:
  1. get_page / get_entries - Run an ArxivQuery and parse the Atom feed
  2. get_entry              - Look up a single paper by arXiv identifier
  3. search_by_*            - One-field searches with sensible sort defaults
  4. get_latest_entries     - Newest submissions, optionally in one category
"""

from __future__ import annotations

import logging

from arxiv_scout.config import get_settings
from arxiv_scout.constants import DEFAULT_MAX_RESULTS
from arxiv_scout.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    EntryNotFoundError,
    RequestContext,
)
from arxiv_scout.data_sources.feed_parser import ArxivFeedParser
from arxiv_scout.models.model_arxiv import FeedPage, PaperEntry
from arxiv_scout.models.model_query import ArxivQuery, QueryField, SortBy, SortOrder

logger = logging.getLogger(__name__)


class ArxivClient(BaseClient):
    """Client for querying the arXiv export API."""

    def __init__(
        self, config: ClientConfig | None = None, base_url: str | None = None
    ) -> None:
        super().__init__(config)
        self.base_url = base_url or get_settings().base_url

    @property
    def _source_name(self) -> str:
        return "arxiv"

    async def get_page(self, query: ArxivQuery, method: str = "get_page") -> FeedPage:
        """Fetch one page of results together with the feed's paging counters."""
        url = query.build(self.base_url)
        context = RequestContext(
            source=self._source_name,
            method=method,
            params={"search_query": query.search_query, "start": query.start},
        )
        body = await self._rest_get_bytes(url, context=context)

        # Parsers hold per-parse state; never share one across requests.
        page = ArxivFeedParser().parse_page(body)
        logger.debug(
            "Parsed %d entries (total_results=%s) for %s",
            len(page.entries),
            page.total_results,
            query.search_query,
        )
        return page

    async def get_entries(self, query: ArxivQuery) -> list[PaperEntry]:
        """Fetch entries matching the query, in feed order."""
        page = await self.get_page(query, method="get_entries")
        return page.entries

    async def get_entry(self, arxiv_id: str) -> PaperEntry:
        """Fetch one paper by identifier, e.g. "2301.12345" or "2301.12345v1"."""
        query = ArxivQuery().add_search(arxiv_id, field=QueryField.ID).set_max_results(1)
        entries = await self.get_entries(query)
        if not entries:
            raise EntryNotFoundError(
                self._source_name, f"No entry found with ID: {arxiv_id}"
            )
        return entries[0]

    async def search_by_author(
        self,
        author: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        sort_by: SortBy = SortBy.RELEVANCE,
    ) -> list[PaperEntry]:
        query = ArxivQuery.by_author(author).set_max_results(max_results).set_sort(sort_by)
        return await self.get_entries(query)

    async def search_by_title(
        self,
        title: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        sort_by: SortBy = SortBy.RELEVANCE,
    ) -> list[PaperEntry]:
        query = ArxivQuery.by_title(title).set_max_results(max_results).set_sort(sort_by)
        return await self.get_entries(query)

    async def search_by_category(
        self,
        category: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        sort_by: SortBy = SortBy.SUBMITTED,
    ) -> list[PaperEntry]:
        """Search one category; newest submissions first by default."""
        query = (
            ArxivQuery.by_category(category)
            .set_max_results(max_results)
            .set_sort(sort_by)
        )
        return await self.get_entries(query)

    async def search_by_abstract(
        self,
        terms: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        sort_by: SortBy = SortBy.RELEVANCE,
    ) -> list[PaperEntry]:
        query = ArxivQuery.by_abstract(terms).set_max_results(max_results).set_sort(sort_by)
        return await self.get_entries(query)

    async def get_latest_entries(
        self, max_results: int = DEFAULT_MAX_RESULTS, category: str | None = None
    ) -> list[PaperEntry]:
        """Most recently submitted papers, optionally restricted to a category."""
        query = (
            ArxivQuery()
            .set_max_results(max_results)
            .set_sort(SortBy.SUBMITTED, SortOrder.DESCENDING)
        )
        if category:
            query = query.add_search(category, field=QueryField.CATEGORY)
        return await self.get_entries(query)
