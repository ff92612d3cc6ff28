"""arXiv API client: query builder, Atom feed parser and async transport."""

from arxiv_scout.data_sources.arxiv import ArxivClient
from arxiv_scout.data_sources.base_client import DataSourceError, ParsingError
from arxiv_scout.data_sources.feed_parser import ArxivFeedParser, parse_feed
from arxiv_scout.models import (
    ArxivQuery,
    Author,
    Category,
    FeedPage,
    Link,
    PaperEntry,
    QueryField,
    SearchTerm,
    SortBy,
    SortOrder,
)

__version__ = "0.1.0"

__all__ = [
    "ArxivClient",
    "ArxivFeedParser",
    "ArxivQuery",
    "Author",
    "Category",
    "DataSourceError",
    "FeedPage",
    "Link",
    "PaperEntry",
    "ParsingError",
    "QueryField",
    "SearchTerm",
    "SortBy",
    "SortOrder",
    "parse_feed",
]
