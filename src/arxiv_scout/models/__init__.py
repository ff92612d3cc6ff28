"""Data models for arxiv_scout."""

from arxiv_scout.models.model_arxiv import Author, Category, FeedPage, Link, PaperEntry
from arxiv_scout.models.model_query import (
    ArxivQuery,
    QueryField,
    SearchTerm,
    SortBy,
    SortOrder,
)

__all__ = [
    "ArxivQuery",
    "Author",
    "Category",
    "FeedPage",
    "Link",
    "PaperEntry",
    "QueryField",
    "SearchTerm",
    "SortBy",
    "SortOrder",
]
