"""
Immutable query builder for the arXiv API.

Every mutator returns a new ArxivQuery; the receiver is never modified, so a
base query can be shared and used to derive several narrower queries.
"""

from __future__ import annotations

from enum import Enum
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, field_validator

from arxiv_scout.constants import (
    ARXIV_QUERY_URL,
    DEFAULT_MAX_RESULTS,
    DEFAULT_START,
    MATCH_ALL_QUERY,
    MAX_RESULTS,
    MIN_RESULTS,
    SEARCH_TERM_SEPARATOR,
)


class QueryField(str, Enum):
    """Searchable fields and their arXiv field tags."""

    TITLE = "ti"
    AUTHOR = "au"
    ABSTRACT = "abs"
    COMMENT = "co"
    JOURNAL_REFERENCE = "jr"
    CATEGORY = "cat"
    REPORT_NUMBER = "rn"
    ID = "id"
    ALL = "all"


class SortBy(str, Enum):
    RELEVANCE = "relevance"
    LAST_UPDATED = "lastUpdatedDate"
    SUBMITTED = "submittedDate"


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SearchTerm(BaseModel):
    """A single field-qualified search term, e.g. ``au:Hinton``."""

    model_config = ConfigDict(frozen=True)

    field: QueryField
    value: str  # raw text; escaped only when the URL is built

    def render(self) -> str:
        """Render the term for the search_query parameter, escaping the value."""
        return f"{self.field.value}:{quote(self.value, safe='')}"


class ArxivQuery(BaseModel):
    """Search terms plus pagination and sort options for one API request."""

    model_config = ConfigDict(frozen=True)

    search_terms: tuple[SearchTerm, ...] = ()
    start: int = DEFAULT_START
    max_results: int = DEFAULT_MAX_RESULTS
    sort_by: SortBy = SortBy.RELEVANCE
    sort_order: SortOrder = SortOrder.DESCENDING

    @field_validator("start")
    @classmethod
    def clamp_start(cls, v: int) -> int:
        return max(0, v)

    @field_validator("max_results")
    @classmethod
    def clamp_max_results(cls, v: int) -> int:
        return min(max(MIN_RESULTS, v), MAX_RESULTS)

    # -- Mutators (copy-on-write) ---------------------------------------------

    def _replace(self, **changes) -> ArxivQuery:
        """Return a copy with the changes run through field validation."""
        return self.model_validate({**self.model_dump(), **changes})

    def add_search(self, value: str, field: QueryField = QueryField.ALL) -> ArxivQuery:
        """Append a search term; terms are ANDed together in insertion order.

        The value comes first and the field defaults to ALL, so a bare
        ``add_search("electron")`` searches every field. Pass the field by
        keyword to be explicit: ``add_search("Hinton", field=QueryField.AUTHOR)``.
        """
        term = SearchTerm(field=field, value=value)
        return self._replace(search_terms=(*self.search_terms, term))

    def set_start(self, start: int) -> ArxivQuery:
        """Set the 0-based offset of the first result; negatives become 0."""
        return self._replace(start=start)

    def set_max_results(self, max_results: int) -> ArxivQuery:
        """Set the page size, clamped to [MIN_RESULTS, MAX_RESULTS]."""
        return self._replace(max_results=max_results)

    def set_sort(
        self, by: SortBy, order: SortOrder = SortOrder.DESCENDING
    ) -> ArxivQuery:
        """Replace the sort criteria."""
        return self._replace(sort_by=by, sort_order=order)

    # -- URL assembly -----------------------------------------------------------

    @property
    def search_query(self) -> str:
        """The search_query parameter value, already percent-encoded."""
        if not self.search_terms:
            return MATCH_ALL_QUERY
        return SEARCH_TERM_SEPARATOR.join(term.render() for term in self.search_terms)

    def build(self, base_url: str = ARXIV_QUERY_URL) -> str:
        """Return the complete request URL.

        Term values are escaped one by one and joined with the literal
        ``+AND+`` separator, so the separator and the ``field:`` delimiter
        survive unescaped.
        """
        rest = urlencode(
            [
                ("start", self.start),
                ("max_results", self.max_results),
                ("sortBy", self.sort_by.value),
                ("sortOrder", self.sort_order.value),
            ]
        )
        return f"{base_url}?search_query={self.search_query}&{rest}"

    # -- Convenience constructors -------------------------------------------------

    @classmethod
    def by_author(cls, author: str) -> ArxivQuery:
        return cls().add_search(author, field=QueryField.AUTHOR)

    @classmethod
    def by_title(cls, title: str) -> ArxivQuery:
        return cls().add_search(title, field=QueryField.TITLE)

    @classmethod
    def by_category(cls, category: str) -> ArxivQuery:
        """Query a single arXiv category, e.g. ``cs.AI`` or ``math.NT``."""
        return cls().add_search(category, field=QueryField.CATEGORY)

    @classmethod
    def by_abstract(cls, terms: str) -> ArxivQuery:
        return cls().add_search(terms, field=QueryField.ABSTRACT)
