"""
Pydantic models for arXiv feed data.

These are the data contracts between the feed parser and callers.
Callers receive these models - they never see raw Atom XML.
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict

_VERSION_SUFFIX = re.compile(r"v\d+$")


class Author(BaseModel):
    """A paper author as listed in the feed."""

    model_config = ConfigDict(frozen=True)

    name: str
    affiliation: str | None = None

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else self.name

    @property
    def last_name(self) -> str:
        parts = self.name.split()
        return parts[-1] if parts else self.name


class Category(BaseModel):
    """A subject classification, e.g. term="cs.AI"."""

    model_config = ConfigDict(frozen=True)

    term: str
    scheme: str | None = None
    label: str | None = None


class Link(BaseModel):
    """A link attached to an entry (abstract page, PDF, DOI resolver)."""

    model_config = ConfigDict(frozen=True)

    href: str
    rel: str | None = None  # "alternate", "related"
    type: str | None = None  # MIME type
    title: str | None = None  # "pdf", "doi"


class PaperEntry(BaseModel):
    """A single arXiv paper parsed from one <entry> of the feed."""

    model_config = ConfigDict(frozen=True)

    id: str  # canonical identifier, e.g. "2301.12345v1" or "hep-ex/0307015v1"
    title: str
    abstract: str
    authors: list[Author] = []
    published: datetime
    updated: datetime
    primary_category: Category | None = None  # always categories[0]
    categories: list[Category] = []
    links: list[Link] = []
    comment: str | None = None
    journal_reference: str | None = None
    doi: str | None = None
    report_number: str | None = None

    @property
    def pdf_url(self) -> str | None:
        for link in self.links:
            if link.title and "pdf" in link.title.lower():
                return link.href
        return None

    @property
    def abstract_url(self) -> str | None:
        for link in self.links:
            if link.rel == "alternate" and link.type == "text/html":
                return link.href
        return None

    @property
    def clean_id(self) -> str:
        """Identifier without its version suffix ("2301.12345v2" -> "2301.12345")."""
        return _VERSION_SUFFIX.sub("", self.id)

    @property
    def primary_category_term(self) -> str | None:
        return self.primary_category.term if self.primary_category else None

    @property
    def category_terms(self) -> list[str]:
        return [c.term for c in self.categories]

    def belongs_to_category(self, term: str) -> bool:
        return term in self.category_terms or self.primary_category_term == term

    @property
    def formatted_authors(self) -> str:
        names = [a.name for a in self.authors]
        if not names:
            return "Unknown"
        if len(names) == 1:
            return names[0]
        if len(names) == 2:
            return f"{names[0]} and {names[1]}"
        return f"{', '.join(names[:-1])}, and {names[-1]}"


class FeedPage(BaseModel):
    """One page of results plus the feed's OpenSearch paging metadata."""

    total_results: int | None = None
    start_index: int | None = None
    items_per_page: int | None = None
    entries: list[PaperEntry] = []
