"""
Streaming parser for arXiv Atom feeds.

Walks the document once with an ElementTree pull parser and turns each
<entry> into a PaperEntry. State between events:

  Idle     -- outside any entry; only feed-level OpenSearch counters are read
  InEntry  -- an _EntryAccumulator collects fields until </entry>

Entries missing id, title, summary, published or updated are dropped
without error. Only a non-well-formed document raises (ParsingError).
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from urllib.parse import urlparse

from pydantic import BaseModel

from arxiv_scout.constants import (
    ARXIV_NS,
    ATOM_NS,
    FEED_CHUNK_SIZE,
    FEED_DATE_FORMATS,
    OPENSEARCH_NS,
)
from arxiv_scout.data_sources.base_client import ParsingError
from arxiv_scout.models.model_arxiv import (
    Author,
    Category,
    FeedPage,
    Link,
    PaperEntry,
)

logger = logging.getLogger(__name__)

_ATOM_NAMESPACES = (ATOM_NS, "")

_OPENSEARCH_FIELDS = {
    "totalResults": "total_results",
    "startIndex": "start_index",
    "itemsPerPage": "items_per_page",
}


def _split_tag(tag: str) -> tuple[str, str]:
    """Split an ElementTree tag "{ns}local" into (ns, local)."""
    if tag.startswith("{"):
        ns, _, local = tag[1:].partition("}")
        return ns, local
    return "", tag


def _boundary_text(elem: ET.Element) -> str:
    """Character data seen since the previous start or end boundary."""
    if len(elem):
        return elem[-1].tail or ""
    return elem.text or ""


def extract_arxiv_id(raw: str) -> str:
    """Strip the URL wrapping from an entry id.

    "http://arxiv.org/abs/hep-ex/0307015v1" -> "hep-ex/0307015v1"
    Anything without an "abs" path segment is returned unchanged.
    """
    segments = urlparse(raw).path.split("/")
    if "abs" in segments:
        idx = segments.index("abs")
        tail = [s for s in segments[idx + 1 :] if s]
        if tail:
            return "/".join(tail)
    return raw


def parse_feed_date(raw: str) -> datetime | None:
    """Parse a Z-suffixed feed timestamp as an aware UTC datetime."""
    for fmt in FEED_DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def _optional(text: str) -> str | None:
    return text or None


class _EntryAccumulator(BaseModel):
    """Fields of one <entry> collected so far. Lives for one entry only."""

    id: str | None = None
    title: str | None = None
    abstract: str | None = None
    authors: list[Author] = []
    published: datetime | None = None
    updated: datetime | None = None
    categories: list[Category] = []
    links: list[Link] = []
    comment: str | None = None
    journal_reference: str | None = None
    doi: str | None = None
    report_number: str | None = None

    def build(self) -> PaperEntry | None:
        """Return the finished entry, or None if a required field is missing."""
        if (
            self.id is None
            or self.title is None
            or self.abstract is None
            or self.published is None
            or self.updated is None
        ):
            return None

        return PaperEntry(
            id=self.id,
            title=self.title,
            abstract=self.abstract,
            authors=self.authors,
            published=self.published,
            updated=self.updated,
            # arxiv:primary_category is not consulted; first listed wins
            primary_category=self.categories[0] if self.categories else None,
            categories=self.categories,
            links=self.links,
            comment=self.comment,
            journal_reference=self.journal_reference,
            doi=self.doi,
            report_number=self.report_number,
        )


class ArxivFeedParser:
    """Convert an arXiv Atom feed into PaperEntry models.

    One instance may be reused for sequential parses; state is reset at the
    start of every call. Use separate instances for concurrent parses.
    """

    def __init__(self, chunk_size: int = FEED_CHUNK_SIZE) -> None:
        self.chunk_size = chunk_size
        self._reset()

    def _reset(self) -> None:
        self._page = FeedPage()
        self._entries: list[PaperEntry] = []
        self._current: _EntryAccumulator | None = None
        self._in_author = False
        self._author_start = 0
        self._dropped = 0

    # -- Public interface -----------------------------------------------------

    def parse(self, data: bytes | str) -> list[PaperEntry]:
        """Parse a feed document and return its valid entries in document order."""
        return self.parse_page(data).entries

    def parse_page(self, data: bytes | str) -> FeedPage:
        """Parse a feed document, keeping the OpenSearch paging counters.

        str input is parsed as already-decoded text, ignoring any encoding
        declaration; bytes are decoded per the declaration.
        """
        self._reset()
        parser = ET.XMLPullParser(events=("start", "end"))
        try:
            for offset in range(0, len(data), self.chunk_size):
                parser.feed(data[offset : offset + self.chunk_size])
                self._drain(parser)
            parser.close()
            self._drain(parser)
        except ET.ParseError as e:
            raise ParsingError("arxiv", f"Failed to parse XML: {e}") from e

        if self._dropped:
            logger.debug("Dropped %d incomplete entries", self._dropped)

        page = self._page.model_copy(update={"entries": self._entries})
        self._reset()
        return page

    # -- Event dispatch -------------------------------------------------------

    def _drain(self, parser: ET.XMLPullParser) -> None:
        for event, elem in parser.read_events():
            if event == "start":
                self._on_start(elem)
            else:
                self._on_end(elem)

    def _on_start(self, elem: ET.Element) -> None:
        ns, name = _split_tag(elem.tag)
        if ns not in _ATOM_NAMESPACES:
            return

        if name == "entry":
            self._current = _EntryAccumulator()
            self._in_author = False
            return

        if self._current is None:
            return

        # link and category carry only attributes, so they are complete here
        if name == "link":
            self._current.links.append(
                Link(
                    href=elem.get("href", ""),
                    rel=elem.get("rel"),
                    type=elem.get("type"),
                    title=elem.get("title"),
                )
            )
        elif name == "category":
            self._current.categories.append(
                Category(
                    term=elem.get("term", ""),
                    scheme=elem.get("scheme"),
                    label=elem.get("label"),
                )
            )
        elif name == "author":
            self._in_author = True
            self._author_start = len(self._current.authors)

    def _on_end(self, elem: ET.Element) -> None:
        ns, name = _split_tag(elem.tag)
        text = _boundary_text(elem).strip()
        entry = self._current
        if entry is None:
            if ns == OPENSEARCH_NS and name in _OPENSEARCH_FIELDS:
                self._set_page_counter(_OPENSEARCH_FIELDS[name], text)
            return

        if ns in _ATOM_NAMESPACES:
            self._on_atom_end(entry, elem, name, text)
        elif ns == ARXIV_NS:
            self._on_arxiv_end(entry, name, text)

    def _on_atom_end(
        self, entry: _EntryAccumulator, elem: ET.Element, name: str, text: str
    ) -> None:
        if name == "entry":
            built = entry.build()
            if built is not None:
                self._entries.append(built)
            else:
                self._dropped += 1
                logger.debug("Dropping entry missing required fields (id=%s)", entry.id)
            self._current = None
            elem.clear()
        elif name == "id":
            entry.id = extract_arxiv_id(text)
        elif name == "title":
            entry.title = text
        elif name == "summary":
            entry.abstract = text
        elif name in ("published", "updated"):
            value = parse_feed_date(text)
            if value is None:
                logger.debug("Unparseable %s timestamp %r", name, text)
            else:
                setattr(entry, name, value)
        elif name == "name" and self._in_author:
            entry.authors.append(Author(name=text))
        elif name == "author":
            self._in_author = False

    def _on_arxiv_end(self, entry: _EntryAccumulator, name: str, text: str) -> None:
        if name == "comment":
            entry.comment = _optional(text)
        elif name == "journal_ref":
            entry.journal_reference = _optional(text)
        elif name == "doi":
            entry.doi = _optional(text)
        elif name == "report_no":
            entry.report_number = _optional(text)
        elif (
            name == "affiliation"
            and self._in_author
            and len(entry.authors) > self._author_start
        ):
            entry.authors[-1] = entry.authors[-1].model_copy(
                update={"affiliation": _optional(text)}
            )

    def _set_page_counter(self, field: str, text: str) -> None:
        try:
            value = int(text)
        except ValueError:
            logger.debug("Non-integer OpenSearch %s: %r", field, text)
            return
        self._page = self._page.model_copy(update={field: value})


def parse_feed(data: bytes | str) -> list[PaperEntry]:
    """Parse a feed with a fresh parser."""
    return ArxivFeedParser().parse(data)
