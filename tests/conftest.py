"""Pytest configuration and fixtures."""

import pytest

H1_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <link href="http://arxiv.org/api/query?search_query=all:electron&amp;id_list=&amp;start=0&amp;max_results=1" rel="self" type="application/atom+xml"/>
  <title type="html">ArXiv Query: search_query=all:electron&amp;id_list=&amp;start=0&amp;max_results=1</title>
  <id>http://arxiv.org/api/cHxbiOdZaP56ODnBPIenZhzg5f8</id>
  <updated>2013-05-29T00:00:00-04:00</updated>
  <opensearch:totalResults xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">1000</opensearch:totalResults>
  <opensearch:startIndex xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">0</opensearch:startIndex>
  <opensearch:itemsPerPage xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">1</opensearch:itemsPerPage>
  <entry>
    <id>http://arxiv.org/abs/hep-ex/0307015v1</id>
    <updated>2003-07-07T13:46:39Z</updated>
    <published>2003-07-07T13:46:39Z</published>
    <title>Multi-Electron Production at High Transverse Momenta in ep Collisions at HERA</title>
    <summary>Multi-electron production is studied at high transverse momentum in positron-
proton collisions using the H1 detector at HERA. The data correspond to an
integrated luminosity of 115 pb^-1.</summary>
    <author>
      <name>H1 Collaboration</name>
    </author>
    <arxiv:doi xmlns:arxiv="http://arxiv.org/schemas/atom">10.1140/epjc/s2003-01326-x</arxiv:doi>
    <link href="http://arxiv.org/abs/hep-ex/0307015v1" rel="alternate" type="text/html"/>
    <link href="http://arxiv.org/pdf/hep-ex/0307015v1" rel="related" type="application/pdf" title="pdf"/>
    <arxiv:primary_category xmlns:arxiv="http://arxiv.org/schemas/atom" term="hep-ex" scheme="http://arxiv.org/schemas/atom"/>
    <category term="hep-ex" scheme="http://arxiv.org/schemas/atom"/>
    <category term="hep-ph" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
</feed>
"""

TWO_ENTRY_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:arxiv="http://arxiv.org/schemas/atom">
  <entry>
    <id>http://arxiv.org/abs/2301.12345v1</id>
    <updated>2023-01-29T18:59:59Z</updated>
    <published>2023-01-29T18:59:59Z</published>
    <title>First Paper Title</title>
    <summary>First paper abstract.</summary>
    <author>
      <name>John Doe</name>
    </author>
    <author>
      <name>Jane Smith</name>
    </author>
    <category term="cs.AI" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2301.67890v2</id>
    <updated>2023-02-01T10:00:00.000Z</updated>
    <published>2023-01-30T12:30:00Z</published>
    <title>Second Paper Title</title>
    <summary>Second paper abstract.</summary>
    <author>
      <name>Alice Johnson</name>
      <arxiv:affiliation>MIT</arxiv:affiliation>
    </author>
    <arxiv:comment>10 pages, 3 figures</arxiv:comment>
    <arxiv:journal_ref>Phys. Rev. D 99, 012345 (2023)</arxiv:journal_ref>
    <arxiv:report_no>MIT-CTP-5500</arxiv:report_no>
    <category term="cs.LG" scheme="http://arxiv.org/schemas/atom"/>
    <category term="stat.ML" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
</feed>
"""


@pytest.fixture
def h1_feed() -> str:
    """Single-entry feed from the arXiv API documentation."""
    return H1_FEED


@pytest.fixture
def two_entry_feed() -> str:
    """Two well-formed entries with distinct authors and categories."""
    return TWO_ENTRY_FEED
