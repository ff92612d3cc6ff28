"""Project-wide constants."""

# -- Transport defaults -----------------------------------------------------
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_MAX_RETRIES: int = 3
DEFAULT_USER_AGENT: str = "arxiv-scout/0.1 (+https://arxiv.org/help/api)"

# -- Query endpoint -----------------------------------------------------------
ARXIV_QUERY_URL: str = "http://export.arxiv.org/api/query"

# -- Query bounds -------------------------------------------------------------
# The API rejects pages larger than 2000 results.
MIN_RESULTS: int = 1
MAX_RESULTS: int = 2000
DEFAULT_MAX_RESULTS: int = 10
DEFAULT_START: int = 0

# Separator for conjunctive search terms; must stay unescaped in the URL.
SEARCH_TERM_SEPARATOR: str = "+AND+"
MATCH_ALL_QUERY: str = "all:*"

# -- Feed namespaces ----------------------------------------------------------
ATOM_NS: str = "http://www.w3.org/2005/Atom"
ARXIV_NS: str = "http://arxiv.org/schemas/atom"
OPENSEARCH_NS: str = "http://a9.com/-/spec/opensearch/1.1/"

# -- Feed timestamps (all UTC, "Z"-suffixed) ------------------------------------
FEED_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S.%fZ",
)

# -- Parser -------------------------------------------------------------------
FEED_CHUNK_SIZE: int = 64 * 1024

# -- Retry --------------------------------------------------------------------
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})
