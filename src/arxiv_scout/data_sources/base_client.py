"""
Base client for arXiv data source clients.

Provides: session management, request timeout, retry with exponential
backoff, structured logging, and the transport error taxonomy.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel
from yarl import URL

from arxiv_scout.config import get_settings
from arxiv_scout.constants import RETRYABLE_STATUS_CODES

logger = logging.getLogger("arxiv_scout.data_sources")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class RetryConfig(BaseModel):
    """Retry behaviour for failed requests."""

    max_retries: int = 3
    base_delay: float = 1.0  # seconds
    max_delay: float = 30.0  # seconds
    backoff_factor: float = 2.0
    retryable_status_codes: set[int] = set(RETRYABLE_STATUS_CODES)


class ClientConfig(BaseModel):
    """Top-level transport config."""

    retry: RetryConfig = RetryConfig()
    timeout_seconds: float = 30.0
    user_agent: str | None = None

    @classmethod
    def from_settings(cls) -> "ClientConfig":
        settings = get_settings()
        return cls(
            retry=RetryConfig(max_retries=settings.max_retries),
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )


# ---------------------------------------------------------------------------
# Request context (for structured logging)
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """Metadata attached to every outgoing request for logging."""

    source: str  # e.g. "arxiv"
    method: str  # e.g. "get_entries"
    params: dict[str, Any] = {}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class ParsingError(DataSourceError):
    """Raised when a response body is not a well-formed feed document."""

    pass


class HttpStatusError(DataSourceError):
    """Raised for a non-success HTTP status."""

    pass


class RateLimitError(HttpStatusError):
    """Raised when rate limit is exceeded and retries are exhausted."""

    pass


class RequestTimeoutError(DataSourceError):
    """Raised when every attempt timed out."""

    pass


class NetworkError(DataSourceError):
    """Raised when every attempt failed at the connection level."""

    pass


class NoDataError(DataSourceError):
    """Raised when the API answers 200 with an empty body."""

    pass


class EntryNotFoundError(DataSourceError):
    """Raised when a lookup by identifier returns no entry."""

    pass


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for HTTP data source clients.

    Subclasses implement `_source_name` and their own typed methods that
    call `_rest_get_bytes()`.
    """

    def __init__(self, config: ClientConfig | None = None):
        self.config = config or ClientConfig.from_settings()
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'arxiv'."""
        ...

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            headers = {}
            if self.config.user_agent:
                headers["User-Agent"] = self.config.user_agent
            self._session = aiohttp.ClientSession(timeout=timeout, headers=headers)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Core request with retry ---------------------------------------------

    def _backoff(self, attempt: int) -> float:
        return min(
            self.config.retry.base_delay * (self.config.retry.backoff_factor**attempt),
            self.config.retry.max_delay,
        )

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        context: RequestContext | None = None,
    ) -> bytes:
        """
        Make an HTTP request with retry and return the raw response body.

        Parameters
        ----------
        method : str
            HTTP method, "GET" or "POST".
        url : str
            Full URL. May already carry its query string.
        params : dict, optional
            Extra query string parameters.
        headers : dict, optional
            Additional HTTP headers.
        context : RequestContext, optional
            Logging context.

        Raises
        ------
        HttpStatusError
            Non-retryable error status, or a retryable one on the last attempt.
        RateLimitError
            HTTP 429 on the last attempt.
        RequestTimeoutError, NetworkError
            Every attempt failed before a response arrived.
        """
        ctx = context or RequestContext(source=self._source_name, method="unknown")

        last_error: DataSourceError | None = None
        start = time.monotonic()

        for attempt in range(self.config.retry.max_retries + 1):
            try:
                session = await self._get_session()

                logger.info(
                    "Request [%s.%s] attempt=%d url=%s",
                    ctx.source,
                    ctx.method,
                    attempt + 1,
                    url,
                )

                # The URL arrives pre-encoded; stop yarl from requoting it.
                resp = await session.request(
                    method.upper(),
                    URL(url, encoded=True),
                    params=params,
                    headers=headers,
                )

                # --- Handle HTTP errors ---
                if resp.status in self.config.retry.retryable_status_codes:
                    body = await resp.text()
                    logger.warning(
                        "Retryable %d from %s.%s: %s",
                        resp.status,
                        ctx.source,
                        ctx.method,
                        body[:200],
                    )
                    error_cls = RateLimitError if resp.status == 429 else HttpStatusError
                    last_error = error_cls(
                        ctx.source,
                        f"HTTP {resp.status}: {body[:200]}",
                        status_code=resp.status,
                    )
                    if attempt >= self.config.retry.max_retries:
                        break
                    if resp.status == 429:
                        # Respect Retry-After header if present
                        retry_after = resp.headers.get("Retry-After")
                        if retry_after and retry_after.isdigit():
                            await asyncio.sleep(float(retry_after))
                            continue

                    await asyncio.sleep(self._backoff(attempt))
                    continue

                if resp.status >= 400:
                    body = await resp.text()
                    raise HttpStatusError(
                        ctx.source,
                        f"HTTP {resp.status}: {body[:500]}",
                        status_code=resp.status,
                    )

                # --- Success ---
                data = await resp.read()
                elapsed = time.monotonic() - start

                logger.info(
                    "Success [%s.%s] elapsed=%.2fs bytes=%d",
                    ctx.source,
                    ctx.method,
                    elapsed,
                    len(data),
                )
                return data

            except asyncio.TimeoutError:
                elapsed = time.monotonic() - start
                last_error = RequestTimeoutError(
                    ctx.source, f"Timeout after {elapsed:.1f}s"
                )
                logger.warning(
                    "Timeout [%s.%s] attempt=%d elapsed=%.1fs",
                    ctx.source,
                    ctx.method,
                    attempt + 1,
                    elapsed,
                )

            except aiohttp.ClientError as e:
                last_error = NetworkError(ctx.source, f"Connection error: {e}")
                logger.warning(
                    "Connection error [%s.%s] attempt=%d: %s",
                    ctx.source,
                    ctx.method,
                    attempt + 1,
                    e,
                )

            # Exponential backoff before next attempt
            if attempt < self.config.retry.max_retries:
                await asyncio.sleep(self._backoff(attempt))

        # --- All retries exhausted ---
        elapsed = time.monotonic() - start
        logger.error(
            "All retries exhausted [%s.%s] after %.1fs: %s",
            ctx.source,
            ctx.method,
            elapsed,
            last_error,
        )
        raise last_error

    # -- Convenience methods for subclasses ----------------------------------

    async def _rest_get_bytes(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        *,
        context: RequestContext | None = None,
    ) -> bytes:
        """GET a URL and return the non-empty response body."""
        data = await self._request("GET", url, params=params, context=context)
        if not data:
            ctx = context or RequestContext(source=self._source_name, method="unknown")
            raise NoDataError(ctx.source, f"Empty response body from {url}")
        return data
