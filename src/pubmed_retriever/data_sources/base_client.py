"""
Base client for remote data source clients.

Provides: a shared aiohttp session, retry with jittered exponential backoff,
structured logging, and the error taxonomy used by every client.
"""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel, Field

from pubmed_retriever.constants import (
    BACKOFF_JITTER_RATIO,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    MIN_BACKOFF_SECONDS,
)

logger = logging.getLogger("pubmed_retriever.data_sources")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class RetryConfig(BaseModel):
    """Retry behaviour for failed requests."""

    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    initial_delay: float = Field(default=DEFAULT_INITIAL_DELAY, ge=0)  # seconds
    backoff_factor: float = 2.0


class ClientConfig(BaseModel):
    """Top-level config aggregating retry and timeout."""

    retry: RetryConfig = RetryConfig()
    timeout_seconds: float = DEFAULT_TIMEOUT


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class RateLimitExceededError(DataSourceError):
    """Raised when 429 responses persist after the retry budget is spent."""

    pass


class HttpError(DataSourceError):
    """Raised for any non-429 error status. Never retried."""

    pass


class InvalidResponseError(DataSourceError):
    """Raised when a response body lacks data the protocol requires."""

    pass


# ---------------------------------------------------------------------------
# Backoff helpers
# ---------------------------------------------------------------------------


def _format_context(context: str | None) -> str:
    return f" ({context})" if context else ""


def describe_error(error: BaseException) -> str:
    """Message of `error`, or its class name when the message is empty."""
    # asyncio.TimeoutError and some aiohttp errors carry no message.
    return str(error) or type(error).__name__


def jittered_delay(delay: float) -> float:
    """Apply +/-25% jitter to a nominal delay, floored at MIN_BACKOFF_SECONDS."""
    jitter = delay * BACKOFF_JITTER_RATIO * random.uniform(-1.0, 1.0)
    return max(MIN_BACKOFF_SECONDS, delay + jitter)


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for remote API clients.

    Subclasses implement `_source_name` and their own typed methods that
    call `fetch_with_retry()` or the `_get_json()` / `_get_text()` wrappers.
    """

    def __init__(self, config: ClientConfig | None = None):
        self.config = config or ClientConfig()
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'pubmed'."""
        ...

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Core request with retry ---------------------------------------------

    async def fetch_with_retry(
        self, url: str, context: str | None = None
    ) -> aiohttp.ClientResponse:
        """
        GET `url`, retrying rate limits and network faults with backoff.

        Parameters
        ----------
        url : str
            Full URL, query string included.
        context : str, optional
            Label used in log lines and error messages only.

        Raises
        ------
        RateLimitExceededError
            The server kept answering 429 after `max_retries` retries.
        HttpError
            Any other non-2xx status (first occurrence, no retry).
        aiohttp.ClientError, asyncio.TimeoutError
            The last network fault once the retry budget is spent.
        """
        max_retries = self.config.retry.max_retries
        delay = self.config.retry.initial_delay
        label = _format_context(context)
        retry = 0

        while True:
            session = await self._get_session()
            try:
                resp = await session.get(url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if retry >= max_retries:
                    logger.error(
                        "All retries exhausted [%s]%s: %s",
                        self._source_name,
                        label,
                        describe_error(e),
                    )
                    raise
                logger.warning(
                    "Network error%s, retrying in %.2f seconds... (attempt %d/%d): %s",
                    label,
                    delay,
                    retry + 1,
                    max_retries,
                    describe_error(e),
                )
            else:
                if resp.status == 429:
                    resp.release()
                    if retry >= max_retries:
                        raise RateLimitExceededError(
                            self._source_name,
                            f"Rate limit exceeded{label} after {max_retries} retries",
                            status_code=429,
                        )
                    logger.warning(
                        "Rate limited%s, waiting for %.2f seconds... (attempt %d/%d)",
                        label,
                        delay,
                        retry + 1,
                        max_retries,
                    )
                elif not 200 <= resp.status < 300:
                    resp.release()
                    raise HttpError(
                        self._source_name,
                        f"HTTP error{label}: {resp.status} {resp.reason}",
                        status_code=resp.status,
                    )
                else:
                    return resp

            await asyncio.sleep(jittered_delay(delay))
            delay *= self.config.retry.backoff_factor
            retry += 1

    # -- Convenience methods for subclasses ----------------------------------

    async def _get_json(self, url: str, context: str | None = None) -> Any:
        """GET a JSON body; a body that is not JSON raises InvalidResponseError."""
        resp = await self.fetch_with_retry(url, context)
        try:
            return await resp.json(content_type=None)
        except ValueError as e:
            raise InvalidResponseError(
                self._source_name, f"Malformed JSON{_format_context(context)}: {e}"
            ) from e

    async def _get_text(self, url: str, context: str | None = None) -> str:
        """GET a text body (XML endpoints)."""
        resp = await self.fetch_with_retry(url, context)
        return await resp.text()
