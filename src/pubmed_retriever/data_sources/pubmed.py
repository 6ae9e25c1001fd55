"""
PubMed E-utilities client.

Two-phase retrieval:
  1. search     — esearch with usehistory=y; yields a webenv + ordered PMIDs
  2. fetch      — efetch one PMID at a time, threading the webenv through

Public methods:
  lazy_load / load             — ArticleMetadata, streamed or collected
  lazy_load_docs / load_docs   — the same as langchain Documents
  run                          — formatted text for tool use; never raises
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from langchain_core.documents import Document

from pubmed_retriever.config import get_settings
from pubmed_retriever.constants import EXCEPTION_PREFIX, NO_RESULTS_FOUND
from pubmed_retriever.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    InvalidResponseError,
    RetryConfig,
    describe_error,
)
from pubmed_retriever.data_sources.pubmed_parser import (
    extract_article_metadata,
    parse_xml,
    to_document,
)
from pubmed_retriever.data_sources.url_builder import PubMedURLBuilder
from pubmed_retriever.models.model_pubmed import ArticleMetadata, SearchResult

logger = logging.getLogger(__name__)


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


class PubMedClient(BaseClient):
    """Client for searching PubMed and retrieving article metadata."""

    def __init__(
        self,
        top_k_results: int | None = None,
        max_query_length: int | None = None,
        doc_content_chars_max: int | None = None,
        max_retry: int | None = None,
        sleep_time: float | None = None,
        email: str | None = None,
        api_key: str | None = None,
    ) -> None:
        settings = get_settings()
        super().__init__(
            ClientConfig(
                retry=RetryConfig(
                    max_retries=_pick(max_retry, settings.pubmed_max_retry),
                    initial_delay=_pick(sleep_time, settings.pubmed_sleep_time),
                ),
                timeout_seconds=settings.http_timeout,
            )
        )
        self.top_k_results: int = _pick(top_k_results, settings.pubmed_top_k_results)
        self.max_query_length: int = _pick(
            max_query_length, settings.pubmed_max_query_length
        )
        self.doc_content_chars_max: int = _pick(
            doc_content_chars_max, settings.pubmed_doc_content_chars_max
        )
        self.url_builder = PubMedURLBuilder(
            email=_pick(email, settings.pubmed_email),
            api_key=_pick(api_key, settings.pubmed_api_key),
        )

    @property
    def _source_name(self) -> str:
        return "pubmed"

    # ------------------------------------------------------------------
    # Search / fetch phases
    # ------------------------------------------------------------------

    async def _search(self, query: str) -> SearchResult:
        url = self.url_builder.build_search_url(query, self.top_k_results)
        data = await self._get_json(url, "search request")

        result = data.get("esearchresult") if isinstance(data, dict) else None
        if not isinstance(result, dict) or not result.get("webenv"):
            raise InvalidResponseError(
                self._source_name, "Invalid response from PubMed API"
            )

        search = SearchResult(
            webenv=result["webenv"],
            id_list=(result.get("idlist") or [])[: self.top_k_results],
        )
        logger.info("PubMed search returned %d ids", len(search.id_list))
        return search

    async def _retrieve_article(self, uid: str, webenv: str) -> ArticleMetadata:
        url = self.url_builder.build_fetch_url(uid, webenv)
        xml_text = await self._get_text(url, f"article {uid}")
        return extract_article_metadata(uid, parse_xml(xml_text))

    # ------------------------------------------------------------------
    # Public: metadata
    # ------------------------------------------------------------------

    async def lazy_load(self, query: str) -> AsyncIterator[ArticleMetadata]:
        """Yield article metadata one record at a time, in search order.

        Each record is fetched only when the consumer asks for it, so
        breaking out of the loop stops all further requests.
        """
        search = await self._search(query[: self.max_query_length])
        for uid in search.id_list:
            logger.debug("Fetching PubMed article %s", uid)
            yield await self._retrieve_article(uid, search.webenv)

    async def load(self, query: str) -> list[ArticleMetadata]:
        """Search PubMed and collect every record's metadata."""
        return [article async for article in self.lazy_load(query)]

    # ------------------------------------------------------------------
    # Public: documents
    # ------------------------------------------------------------------

    async def lazy_load_docs(self, query: str) -> AsyncIterator[Document]:
        async for article in self.lazy_load(query):
            yield to_document(article)

    async def load_docs(self, query: str) -> list[Document]:
        return [doc async for doc in self.lazy_load_docs(query)]

    # ------------------------------------------------------------------
    # Public: run
    # ------------------------------------------------------------------

    @staticmethod
    def format_article(article: ArticleMetadata) -> str:
        return (
            f"Published: {article.published}\n"
            f"Title: {article.title}\n"
            f"Copyright Information: {article.copyright_information}\n"
            f"Summary:\n{article.summary}"
        )

    async def run(self, query: str) -> str:
        """Search PubMed and return formatted article metadata as text.

        Failures are reported in the returned string instead of raised.
        """
        try:
            articles = await self.load(query)
        except Exception as e:
            message = describe_error(e)
            logger.warning("PubMed retrieval failed: %s", message)
            return f"{EXCEPTION_PREFIX}{message}"

        if not articles:
            return NO_RESULTS_FOUND

        text = "\n\n".join(self.format_article(a) for a in articles)
        return text[: self.doc_content_chars_max]
