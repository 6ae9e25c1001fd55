"""Unit tests for the command-line interface."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from pubmed_retriever.cli.cli import main
from pubmed_retriever.data_sources.base_client import InvalidResponseError
from pubmed_retriever.data_sources.pubmed import PubMedClient
from pubmed_retriever.models.model_pubmed import ArticleMetadata

ARTICLES = [
    ArticleMetadata(uid="1", title="First", published="2024-01-02", summary="S1"),
    ArticleMetadata(uid="2", title="Second", published="2023", summary="S2"),
]


async def _stream(self, query):
    for article in ARTICLES:
        yield article


def test_search_text():
    runner = CliRunner()

    with patch.object(PubMedClient, "run", new=AsyncMock(return_value="Published: x")):
        result = runner.invoke(main, ["search", "crispr"])

    assert result.exit_code == 0
    assert "Published: x" in result.output


def test_search_json():
    runner = CliRunner()

    with patch.object(PubMedClient, "load", new=AsyncMock(return_value=ARTICLES)):
        result = runner.invoke(main, ["search", "crispr", "--format", "json", "-k", "2"])

    assert result.exit_code == 0
    records = json.loads(result.output)
    assert [r["uid"] for r in records] == ["1", "2"]
    assert records[0]["summary"] == "S1"


def test_search_stream():
    runner = CliRunner()

    with patch.object(PubMedClient, "lazy_load", new=_stream):
        result = runner.invoke(main, ["search", "crispr", "-f", "stream"])

    assert result.exit_code == 0
    assert "1. [2024-01-02] First" in result.output
    assert "2. [2023] Second" in result.output
    assert "2 article(s)" in result.output


def test_search_error_is_reported():
    runner = CliRunner()

    with patch.object(
        PubMedClient,
        "load",
        new=AsyncMock(
            side_effect=InvalidResponseError("pubmed", "Invalid response from PubMed API")
        ),
    ):
        result = runner.invoke(main, ["search", "crispr", "-f", "json"])

    assert result.exit_code == 1
    assert "Invalid response from PubMed API" in result.output


def test_search_timeout_is_reported():
    runner = CliRunner()

    with patch.object(
        PubMedClient, "load", new=AsyncMock(side_effect=asyncio.TimeoutError())
    ):
        result = runner.invoke(main, ["search", "crispr", "-f", "json"])

    assert result.exit_code == 1
    assert "Error: TimeoutError" in result.output
