"""Unit tests for PubMedTool."""

from unittest.mock import AsyncMock, patch

import pytest

from pubmed_retriever.data_sources.pubmed import PubMedClient
from pubmed_retriever.tools.pubmed_tool import PubMedTool


def _tool() -> PubMedTool:
    return PubMedTool(api_wrapper=PubMedClient(email="test@example.com", max_retry=0))


def test_tool_identity():
    tool = _tool()

    assert tool.name == "pubmed"
    assert "PubMed" in tool.description
    assert "Input should be a search query." in tool.description


def test_invoke_delegates_to_run():
    tool = _tool()

    with patch.object(
        PubMedClient, "run", new=AsyncMock(return_value="Published: 2024")
    ) as mock_run:
        result = tool.invoke("covid-19 vaccine efficacy")

    assert result == "Published: 2024"
    mock_run.assert_awaited_once_with("covid-19 vaccine efficacy")


@pytest.mark.asyncio
async def test_ainvoke_delegates_to_run():
    tool = _tool()

    with patch.object(
        PubMedClient, "run", new=AsyncMock(return_value="No good PubMed Result was found")
    ) as mock_run:
        result = await tool.ainvoke("zzzz")

    assert result == "No good PubMed Result was found"
    mock_run.assert_awaited_once_with("zzzz")


@pytest.mark.asyncio
async def test_ainvoke_closes_client_session():
    tool = _tool()

    with (
        patch.object(PubMedClient, "run", new=AsyncMock(return_value="ok")),
        patch.object(PubMedClient, "close", new=AsyncMock()) as mock_close,
    ):
        result = await tool.ainvoke("zzzz")

    assert result == "ok"
    mock_close.assert_awaited_once()


@pytest.mark.asyncio
async def test_ainvoke_closes_client_session_on_error():
    tool = _tool()

    with (
        patch.object(PubMedClient, "run", new=AsyncMock(side_effect=RuntimeError("boom"))),
        patch.object(PubMedClient, "close", new=AsyncMock()) as mock_close,
    ):
        with pytest.raises(RuntimeError, match="boom"):
            await tool.ainvoke("zzzz")

    mock_close.assert_awaited_once()
