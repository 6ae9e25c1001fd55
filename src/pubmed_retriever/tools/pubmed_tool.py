"""LangChain tool exposing PubMedClient.run to agents."""

import asyncio

from langchain_core.callbacks import (
    AsyncCallbackManagerForToolRun,
    CallbackManagerForToolRun,
)
from langchain_core.tools import BaseTool
from pydantic import ConfigDict, Field

from pubmed_retriever.data_sources.pubmed import PubMedClient


class PubMedTool(BaseTool):
    """Tool that searches PubMed and returns article summaries as text."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = "pubmed"
    description: str = (
        "A wrapper around PubMed. "
        "Useful for when you need to answer questions about medicine, health, "
        "and biomedical topics from biomedical literature, MEDLINE, life science "
        "journals, and online books. "
        "Input should be a search query."
    )
    api_wrapper: PubMedClient = Field(default_factory=PubMedClient)

    def _run(
        self, query: str, run_manager: CallbackManagerForToolRun | None = None
    ) -> str:
        # The aiohttp session is bound to the loop that created it, so it is
        # closed before asyncio.run tears that loop down.
        async def _invoke() -> str:
            try:
                return await self.api_wrapper.run(query)
            finally:
                await self.api_wrapper.close()

        return asyncio.run(_invoke())

    async def _arun(
        self, query: str, run_manager: AsyncCallbackManagerForToolRun | None = None
    ) -> str:
        try:
            return await self.api_wrapper.run(query)
        finally:
            await self.api_wrapper.close()
