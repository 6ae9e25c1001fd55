"""
Pydantic models for PubMed data.

These are the data contracts between the PubMed client and its callers.
Callers receive these models - they never see raw API responses.
"""

from typing import Any

from pydantic import BaseModel


class ArticleMetadata(BaseModel):
    """Normalised metadata for one PubMed record. Every field is always set."""

    uid: str  # PubMed identifier (e.g. "38472913")
    title: str = ""
    published: str = ""  # "", "YYYY", "YYYY-MM" or "YYYY-MM-DD"
    copyright_information: str = ""
    summary: str = ""  # "No abstract available" when the record has none

    def to_metadata(self) -> dict[str, Any]:
        """Every field except the summary, for document metadata."""
        return self.model_dump(exclude={"summary"})


class SearchResult(BaseModel):
    """The parts of an esearch response the fetch phase needs."""

    webenv: str  # history-server continuation token
    id_list: list[str] = []
