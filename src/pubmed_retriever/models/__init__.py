"""Data models for pubmed-retriever."""

from pubmed_retriever.models.model_abstract import (
    AbstractBody,
    AbstractSection,
    MissingAbstract,
    PlainAbstract,
    RecordAbstract,
    SectionedAbstract,
)
from pubmed_retriever.models.model_pubmed import ArticleMetadata, SearchResult

__all__ = [
    "AbstractBody",
    "AbstractSection",
    "ArticleMetadata",
    "MissingAbstract",
    "PlainAbstract",
    "RecordAbstract",
    "SearchResult",
    "SectionedAbstract",
]
