"""
Normalise efetch XML into ArticleMetadata.

efetch answers with one of two document families:

  PubmedArticleSet/PubmedArticle/MedlineCitation/Article      journal articles
  PubmedArticleSet/PubmedBookArticle/BookDocument             book chapters

Both share ArticleTitle, ArticleDate and Abstract, so extraction runs against
whichever body is present. Nothing here raises: absent or malformed fields
fall back to their defaults.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict
from langchain_core.documents import Document

from pubmed_retriever.models.model_abstract import (
    AbstractBody,
    AbstractSection,
    MissingAbstract,
    PlainAbstract,
    RecordAbstract,
    SectionedAbstract,
)
from pubmed_retriever.models.model_pubmed import ArticleMetadata

logger = logging.getLogger(__name__)

ATTR_PREFIX = "@"
TEXT_KEY = "#text"
LABEL_KEY = f"{ATTR_PREFIX}Label"

_ARTICLE_PATHS: tuple[tuple[str, ...], ...] = (
    ("PubmedArticleSet", "PubmedArticle", "MedlineCitation", "Article"),
    ("PubmedArticleSet", "PubmedBookArticle", "BookDocument"),
)


def parse_xml(xml_text: str) -> dict[str, Any]:
    """Parse XML into a dict tree (attributes as ``@name``, text as ``#text``).

    Unparsable input yields an empty dict.
    """
    try:
        return xmltodict.parse(xml_text, attr_prefix=ATTR_PREFIX, cdata_key=TEXT_KEY)
    except (ExpatError, ValueError, TypeError) as e:
        logger.warning("Could not parse efetch XML: %s", e)
        return {}


def _first(value: Any) -> Any:
    # xmltodict turns repeated elements into lists
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _walk(tree: Any, path: tuple[str, ...]) -> Any:
    node = tree
    for key in path:
        node = _first(node)
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return _first(node)


def _article_body(tree: Mapping[str, Any]) -> Mapping[str, Any]:
    for path in _ARTICLE_PATHS:
        body = _walk(tree, path)
        if isinstance(body, Mapping):
            return body
    return {}


def _title(body: Mapping[str, Any]) -> str:
    title = body.get("ArticleTitle")
    if title is None:
        return ""
    if isinstance(title, str):
        return title
    # Inline markup (<i>, <sup>) turns the title into a mapping.
    return json.dumps(title, ensure_ascii=False)


def _publication_date(body: Mapping[str, Any]) -> str:
    article_date = _first(body.get("ArticleDate"))
    if not isinstance(article_date, Mapping):
        return ""

    parts = []
    year = article_date.get("Year")
    month = article_date.get("Month")
    day = article_date.get("Day")
    if year:
        parts.append(str(year))
    if month:
        parts.append(str(month).zfill(2))
    if day:
        parts.append(str(day).zfill(2))
    return "-".join(parts)


def _section(entry: Any) -> AbstractSection | None:
    if isinstance(entry, Mapping) and LABEL_KEY in entry and TEXT_KEY in entry:
        return AbstractSection(label=str(entry[LABEL_KEY]), text=str(entry[TEXT_KEY]))
    return None


def classify_abstract(raw: Any) -> AbstractBody:
    """Map a raw AbstractText value onto its abstract variant."""
    if raw is None:
        return MissingAbstract()
    if isinstance(raw, str):
        return PlainAbstract(text=raw)
    if isinstance(raw, list):
        sections = [s for s in map(_section, raw) if s is not None]
        return SectionedAbstract(sections=sections)
    if isinstance(raw, Mapping):
        # A lone <AbstractText Label=..> is a mapping too; it keeps the record rule.
        return RecordAbstract(values=[v for v in raw.values() if isinstance(v, str)])
    return MissingAbstract()


def extract_article_metadata(uid: str, tree: Mapping[str, Any]) -> ArticleMetadata:
    """Build ArticleMetadata for `uid` from a parsed efetch document."""
    body = _article_body(tree) if isinstance(tree, Mapping) else {}
    abstract = body.get("Abstract")
    if not isinstance(abstract, Mapping):
        abstract = {}

    copyright_information = abstract.get("CopyrightInformation")
    if not isinstance(copyright_information, str):
        copyright_information = ""

    return ArticleMetadata(
        uid=uid,
        title=_title(body),
        published=_publication_date(body),
        copyright_information=copyright_information,
        summary=classify_abstract(abstract.get("AbstractText")).render(),
    )


def to_document(metadata: ArticleMetadata) -> Document:
    """Summary as page content; every other field as metadata."""
    return Document(page_content=metadata.summary, metadata=metadata.to_metadata())
