"""
Tagged variants for the shapes an AbstractText element takes.

xmltodict yields a plain string for an unlabelled abstract, a list of
``{"@Label": ..., "#text": ...}`` mappings for a structured one, and an
arbitrary mapping when the element carries attributes or inline markup.
Each shape is one variant; ``render()`` turns it into summary text.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from pubmed_retriever.constants import NO_ABSTRACT_AVAILABLE


class AbstractSection(BaseModel):
    """One labelled part of a structured abstract, e.g. METHODS."""

    label: str
    text: str


class MissingAbstract(BaseModel):
    kind: Literal["missing"] = "missing"

    def render(self) -> str:
        return NO_ABSTRACT_AVAILABLE


class PlainAbstract(BaseModel):
    kind: Literal["plain"] = "plain"
    text: str

    def render(self) -> str:
        # An empty string is kept; it is not the same as a missing abstract.
        return self.text


class SectionedAbstract(BaseModel):
    kind: Literal["sectioned"] = "sectioned"
    sections: list[AbstractSection] = []

    def render(self) -> str:
        if not self.sections:
            return NO_ABSTRACT_AVAILABLE
        return "\n".join(f"{s.label}: {s.text}" for s in self.sections)


class RecordAbstract(BaseModel):
    kind: Literal["record"] = "record"
    values: list[str] = []

    def render(self) -> str:
        if not self.values:
            return NO_ABSTRACT_AVAILABLE
        return "\n".join(self.values)


AbstractBody = Annotated[
    Union[MissingAbstract, PlainAbstract, SectionedAbstract, RecordAbstract],
    Field(discriminator="kind"),
]
