"""
Pydantic schemas for OPF package document elements.

Elements are owned by a PackageDocument and stored in category-scoped
ordered sequences. Callers hold ElementRef values (category + id) and
hand them back to the document, which resolves them by lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict


class TitleType(str, Enum):
    """EPUB 3 title-type values."""

    MAIN = "main"
    SUBTITLE = "subtitle"
    SHORT = "short"
    COLLECTION = "collection"
    EDITION = "edition"
    EXPANDED = "expanded"


class ContributorRole(str, Enum):
    """Contributor roles with their MARC relator codes."""

    AUTHOR = "aut"
    TRANSLATOR = "trl"
    EDITOR = "edt"
    ILLUSTRATOR = "ill"

    @property
    def code(self) -> str:
        """MARC relator code."""
        return self.value


class ElementCategory(str, Enum):
    """Element sequences that can be the target of a refines link."""

    IDENTIFIER = "identifier"
    TITLE = "title"
    CREATOR = "creator"
    CONTRIBUTOR = "contributor"


@dataclass(frozen=True)
class ElementRef:
    """Lookup key for an element owned by a PackageDocument."""

    category: ElementCategory
    id: str
    owner: str = field(default="", compare=False, repr=False)

    @property
    def fragment(self) -> str:
        """Value used in refines attributes."""
        return f"#{self.id}"


class IdentifierElement(BaseModel):
    """dc:identifier element."""

    value: str
    id: str

    model_config = ConfigDict(frozen=True)


class TitleElement(BaseModel):
    """dc:title element; its type lives in a companion meta."""

    value: str
    id: str
    title_type: TitleType = TitleType.MAIN

    model_config = ConfigDict(frozen=True)


class ContributorElement(BaseModel):
    """dc:creator or dc:contributor element; its role lives in a companion meta."""

    value: str
    id: str
    role: ContributorRole = ContributorRole.AUTHOR

    model_config = ConfigDict(frozen=True)


class MetaElement(BaseModel):
    """EPUB 3 meta element, standalone or refining another element."""

    value: str
    property: str
    refines: str | None = None
    scheme: str | None = None
    lang: str | None = None

    model_config = ConfigDict(frozen=True)

    def refined_id(self) -> str | None:
        """Target id without the leading '#'."""
        if not self.refines:
            return None
        return self.refines.removeprefix("#")
