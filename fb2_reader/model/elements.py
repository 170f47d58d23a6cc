"""In-memory representation of a parsed FictionBook document tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class RendersText(Protocol):
    """Anything that can be shown as a single line of text."""

    def to_text(self) -> str:
        ...


@dataclass(slots=True)
class TextRun:
    """Contiguous inline text with an optional inline style (strong, emphasis, ...)."""

    text: str
    style: Optional[str] = None


@dataclass(slots=True)
class ParagraphItem:
    """Paragraph-like block: ``p``, verse line ``v``, ``subtitle`` or ``text-author``."""

    runs: List[TextRun] = field(default_factory=list)
    kind: str = "p"

    def to_text(self) -> str:
        return "".join(run.text for run in self.runs)

    def __str__(self) -> str:
        return self.to_text()


@dataclass(slots=True)
class EmptyLineItem:
    """Explicit vertical gap between paragraphs."""

    def to_text(self) -> str:
        return ""

    def __str__(self) -> str:
        return self.to_text()


@dataclass(slots=True)
class SimpleText:
    """Bare text without any paragraph structure."""

    text: str

    def to_text(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


@dataclass(slots=True)
class TitleItem:
    """Title of a body, section, poem or stanza. Each paragraph is one header line."""

    paragraphs: List[ParagraphItem | EmptyLineItem] = field(default_factory=list)

    def to_text(self) -> str:
        return "\n".join(paragraph.to_text() for paragraph in self.paragraphs)

    def __str__(self) -> str:
        return self.to_text()


@dataclass(slots=True)
class ImageItem:
    """Reference to a binary asset, usually written as ``#id``."""

    href: str
    alt: Optional[str] = None
    title: Optional[str] = None


@dataclass(slots=True)
class DateItem:
    """Date with a human readable form and an optional machine value."""

    text: Optional[str] = None
    value: Optional[date] = None

    def to_text(self) -> str:
        if self.value is not None:
            return self.value.isoformat()
        return self.text or ""

    def __str__(self) -> str:
        return self.to_text()


@dataclass(slots=True)
class CiteItem:
    """Quoted material; shares the section content grammar."""

    content: List["ContentNode"] = field(default_factory=list)


@dataclass(slots=True)
class EpigraphItem:
    """Epigraph (or annotation) preceding the content it belongs to."""

    content: List["ContentNode"] = field(default_factory=list)


@dataclass(slots=True)
class StanzaItem:
    """Stanza of a poem holding verse lines."""

    title: Optional[TitleItem] = None
    lines: List["ContentNode"] = field(default_factory=list)


@dataclass(slots=True)
class PoemItem:
    """Poem with stanzas, epigraphs, author lines and a date."""

    title: Optional[TitleItem] = None
    content: List["ContentNode"] = field(default_factory=list)


@dataclass(slots=True)
class SectionItem:
    """Chapter-like division; sections nest freely."""

    title: Optional[TitleItem] = None
    content: List["ContentNode"] = field(default_factory=list)


@dataclass(slots=True)
class BodyItem:
    """Top-level division of a book. The main body has no name; notes use ``"notes"``."""

    name: Optional[str] = None
    title: Optional[TitleItem] = None
    sections: List[SectionItem] = field(default_factory=list)


ContentNode = (
    SectionItem
    | PoemItem
    | StanzaItem
    | CiteItem
    | EpigraphItem
    | ParagraphItem
    | EmptyLineItem
    | SimpleText
    | TitleItem
    | ImageItem
    | DateItem
)
