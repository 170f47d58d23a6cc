"""Flatten a document tree into an ordered list of display lines."""
from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from fb2_reader.errors import UnrecognizedNodeKindError
from fb2_reader.model.document_model import Fb2Document
from fb2_reader.model.elements import (
    CiteItem,
    DateItem,
    EmptyLineItem,
    EpigraphItem,
    ImageItem,
    ParagraphItem,
    PoemItem,
    RendersText,
    SectionItem,
    SimpleText,
    StanzaItem,
    TitleItem,
)
from fb2_reader.model.lines import HeaderLine, ImageLine, Line, TextLine
from fb2_reader.utils.logger import get_logger

LOGGER = get_logger(__name__)

ANCHOR_MARKER = "#"

# (node, reached through a generic content sequence)
_Pending = Tuple[object, bool]


class LineFlattener:
    """Walks bodies depth-first and emits lines in visiting order.

    Every call to :meth:`flatten` builds a new list, so one instance can be
    shared between threads as long as the asset table is not mutated.
    """

    def __init__(self, assets: Mapping[str, bytes]) -> None:
        self._assets = assets

    def flatten(self, document: Fb2Document) -> List[Line]:
        """Return the lines of every body, main body first."""
        lines: List[Line] = []
        if document.main_body is None:
            LOGGER.debug("Document has no main body; nothing to flatten")
            return lines

        for body in document.bodies:
            self._add_title(lines, body.title)
            self._walk(lines, body.sections, generic=False)
        return lines

    def _walk(self, lines: List[Line], nodes: Sequence[object], *, generic: bool) -> None:
        # Iterative walk; nesting depth is unbounded.
        stack: List[_Pending] = [(node, generic) for node in reversed(nodes)]
        while stack:
            node, from_sequence = stack.pop()
            children = self._visit(lines, node, from_sequence)
            stack.extend((child, True) for child in reversed(children))

    def _visit(self, lines: List[Line], node: object, from_sequence: bool) -> Sequence[object]:
        """Emit the lines owned by ``node`` and return the children still to visit."""
        match node:
            case SectionItem(title=title, content=content) | PoemItem(title=title, content=content):
                self._add_title(lines, title)
                return content
            case StanzaItem(title=title, lines=verses):
                self._add_title(lines, title)
                return verses
            case CiteItem(content=content) | EpigraphItem(content=content):
                return content
            case ParagraphItem() | EmptyLineItem() | SimpleText() | TitleItem() | DateItem():
                lines.append(TextLine(node.to_text()))
            case ImageItem(href=href):
                self._add_image(lines, href)
            case _ if from_sequence and isinstance(node, str):
                lines.append(TextLine(node))
            case _ if from_sequence and isinstance(node, RendersText):
                # Generic containers may hold nodes we do not model; keep their text.
                LOGGER.debug("Rendering %s as plain text", type(node).__name__)
                lines.append(TextLine(node.to_text()))
            case _:
                raise UnrecognizedNodeKindError(type(node).__name__)
        return ()

    def _add_title(self, lines: List[Line], title: Optional[TitleItem]) -> None:
        if title is None:
            return
        lines.extend(HeaderLine(paragraph.to_text()) for paragraph in title.paragraphs)

    def _add_image(self, lines: List[Line], href: str) -> None:
        key = href.replace(ANCHOR_MARKER, "")
        data = self._assets.get(key)
        if data is None:
            LOGGER.debug("Image %r not found in asset table; skipping", key)
            return
        lines.append(ImageLine(data))


def flatten(document: Fb2Document, assets: Optional[Mapping[str, bytes]] = None) -> List[Line]:
    """Flatten ``document`` into lines, resolving images against ``assets``.

    When ``assets`` is omitted the document's own binaries are used.
    Raises :class:`UnrecognizedNodeKindError` for nodes that cannot be placed;
    no partial result is returned in that case.
    """
    if assets is None:
        assets = document.asset_table()
    return LineFlattener(assets).flatten(document)


def count_kinds(lines: Iterable[Line]) -> Mapping[str, int]:
    """Summarize how many lines of each kind a flattened book holds."""
    counts = {"header": 0, "text": 0, "image": 0}
    for line in lines:
        if isinstance(line, HeaderLine):
            counts["header"] += 1
        elif isinstance(line, TextLine):
            counts["text"] += 1
        elif isinstance(line, ImageLine):
            counts["image"] += 1
    return counts
