"""FB2 loader responsible for turning FictionBook XML into the document model."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional
from xml.etree import ElementTree as ET

from fb2_reader.errors import Fb2ParseError
from fb2_reader.model.document_model import Fb2Document
from fb2_reader.model.elements import (
    BodyItem,
    CiteItem,
    ContentNode,
    DateItem,
    EmptyLineItem,
    EpigraphItem,
    ImageItem,
    ParagraphItem,
    PoemItem,
    SectionItem,
    StanzaItem,
    TextRun,
    TitleItem,
)
from fb2_reader.parser.binary_extractor import BinaryExtractor
from fb2_reader.utils.logger import get_logger
from fb2_reader.utils.text_normalizer import TextNormalizer
from fb2_reader.utils.xml_utils import find_child, find_children, get_attribute, local_name, parse_xml

LOGGER = get_logger(__name__)

ROOT_TAG = "FictionBook"
PARAGRAPH_TAGS = frozenset({"p", "v", "subtitle", "text-author"})
# Valid FB2 that has no line representation.
SKIPPED_TAGS = frozenset({"table"})
BODY_SKIPPED_TAGS = frozenset({"epigraph", "image"})
AUTHOR_NAME_PARTS = ("first-name", "middle-name", "last-name")


@dataclass(frozen=True, slots=True)
class LoadOptions:
    """Options controlling how raw markup becomes document text.

    ``preserve_whitespace`` keeps text exactly as written; when False runs of
    whitespace collapse to one space and paragraphs are trimmed.
    ``tolerant`` skips unknown elements and undecodable values instead of
    failing. Broken XML syntax is always fatal.
    """

    preserve_whitespace: bool = True
    tolerant: bool = False


class Fb2Loader:
    """Parses FictionBook markup into :class:`Fb2Document` instances."""

    def __init__(self, options: Optional[LoadOptions] = None) -> None:
        self.options = options or LoadOptions()
        self._normalizer = TextNormalizer(preserve_whitespace=self.options.preserve_whitespace)

    # ------------------------------------------------------------------
    # Public helpers
    def load_path(self, path: Path) -> Fb2Document:
        path = Path(path)
        data = path.read_bytes()
        LOGGER.debug("Read %d bytes from %s", len(data), path.name)
        return self.load_bytes(data)

    def load_stream(self, stream: BinaryIO) -> Fb2Document:
        return self.load_bytes(stream.read())

    def load_bytes(self, data: bytes) -> Fb2Document:
        return self._build(parse_xml(data))

    def load_string(self, xml: str) -> Fb2Document:
        return self._build(parse_xml(xml))

    # ------------------------------------------------------------------
    # Document structure
    def _build(self, tree: ET.ElementTree) -> Fb2Document:
        root = tree.getroot()
        if local_name(root.tag) != ROOT_TAG:
            raise Fb2ParseError(f"Expected <{ROOT_TAG}> root element, found <{local_name(root.tag)}>")

        metadata = self._parse_description(find_child(root, "description"))
        bodies = [self._parse_body(body) for body in find_children(root, "body")]
        binaries = BinaryExtractor(tolerant=self.options.tolerant).extract(find_children(root, "binary"))

        LOGGER.debug("Loaded %d bodies and %d binaries", len(bodies), len(binaries))
        return Fb2Document(bodies=bodies, binaries=binaries, metadata=metadata)

    def _parse_description(self, description: Optional[ET.Element]) -> Dict[str, object]:
        metadata: Dict[str, object] = {}
        if description is None:
            return metadata
        title_info = find_child(description, "title-info")
        if title_info is None:
            return metadata

        book_title = find_child(title_info, "book-title")
        if book_title is not None:
            metadata["book_title"] = self._plain_text(book_title)
        lang = find_child(title_info, "lang")
        if lang is not None:
            metadata["lang"] = self._plain_text(lang)
        metadata["genres"] = [self._plain_text(genre) for genre in find_children(title_info, "genre")]
        metadata["authors"] = [self._author_name(author) for author in find_children(title_info, "author")]
        return metadata

    def _author_name(self, author: ET.Element) -> str:
        parts = []
        for name in AUTHOR_NAME_PARTS:
            element = find_child(author, name)
            text = self._plain_text(element) if element is not None else ""
            if text:
                parts.append(text)
        if not parts:
            nickname = find_child(author, "nickname")
            if nickname is not None:
                parts.append(self._plain_text(nickname))
        return " ".join(parts)

    def _parse_body(self, body_el: ET.Element) -> BodyItem:
        body = BodyItem(name=get_attribute(body_el, "name"))
        for child in body_el:
            tag = local_name(child.tag)
            if tag == "title" and body.title is None:
                body.title = self._parse_title(child)
            elif tag == "section":
                body.sections.append(self._parse_section(child))
            elif tag in BODY_SKIPPED_TAGS:
                LOGGER.debug("Skipping body-level element: %s", tag)
            elif tag:
                self._unexpected(tag, "body")
        return body

    def _parse_section(self, section_el: ET.Element) -> SectionItem:
        title, content = self._parse_titled(section_el, "section")
        return SectionItem(title=title, content=content)

    def _parse_poem(self, poem_el: ET.Element) -> PoemItem:
        title, content = self._parse_titled(poem_el, "poem")
        return PoemItem(title=title, content=content)

    def _parse_stanza(self, stanza_el: ET.Element) -> StanzaItem:
        title, lines = self._parse_titled(stanza_el, "stanza")
        return StanzaItem(title=title, lines=lines)

    def _parse_titled(self, element: ET.Element, context: str) -> tuple[Optional[TitleItem], List[ContentNode]]:
        """Split a container into its own title and the remaining content."""
        title: Optional[TitleItem] = None
        content: List[ContentNode] = []
        for child in element:
            tag = local_name(child.tag)
            if tag == "title" and title is None and not content:
                title = self._parse_title(child)
                continue
            node = self._parse_node(child, tag, context)
            if node is not None:
                content.append(node)
        return title, content

    def _parse_content(self, element: ET.Element, context: str) -> List[ContentNode]:
        content: List[ContentNode] = []
        for child in element:
            node = self._parse_node(child, local_name(child.tag), context)
            if node is not None:
                content.append(node)
        return content

    def _parse_node(self, element: ET.Element, tag: str, context: str) -> Optional[ContentNode]:
        if not tag:
            return None
        if tag in PARAGRAPH_TAGS:
            return self._parse_paragraph(element)
        if tag == "empty-line":
            return EmptyLineItem()
        if tag == "section":
            return self._parse_section(element)
        if tag == "poem":
            return self._parse_poem(element)
        if tag == "stanza":
            return self._parse_stanza(element)
        if tag == "cite":
            return CiteItem(content=self._parse_content(element, tag))
        if tag in ("epigraph", "annotation"):
            return EpigraphItem(content=self._parse_content(element, tag))
        if tag == "title":
            return self._parse_title(element)
        if tag == "image":
            return self._parse_image(element)
        if tag == "date":
            return self._parse_date(element)
        if tag in SKIPPED_TAGS:
            LOGGER.debug("Skipping unsupported element: %s", tag)
            return None
        return self._unexpected(tag, context)

    # ------------------------------------------------------------------
    # Leaf elements
    def _parse_title(self, title_el: ET.Element) -> TitleItem:
        title = TitleItem()
        for child in title_el:
            tag = local_name(child.tag)
            if tag == "p":
                title.paragraphs.append(self._parse_paragraph(child))
            elif tag == "empty-line":
                title.paragraphs.append(EmptyLineItem())
            elif tag:
                self._unexpected(tag, "title")
        return title

    def _parse_paragraph(self, paragraph_el: ET.Element) -> ParagraphItem:
        runs: List[TextRun] = []
        self._append_run(runs, paragraph_el.text, None)
        for child in paragraph_el:
            tag = local_name(child.tag)
            if tag:
                # Nested inline markup keeps only the outermost style.
                self._append_run(runs, "".join(child.itertext()), tag)
            self._append_run(runs, child.tail, None)

        if not self.options.preserve_whitespace:
            runs = self._collapse_runs(runs)
        return ParagraphItem(runs=runs, kind=local_name(paragraph_el.tag))

    def _append_run(self, runs: List[TextRun], text: Optional[str], style: Optional[str]) -> None:
        normalized = self._normalizer.normalize_fragment(text)
        if normalized:
            runs.append(TextRun(text=normalized, style=style))

    def _collapse_runs(self, runs: List[TextRun]) -> List[TextRun]:
        """Collapse whitespace across run boundaries and trim the paragraph."""
        collapsed: List[TextRun] = []
        # True at the start so leading whitespace is dropped.
        after_space = True
        for run in runs:
            text = run.text[1:] if after_space and run.text.startswith(" ") else run.text
            if not text:
                continue
            collapsed.append(TextRun(text=text, style=run.style))
            after_space = text.endswith(" ")
        while collapsed:
            collapsed[-1].text = collapsed[-1].text.rstrip()
            if collapsed[-1].text:
                break
            collapsed.pop()
        return collapsed

    def _parse_image(self, image_el: ET.Element) -> Optional[ImageItem]:
        href = get_attribute(image_el, "href")
        if not href:
            return self._reject("image element without href")
        return ImageItem(href=href, alt=get_attribute(image_el, "alt"), title=get_attribute(image_el, "title"))

    def _parse_date(self, date_el: ET.Element) -> Optional[DateItem]:
        text = self._plain_text(date_el) or None
        raw_value = get_attribute(date_el, "value")
        value: Optional[date] = None
        if raw_value:
            try:
                value = date.fromisoformat(raw_value.strip())
            except ValueError as exc:
                if not self.options.tolerant:
                    raise Fb2ParseError(f"Invalid date value: {raw_value!r}") from exc
                LOGGER.warning("Ignoring invalid date value %r", raw_value)
        return DateItem(text=text, value=value)

    def _plain_text(self, element: ET.Element) -> str:
        return self._normalizer.extract_plain_text(element).strip()

    # ------------------------------------------------------------------
    # Malformed markup
    def _unexpected(self, tag: str, context: str) -> None:
        self._reject(f"unexpected <{tag}> inside <{context}>")

    def _reject(self, message: str) -> None:
        if not self.options.tolerant:
            raise Fb2ParseError(message)
        LOGGER.debug("Skipping %s", message)
        return None
