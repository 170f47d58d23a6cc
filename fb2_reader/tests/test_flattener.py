"""Tests for flattening document trees into display lines."""
import unittest
from datetime import date

from fb2_reader.errors import UnrecognizedNodeKindError
from fb2_reader.model.document_model import BinaryAsset, Fb2Document
from fb2_reader.model.elements import (
    BodyItem,
    CiteItem,
    DateItem,
    EmptyLineItem,
    EpigraphItem,
    ImageItem,
    PoemItem,
    SectionItem,
    SimpleText,
    StanzaItem,
)
from fb2_reader.model.lines import HeaderLine, ImageLine, TextLine
from fb2_reader.reader.flattener import LineFlattener, count_kinds, flatten
from fb2_reader.tests.fixtures import paragraph, title


class Footnote:
    """Node type the flattener does not model but that can render text."""

    def __init__(self, text):
        self.text = text

    def to_text(self):
        return self.text


class Table:
    """Node type with no text rendering at all."""


def single_section(*content, body_title=None) -> Fb2Document:
    return Fb2Document(bodies=[BodyItem(title=body_title, sections=[SectionItem(content=list(content))])])


class FlattenerTest(unittest.TestCase):
    """Test the depth-first line walker."""

    def test_end_to_end_example(self) -> None:
        payload = b"\x01\x02\x03"
        document = single_section(paragraph("Hello."), ImageItem("#pic1"), body_title=title("Chapter 1"))

        lines = flatten(document, {"pic1": payload})

        self.assertEqual(lines, [HeaderLine("Chapter 1"), TextLine("Hello."), ImageLine(payload)])

    def test_depth_first_order_over_nested_containers(self) -> None:
        inner = SectionItem(
            title=title("S1.1"),
            content=[
                paragraph("p2"),
                PoemItem(
                    title=title("P"),
                    content=[
                        StanzaItem(title=title("St"), lines=[paragraph("v1"), paragraph("v2")]),
                        DateItem(value=date(1999, 12, 31)),
                    ],
                ),
                CiteItem(content=[paragraph("p3"), EpigraphItem(content=[paragraph("p4")])]),
            ],
        )
        main = BodyItem(
            title=title("B"),
            sections=[
                SectionItem(title=title("S1"), content=[paragraph("p1"), inner, paragraph("p5")]),
                SectionItem(content=[paragraph("p6")]),
            ],
        )
        notes = BodyItem(name="notes", title=title("N"), sections=[SectionItem(content=[paragraph("p7")])])

        lines = flatten(Fb2Document(bodies=[main, notes]), {})

        self.assertEqual(
            lines,
            [
                HeaderLine("B"),
                HeaderLine("S1"),
                TextLine("p1"),
                HeaderLine("S1.1"),
                TextLine("p2"),
                HeaderLine("P"),
                HeaderLine("St"),
                TextLine("v1"),
                TextLine("v2"),
                TextLine("1999-12-31"),
                TextLine("p3"),
                TextLine("p4"),
                TextLine("p5"),
                TextLine("p6"),
                HeaderLine("N"),
                TextLine("p7"),
            ],
        )

    def test_multi_line_title_emits_one_header_per_paragraph(self) -> None:
        document = single_section(
            SectionItem(title=title("Part One", "The Beginning"), content=[paragraph("text")])
        )

        lines = flatten(document, {})

        self.assertEqual(lines, [HeaderLine("Part One"), HeaderLine("The Beginning"), TextLine("text")])

    def test_title_inside_content_is_plain_text(self) -> None:
        lines = flatten(single_section(title("a", "b")), {})
        self.assertEqual(lines, [TextLine("a\nb")])

    def test_leaf_renderings(self) -> None:
        document = single_section(
            EmptyLineItem(),
            SimpleText("plain"),
            DateItem(text="spring 1905"),
            DateItem(text="3 Feb 2001", value=date(2001, 2, 3)),
            DateItem(),
        )

        lines = flatten(document, {})

        self.assertEqual(
            lines,
            [TextLine(""), TextLine("plain"), TextLine("spring 1905"), TextLine("2001-02-03"), TextLine("")],
        )

    def test_missing_asset_is_skipped(self) -> None:
        document = single_section(paragraph("before"), ImageItem("#missing"), paragraph("after"))

        lines = flatten(document, {"other": b"x"})

        self.assertEqual(lines, [TextLine("before"), TextLine("after")])

    def test_anchor_marker_is_stripped(self) -> None:
        document = single_section(ImageItem("#cover"), ImageItem("cover"))

        lines = flatten(document, {"cover": b"img"})

        self.assertEqual(lines, [ImageLine(b"img"), ImageLine(b"img")])

    def test_assets_default_to_document_binaries(self) -> None:
        document = single_section(ImageItem("#pic"))
        document.binaries["pic"] = BinaryAsset(asset_id="pic", content_type="image/png", data=b"png")

        self.assertEqual(flatten(document), [ImageLine(b"png")])

    def test_flatten_is_idempotent(self) -> None:
        document = single_section(paragraph("one"), ImageItem("#a"), body_title=title("T"))
        flattener = LineFlattener({"a": b"a"})

        first = flattener.flatten(document)
        second = flattener.flatten(document)

        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_document_without_bodies_yields_nothing(self) -> None:
        self.assertEqual(flatten(Fb2Document(), {}), [])

    def test_empty_containers_yield_nothing(self) -> None:
        document = single_section(SectionItem(), PoemItem(), CiteItem(), EpigraphItem(), StanzaItem())
        self.assertEqual(flatten(document, {}), [])

    def test_unrecognized_node_aborts(self) -> None:
        document = single_section(paragraph("kept?"), Table())

        with self.assertRaises(UnrecognizedNodeKindError) as ctx:
            flatten(document, {})

        self.assertEqual(ctx.exception.kind, "Table")
        self.assertIn("Table", str(ctx.exception))

    def test_unrecognized_node_with_text_falls_back_to_text_line(self) -> None:
        document = single_section(paragraph("a"), Footnote("note"), "bare string", paragraph("b"))

        lines = flatten(document, {})

        self.assertEqual(lines, [TextLine("a"), TextLine("note"), TextLine("bare string"), TextLine("b")])

    def test_unrecognized_body_child_is_not_tolerated(self) -> None:
        document = Fb2Document(bodies=[BodyItem(sections=[Footnote("not a section")])])

        with self.assertRaises(UnrecognizedNodeKindError):
            flatten(document, {})

    def test_deep_nesting_does_not_hit_recursion_limit(self) -> None:
        node = SectionItem(content=[paragraph("deep")])
        for _ in range(2000):
            node = SectionItem(content=[node])
        document = Fb2Document(bodies=[BodyItem(sections=[node])])

        self.assertEqual(flatten(document, {}), [TextLine("deep")])

    def test_count_kinds(self) -> None:
        lines = [HeaderLine("h"), TextLine("a"), TextLine("b"), ImageLine(b"")]
        self.assertEqual(count_kinds(lines), {"header": 1, "text": 2, "image": 1})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
