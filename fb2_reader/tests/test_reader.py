"""Tests for the Fb2Reader facade."""
import io
import unittest

from fb2_reader.model.lines import HeaderLine, ImageLine, TextLine
from fb2_reader.parser.fb2_loader import LoadOptions
from fb2_reader.reader.fb2_reader import Fb2Reader
from fb2_reader.tests.fixtures import PNG_HEADER, SAMPLE_FB2

EXPECTED_LINES = [
    HeaderLine("Sample Book"),
    HeaderLine("A Novel"),
    HeaderLine("Chapter 1"),
    TextLine("Quoted wisdom"),
    TextLine("Someone"),
    TextLine("Hello, brave world."),
    ImageLine(PNG_HEADER),
    TextLine(""),
    HeaderLine("Song"),
    TextLine("First verse"),
    TextLine("Second verse"),
    TextLine("2001-02-03"),
    TextLine("Cited text"),
    HeaderLine("1"),
    TextLine("A note"),
]


class Fb2ReaderTest(unittest.TestCase):
    """Test synchronous loading and reading."""

    def setUp(self) -> None:
        self.reader = Fb2Reader()

    def test_read_sample_book(self) -> None:
        document = self.reader.load_string(SAMPLE_FB2)
        self.assertEqual(self.reader.read(document), EXPECTED_LINES)

    def test_load_stream(self) -> None:
        document = self.reader.load(io.BytesIO(SAMPLE_FB2.encode("utf-8")))
        self.assertEqual(self.reader.read(document), EXPECTED_LINES)

    def test_repeated_reads_do_not_accumulate(self) -> None:
        document = self.reader.load_string(SAMPLE_FB2)

        first = self.reader.read(document)
        second = self.reader.read(document)

        self.assertEqual(first, second)
        self.assertEqual(len(second), len(EXPECTED_LINES))

    def test_options_are_forwarded(self) -> None:
        options = LoadOptions(preserve_whitespace=False, tolerant=True)
        self.assertEqual(Fb2Reader(options).options, options)


class Fb2ReaderAsyncTest(unittest.IsolatedAsyncioTestCase):
    """Test the thread-offloaded async wrappers."""

    async def test_load_and_read_async(self) -> None:
        reader = Fb2Reader()

        document = await reader.load_string_async(SAMPLE_FB2)
        lines = await reader.read_async(document)

        self.assertEqual(lines, EXPECTED_LINES)

    async def test_load_stream_async(self) -> None:
        reader = Fb2Reader()

        document = await reader.load_async(io.BytesIO(SAMPLE_FB2.encode("utf-8")))

        self.assertEqual(len(document.bodies), 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
