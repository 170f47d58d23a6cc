"""Entry-point for the FB2 reader pipeline."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, TextIO

from fb2_reader.model.lines import HeaderLine, ImageLine, Line, TextLine
from fb2_reader.parser.fb2_loader import LoadOptions
from fb2_reader.reader.fb2_reader import Fb2Reader
from fb2_reader.reader.flattener import count_kinds
from fb2_reader.utils.debug import DebugDumper
from fb2_reader.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)


def build_lines(fb2_path: Path, options: Optional[LoadOptions] = None) -> List[Line]:
    """Load an FB2 book and flatten it into display lines."""
    reader = Fb2Reader(options)
    document = reader.load_path(fb2_path)
    return reader.read(document)


def print_lines(lines: Iterable[Line], stream: TextIO) -> None:
    """Write a plain-text preview of the flattened book."""
    for line in lines:
        match line:
            case HeaderLine(text=text):
                stream.write(f"# {text}\n")
            case TextLine(text=text):
                stream.write(f"{text}\n")
            case ImageLine(data=data):
                stream.write(f"[image: {len(data)} bytes]\n")


def main(fb2_file: str, output_dir: Optional[str] = None, options: Optional[LoadOptions] = None) -> List[Line]:
    """Run the FB2 → document model → line list pipeline."""
    fb2_path = Path(fb2_file).resolve()
    if not fb2_path.exists():
        raise FileNotFoundError(f"FB2 file not found: {fb2_path}")

    LOGGER.info("Flattening %s", fb2_path.name)
    lines = build_lines(fb2_path, options)
    counts = count_kinds(lines)
    LOGGER.info(
        "Flattened %d lines (%d headers, %d text, %d images)",
        len(lines),
        counts["header"],
        counts["text"],
        counts["image"],
    )

    if output_dir is None:
        output_dir = str(fb2_path.with_suffix(""))

    output_path = Path(output_dir).resolve()
    target = DebugDumper(output_path).dump(lines)
    LOGGER.info("Wrote %s", target)
    return lines


def cli(argv: Optional[Sequence[str]] = None) -> None:
    """Parse command line arguments and run the pipeline."""
    parser = argparse.ArgumentParser(description="Flatten FB2 books into a linear list of display lines")
    parser.add_argument("fb2_file", help="Path to the input .fb2 file")
    parser.add_argument("--output", help="Directory to write lines.json into")
    parser.add_argument("--print", dest="print_lines", action="store_true", help="Print the lines to stdout")
    parser.add_argument("--collapse-whitespace", action="store_true", help="Collapse runs of whitespace in text")
    parser.add_argument("--tolerant", action="store_true", help="Skip unknown elements and undecodable values")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    set_verbosity(args.verbose)
    load_options = LoadOptions(preserve_whitespace=not args.collapse_whitespace, tolerant=args.tolerant)
    result = main(args.fb2_file, args.output, load_options)
    if args.print_lines:
        print_lines(result, sys.stdout)


if __name__ == "__main__":  # pragma: no cover
    cli()
