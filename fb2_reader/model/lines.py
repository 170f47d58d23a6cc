"""Flat line records produced by the reader for linear display."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HeaderLine:
    """A single heading line taken from a title paragraph."""

    text: str


@dataclass(frozen=True, slots=True)
class TextLine:
    """Plain body text: paragraphs, verse lines, empty lines and dates."""

    text: str


@dataclass(frozen=True, slots=True)
class ImageLine:
    """Binary image payload resolved from the document's asset table."""

    data: bytes


Line = HeaderLine | TextLine | ImageLine
