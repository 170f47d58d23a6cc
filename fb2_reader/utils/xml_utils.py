"""Helper functions to work with FictionBook XML namespaces and parsing."""
from __future__ import annotations

from typing import Optional
from xml.etree import ElementTree as ET

from fb2_reader.errors import Fb2ParseError


def parse_xml(data: bytes | str) -> ET.ElementTree:
    """Parse XML from raw bytes or text, wrapping syntax errors."""
    try:
        return ET.ElementTree(ET.fromstring(data))
    except ET.ParseError as exc:
        raise Fb2ParseError(f"Malformed FB2 markup: {exc}") from exc


def local_name(tag: object) -> str:
    """Return an element tag without its ``{namespace}`` prefix."""
    if not isinstance(tag, str):
        # Comments and processing instructions carry a factory function as tag.
        return ""
    return tag.rsplit("}", 1)[-1]


def get_attribute(element: ET.Element, name: str) -> Optional[str]:
    """Return an attribute by local name, whatever namespace prefix it carries."""
    value = element.get(name)
    if value is not None:
        return value
    for key, candidate in element.attrib.items():
        if local_name(key) == name:
            return candidate
    return None


def find_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    """Return the first direct child with the given local name."""
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def find_children(element: ET.Element, name: str) -> list[ET.Element]:
    """Return all direct children with the given local name."""
    return [child for child in element if local_name(child.tag) == name]
