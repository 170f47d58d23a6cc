"""High level entry point: load FB2 markup and read it as lines."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import BinaryIO, List, Optional

from fb2_reader.model.document_model import Fb2Document
from fb2_reader.model.lines import Line
from fb2_reader.parser.fb2_loader import Fb2Loader, LoadOptions
from fb2_reader.reader.flattener import flatten
from fb2_reader.utils.logger import get_logger

LOGGER = get_logger(__name__)


class Fb2Reader:
    """Loads books and turns them into flat line lists.

    The reader keeps no per-book state; each ``read`` returns a new list.
    The ``*_async`` variants run the same work on a worker thread.
    """

    def __init__(self, options: Optional[LoadOptions] = None) -> None:
        self._loader = Fb2Loader(options)

    @property
    def options(self) -> LoadOptions:
        return self._loader.options

    def load(self, stream: BinaryIO) -> Fb2Document:
        return self._loader.load_stream(stream)

    def load_string(self, xml: str) -> Fb2Document:
        return self._loader.load_string(xml)

    def load_path(self, path: Path) -> Fb2Document:
        return self._loader.load_path(path)

    def read(self, document: Fb2Document) -> List[Line]:
        lines = flatten(document)
        LOGGER.debug("Read %d lines from %d bodies", len(lines), len(document.bodies))
        return lines

    async def load_async(self, stream: BinaryIO) -> Fb2Document:
        return await asyncio.to_thread(self.load, stream)

    async def load_string_async(self, xml: str) -> Fb2Document:
        return await asyncio.to_thread(self.load_string, xml)

    async def read_async(self, document: Fb2Document) -> List[Line]:
        return await asyncio.to_thread(self.read, document)
