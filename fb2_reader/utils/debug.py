"""Helpers to persist flattened line lists for debugging."""
from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any, Dict, Iterable

from fb2_reader.model.lines import HeaderLine, ImageLine, Line, TextLine


class DebugDumper:
    """Writes flattened output onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, lines: Iterable[Line]) -> Path:
        """Persist the line list as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = [self._serialize(line) for line in lines]
        target = self.directory / "lines.json"
        target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        return target

    def _serialize(self, line: Line) -> Dict[str, Any]:
        match line:
            case HeaderLine(text=text):
                return {"kind": "header", "text": text}
            case TextLine(text=text):
                return {"kind": "text", "text": text}
            case ImageLine(data=data):
                return {"kind": "image", "size": len(data), "data": base64.b64encode(data).decode("ascii")}
        raise TypeError(f"Cannot serialize {type(line).__name__}")
