"""Aggregate model combining bodies, binary assets, and book metadata."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fb2_reader.model.elements import BodyItem


@dataclass(slots=True)
class BinaryAsset:
    """Decoded ``<binary>`` payload embedded in the book."""

    asset_id: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class Fb2Document:
    """Loaded book that the flattener consumes."""

    bodies: List[BodyItem] = field(default_factory=list)
    binaries: Dict[str, BinaryAsset] = field(default_factory=dict)
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def main_body(self) -> Optional[BodyItem]:
        """Return the first body, which holds the main text of the book."""
        if not self.bodies:
            return None
        return self.bodies[0]

    def asset_table(self) -> Dict[str, bytes]:
        """Return binary payloads keyed by identifier (without the anchor marker)."""
        return {asset_id: asset.data for asset_id, asset in self.binaries.items()}
