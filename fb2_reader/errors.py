"""Exception types raised while loading and flattening books."""
from __future__ import annotations


class UnrecognizedNodeKindError(TypeError):
    """Raised when the document tree holds a node the flattener cannot place.

    The whole flatten call is aborted; ``kind`` carries the type name of the
    offending node so callers can see what needs supporting.
    """

    def __init__(self, kind: str):
        super().__init__(f"Unrecognized node kind: {kind}")
        self.kind = kind


class Fb2ParseError(ValueError):
    """Raised when raw FB2 markup cannot be turned into a document."""
