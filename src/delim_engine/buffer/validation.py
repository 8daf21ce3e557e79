"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import TextDocument
from .host import BufferValidationError
from .state import Offset


def ensure_offset(document: TextDocument, offset: Offset) -> Offset:
    if offset < 0 or offset > len(document):
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_range(
    document: TextDocument, start: Offset, end: Offset
) -> tuple[Offset, Offset]:
    start = ensure_offset(document, start)
    end = ensure_offset(document, end)
    if start > end:
        raise BufferValidationError("Range start after end", offset=start)
    return start, end
