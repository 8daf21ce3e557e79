"""Cursor state for buffers."""

from __future__ import annotations

from dataclasses import dataclass

Offset = int  # character offset into the flat document text


@dataclass(slots=True)
class BufferState:
    """Mutable cursor info tied to a TextDocument version."""

    cursor: Offset = 0

    def set_cursor(self, offset: Offset) -> None:
        self.cursor = offset
