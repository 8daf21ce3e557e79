"""Linear undo/redo history for buffer transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .state import Offset

DEFAULT_MAX_ENTRIES = 200


@dataclass(slots=True)
class UndoEntry:
    label: str
    before_text: str
    after_text: str
    cursor_before: Offset
    cursor_after: Offset


class UndoTimeline:
    """One entry per committed transaction; pushing truncates any redo tail.

    Entries hold full text snapshots, so only the newest ``max_entries`` are
    kept; the oldest are dropped first.
    """

    def __init__(self, *, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: List[UndoEntry] = []
        self._index: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: UndoEntry) -> None:
        if self._index < len(self._entries) - 1:
            self._entries = self._entries[: self._index + 1]
        self._entries.append(entry)
        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]
