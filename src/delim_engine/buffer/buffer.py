"""In-memory text host combining document, cursor state, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from re import Match, Pattern
from typing import ContextManager, Iterator, Optional

from delim_engine.runtime import telemetry

from .document import TextDocument
from .host import BufferMirror, SearchMatch
from .state import BufferState, Offset
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range


class Buffer:
    """Reference implementation of the ``TextHost`` protocol."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or TextDocument()
        self.state = state or BufferState()
        self.undo_timeline = undo or UndoTimeline()
        self._transaction: Optional[Transaction] = None

    @classmethod
    def from_text(
        cls, text: str, *, cursor: Offset = 0, name: str = "default"
    ) -> "Buffer":
        buffer = cls(name=name, document=TextDocument.from_text(text))
        buffer.cursor = cursor
        return buffer

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def length(self) -> int:
        return len(self.document)

    @property
    def cursor(self) -> Offset:
        return self.state.cursor

    @cursor.setter
    def cursor(self, offset: Offset) -> None:
        self.state.set_cursor(ensure_offset(self.document, offset))

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    def search_forward(
        self, pattern: Pattern[str], start: Offset, bound: Optional[Offset] = None
    ) -> Optional[SearchMatch]:
        start = ensure_offset(self.document, start)
        endpos = self.length if bound is None else max(start, min(bound, self.length))
        return _to_search_match(pattern.search(self.document.text, start, endpos))

    def search_backward(
        self, pattern: Pattern[str], start: Offset, bound: Offset = 0
    ) -> Optional[SearchMatch]:
        start = ensure_offset(self.document, start)
        text = self.document.text
        for begin in range(start, max(bound, 0) - 1, -1):
            found = pattern.match(text, begin, start)
            if found is not None:
                return _to_search_match(found)
        return None

    def read(self, start: Offset, end: Offset) -> str:
        start, end = ensure_range(self.document, start, end)
        return self.document.slice(start, end)

    def replace(self, start: Offset, end: Offset, text: str) -> None:
        start, end = ensure_range(self.document, start, end)
        if self._transaction is None:
            with self.edit("replace"):
                self._splice(start, end, text)
        else:
            self._splice(start, end, text)

    def _splice(self, start: Offset, end: Offset, text: str) -> None:
        self.document = self.document.splice(start, end, text)

    @contextmanager
    def excursion(self) -> Iterator[None]:
        saved = self.state.cursor
        try:
            yield
        finally:
            self.state.set_cursor(saved)

    def edit(self, label: str) -> ContextManager["Transaction"]:
        """Open a transaction; nested calls join the one already running."""

        if self._transaction is not None:
            return _joined(self._transaction)
        return Transaction(self, label)

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.cursor_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.cursor_after)
        return True

    def _restore(self, text: str, cursor: Offset) -> None:
        self.document = self.document.restore(text)
        self.state.set_cursor(min(cursor, len(self.document)))


class Transaction(AbstractContextManager["Transaction"]):
    """Atomic edit scope: commits one undo entry or rolls everything back."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_text = ""
        self._before_cursor: Offset = 0

    def __enter__(self) -> "Transaction":
        self._before_text = self.buffer.document.text
        self._before_cursor = self.buffer.state.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        self.buffer._transaction = self
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.buffer._transaction = None
        try:
            if exc_type is not None:
                self._rollback()
            else:
                self._commit()
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def _commit(self) -> None:
        after_text = self.buffer.document.text
        if after_text == self._before_text:
            return
        self.buffer.undo_timeline.push(
            UndoEntry(
                label=self.label,
                before_text=self._before_text,
                after_text=after_text,
                cursor_before=self._before_cursor,
                cursor_after=self.buffer.state.cursor,
            )
        )

    def _rollback(self) -> None:
        if self.buffer.document.text != self._before_text:
            self.buffer.document = self.buffer.document.restore(self._before_text)
        self.buffer.state.set_cursor(self._before_cursor)


@contextmanager
def _joined(transaction: Transaction) -> Iterator[Transaction]:
    yield transaction


def _to_search_match(found: Optional[Match[str]]) -> Optional[SearchMatch]:
    if found is None:
        return None
    return SearchMatch(start=found.start(), end=found.end(), groups=found.groupdict())
