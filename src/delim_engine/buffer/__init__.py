"""Reference text host: flat document, cursor state, transactions, and undo."""

from .buffer import Buffer, Transaction
from .document import TextDocument
from .host import BufferMirror, BufferValidationError, SearchMatch, TextHost
from .state import BufferState, Offset
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range

__all__ = [
    "Buffer",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "Offset",
    "SearchMatch",
    "TextDocument",
    "TextHost",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_offset",
    "ensure_range",
]
