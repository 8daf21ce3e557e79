"""Boundary types describing what the delimiter core needs from a text host."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from re import Pattern
from types import MappingProxyType
from typing import Mapping, Optional, Protocol

from .state import Offset


@dataclass(frozen=True, slots=True)
class SearchMatch:
    """Span and named groups of one regex hit, returned by value."""

    start: Offset
    end: Offset
    groups: Mapping[str, Optional[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "groups", MappingProxyType(dict(self.groups)))

    def group(self, name: str) -> Optional[str]:
        return self.groups.get(name)


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: Offset
    version: int
    attributes: dict[str, str] = field(default_factory=dict)


class TextHost(Protocol):
    """Narrow editing surface the delimiter core is written against."""

    @property
    def length(self) -> int:
        ...

    @property
    def cursor(self) -> Offset:
        ...

    @cursor.setter
    def cursor(self, offset: Offset) -> None:
        ...

    def search_forward(
        self, pattern: Pattern[str], start: Offset, bound: Optional[Offset] = None
    ) -> Optional[SearchMatch]:
        """Leftmost match beginning at or after ``start`` and ending by ``bound``."""
        ...

    def search_backward(
        self, pattern: Pattern[str], start: Offset, bound: Offset = 0
    ) -> Optional[SearchMatch]:
        """Match ending by ``start`` whose beginning is closest to ``start``."""
        ...

    def read(self, start: Offset, end: Offset) -> str:
        ...

    def replace(self, start: Offset, end: Offset, text: str) -> None:
        ...

    def excursion(self) -> AbstractContextManager[None]:
        """Restore the cursor when the block exits."""
        ...

    def edit(self, label: str) -> AbstractContextManager[object]:
        """Group replacements into one atomic, undoable transaction."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an out-of-bounds offset."""

    def __init__(self, message: str, *, offset: Offset | None = None) -> None:
        super().__init__(message)
        self.offset = offset
