"""Locate delimiter tokens relative to a document offset."""

from __future__ import annotations

from typing import Iterator, Optional

from delim_engine.buffer.host import TextHost

from .model import MAX_TOKEN_LENGTH, TOKEN_PATTERN, Delimiter


class TokenScanner:
    """Read-only token lookups against a ``TextHost``.

    Every lookup runs inside ``host.excursion()`` and returns values, so the
    host cursor is never disturbed and no match state survives a call.
    """

    def __init__(self, host: TextHost) -> None:
        self.host = host

    def find_at(self, position: int) -> Optional[Delimiter]:
        """Return the token whose span ``[start, end)`` covers ``position``."""

        if position < 0 or position >= self.host.length:
            return None
        with self.host.excursion():
            return self._covering(position)

    def find_next(self, position: int) -> Optional[Delimiter]:
        """First token starting at or after ``position``; chain with ``.end``."""

        if position < 0 or position > self.host.length:
            return None
        with self.host.excursion():
            found = self.host.search_forward(TOKEN_PATTERN, position)
            if found is None:
                return None
            return Delimiter.from_match(found)

    def find_previous(self, position: int) -> Optional[Delimiter]:
        """Last token ending at or before ``position``; chain with ``.start``."""

        if position <= 0 or position > self.host.length:
            return None
        with self.host.excursion():
            found = self.host.search_backward(TOKEN_PATTERN, position)
            if found is None:
                return None
            # a backward hit can begin on the bare glyph of "\big(", so widen
            # to the earliest token covering the hit's last character
            return self._covering(found.end - 1)

    def iter_forward(self, position: int) -> Iterator[Delimiter]:
        token = self.find_next(position)
        while token is not None:
            yield token
            token = self.find_next(token.end)

    def iter_backward(self, position: int) -> Iterator[Delimiter]:
        token = self.find_previous(position)
        while token is not None:
            yield token
            token = self.find_previous(token.start)

    def _covering(self, position: int) -> Optional[Delimiter]:
        cursor = max(0, position - MAX_TOKEN_LENGTH + 1)
        bound = position + MAX_TOKEN_LENGTH
        while cursor <= position:
            found = self.host.search_forward(TOKEN_PATTERN, cursor, bound)
            if found is None or found.start > position:
                return None
            if found.end > position:
                return Delimiter.from_match(found)
            cursor = found.end
        return None


__all__ = ["TokenScanner"]
