"""Flat-text document storage for delim_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextDocument:
    """Immutable text snapshot addressed by character offsets.

    Every edit produces a new document with a bumped ``version`` so stale
    offsets can be detected by comparing versions.
    """

    text: str = ""
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(text=text, version=0)

    def __len__(self) -> int:
        return len(self.text)

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]

    def splice(self, start: int, end: int, replacement: str) -> "TextDocument":
        """Return a document with ``[start:end]`` replaced by ``replacement``."""

        updated = self.text[:start] + replacement + self.text[end:]
        return TextDocument(text=updated, version=self.version + 1)

    def restore(self, text: str) -> "TextDocument":
        return TextDocument(text=text, version=self.version + 1)
