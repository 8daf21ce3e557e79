"""Value types describing size-qualified bracket tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal, Union

from delim_engine.buffer.host import SearchMatch

Side = Literal["left", "right"]


class DelimiterConsistencyError(RuntimeError):
    """Raised when a delimiter value contradicts the token grammar."""


class Size(str, Enum):
    """Size classes, declared smallest to largest."""

    NONE = ""
    big = "\\big"
    Big = "\\Big"
    bigg = "\\bigg"
    Bigg = "\\Bigg"

    @classmethod
    def coerce(cls, value: Union["Size", str, None]) -> "Size":
        if value is None:
            return cls.NONE
        return cls(value)


class DirectionFlag(str, Enum):
    UNSET = ""
    LEFT = "l"
    RIGHT = "r"

    @classmethod
    def coerce(cls, value: Union["DirectionFlag", str, None]) -> "DirectionFlag":
        if value is None:
            return cls.UNSET
        return cls(value)


class Bracket(str, Enum):
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    OPEN_SQUARE = "["
    CLOSE_SQUARE = "]"
    OPEN_BRACE = "\\{"
    CLOSE_BRACE = "\\}"

    @property
    def is_open(self) -> bool:
        return self in _OPENERS

    @property
    def partner(self) -> "Bracket":
        return _PARTNERS[self]


_OPENERS = frozenset({Bracket.OPEN_PAREN, Bracket.OPEN_SQUARE, Bracket.OPEN_BRACE})

_PARTNERS = {
    Bracket.OPEN_PAREN: Bracket.CLOSE_PAREN,
    Bracket.OPEN_SQUARE: Bracket.CLOSE_SQUARE,
    Bracket.OPEN_BRACE: Bracket.CLOSE_BRACE,
    Bracket.CLOSE_PAREN: Bracket.OPEN_PAREN,
    Bracket.CLOSE_SQUARE: Bracket.OPEN_SQUARE,
    Bracket.CLOSE_BRACE: Bracket.OPEN_BRACE,
}


def _alternation(values: list[str]) -> str:
    # longest first so "\bigg" wins over "\big"
    ordered = sorted((v for v in values if v), key=len, reverse=True)
    return "|".join(re.escape(value) for value in ordered)


TOKEN_PATTERN = re.compile(
    rf"(?:(?P<size>{_alternation([s.value for s in Size])})"
    rf"(?P<flag>{_alternation([f.value for f in DirectionFlag])})?)?"
    rf"(?P<bracket>{_alternation([b.value for b in Bracket])})"
)

MAX_TOKEN_LENGTH = (
    max(len(s.value) for s in Size)
    + max(len(f.value) for f in DirectionFlag)
    + max(len(b.value) for b in Bracket)
)


@dataclass(frozen=True, slots=True)
class Delimiter:
    """A bracket plus optional size and direction flag at a document offset.

    ``size`` and ``direction_flag`` accept ``None`` or ``""`` for the empty
    forms; both normalize to ``Size.NONE`` / ``DirectionFlag.UNSET``. The
    dataclass equality is positional (includes ``start``); use
    ``shape_equal`` to compare the rendered form only.
    """

    start: int
    size: Size
    direction_flag: DirectionFlag
    bracket: Bracket

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start cannot be negative")
        object.__setattr__(self, "size", Size.coerce(self.size))
        object.__setattr__(
            self, "direction_flag", DirectionFlag.coerce(self.direction_flag)
        )
        object.__setattr__(self, "bracket", Bracket(self.bracket))

    @classmethod
    def from_match(cls, match: SearchMatch) -> "Delimiter":
        try:
            return cls(
                start=match.start,
                size=Size.coerce(match.group("size")),
                direction_flag=DirectionFlag.coerce(match.group("flag")),
                bracket=Bracket(match.group("bracket")),
            )
        except ValueError as exc:
            raise DelimiterConsistencyError(
                f"Unrecognized token groups {dict(match.groups)!r}"
            ) from exc

    @classmethod
    def parse(cls, text: str, *, start: int = 0) -> "Delimiter":
        """Build a delimiter from its exact rendering, e.g. ``"\\bigl\\{"``."""

        found = TOKEN_PATTERN.fullmatch(text)
        if found is None:
            raise ValueError(f"'{text}' is not a delimiter token")
        return cls.from_match(
            SearchMatch(start=start, end=start + len(text), groups=found.groupdict())
        )

    @property
    def length(self) -> int:
        return (
            len(self.size.value)
            + len(self.direction_flag.value)
            + len(self.bracket.value)
        )

    @property
    def end(self) -> int:
        return self.start + self.length

    def to_string(self) -> str:
        return self.size.value + self.direction_flag.value + self.bracket.value

    @property
    def text(self) -> str:
        return self.to_string()

    def is_left(self) -> bool:
        return self.direction_flag is DirectionFlag.LEFT or self.bracket.is_open

    def is_right(self) -> bool:
        return self.direction_flag is DirectionFlag.RIGHT or not self.bracket.is_open

    @property
    def side(self) -> Side:
        left, right = self.is_left(), self.is_right()
        if left == right:
            raise DelimiterConsistencyError(
                f"Delimiter '{self.to_string()}' at {self.start} is both left and right"
            )
        return "left" if left else "right"

    def shape_equal(self, other: "Delimiter") -> bool:
        return (
            self.size is other.size
            and self.direction_flag is other.direction_flag
            and self.bracket is other.bracket
        )

    def moved_to(self, start: int) -> "Delimiter":
        return replace(self, start=start)

    def __str__(self) -> str:
        return self.to_string()


__all__ = [
    "Bracket",
    "Delimiter",
    "DelimiterConsistencyError",
    "DirectionFlag",
    "MAX_TOKEN_LENGTH",
    "Side",
    "Size",
    "TOKEN_PATTERN",
]
