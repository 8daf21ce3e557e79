"""Pure generators stepping a delimiter to its next size or bracket variant."""

from __future__ import annotations

from dataclasses import replace
from functools import partial
from typing import Callable, Sequence, TypeVar

from .model import Bracket, Delimiter, DirectionFlag, Size

Transform = Callable[[Delimiter], Delimiter]

T = TypeVar("T")

SIZE_ORDER: tuple[Size, ...] = (Size.NONE, Size.big, Size.Big, Size.bigg, Size.Bigg)
LEFT_BRACKETS: tuple[Bracket, ...] = (
    Bracket.OPEN_PAREN,
    Bracket.OPEN_SQUARE,
    Bracket.OPEN_BRACE,
)
RIGHT_BRACKETS: tuple[Bracket, ...] = (
    Bracket.CLOSE_PAREN,
    Bracket.CLOSE_SQUARE,
    Bracket.CLOSE_BRACE,
)


def _step(sequence: Sequence[T], current: T, reverse: bool) -> T:
    index = sequence.index(current)
    offset = -1 if reverse else 1
    return sequence[(index + offset) % len(sequence)]


def cycle_size(delim: Delimiter, reverse: bool = False) -> Delimiter:
    """Advance the size class, re-deriving the flag at the unsized boundary.

    Moving into or out of ``Size.NONE`` sets the flag to ``l``/``r`` by side
    (or clears it for ``NONE``); steps among the sized classes keep it.
    """

    size = _step(SIZE_ORDER, delim.size, reverse)
    flag = delim.direction_flag
    if Size.NONE in (delim.size, size):
        if size is Size.NONE:
            flag = DirectionFlag.UNSET
        elif delim.side == "left":
            flag = DirectionFlag.LEFT
        else:
            flag = DirectionFlag.RIGHT
    return replace(delim, size=size, direction_flag=flag)


def cycle_bracket(delim: Delimiter, reverse: bool = False) -> Delimiter:
    """Advance the bracket glyph within the delimiter's own side."""

    brackets = LEFT_BRACKETS if delim.side == "left" else RIGHT_BRACKETS
    return replace(delim, bracket=_step(brackets, delim.bracket, reverse))


next_size: Transform = partial(cycle_size, reverse=False)
previous_size: Transform = partial(cycle_size, reverse=True)
next_bracket: Transform = partial(cycle_bracket, reverse=False)
previous_bracket: Transform = partial(cycle_bracket, reverse=True)


__all__ = [
    "LEFT_BRACKETS",
    "RIGHT_BRACKETS",
    "SIZE_ORDER",
    "Transform",
    "cycle_bracket",
    "cycle_size",
    "next_bracket",
    "next_size",
    "previous_bracket",
    "previous_size",
]
