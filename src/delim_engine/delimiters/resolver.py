"""Stack-based pairing of left and right delimiters."""

from __future__ import annotations

from typing import Optional, Tuple

from delim_engine.buffer.host import TextHost
from delim_engine.runtime.telemetry import span

from .model import Delimiter, DirectionFlag
from .scanner import TokenScanner

DelimiterPair = Tuple[Delimiter, Delimiter]


def balanced_amsflags(
    left: DirectionFlag | str | None, right: DirectionFlag | str | None
) -> bool:
    """``(l, r)`` or both empty; every other combination is unbalanced."""

    left_flag = DirectionFlag.coerce(left)
    right_flag = DirectionFlag.coerce(right)
    if left_flag is DirectionFlag.LEFT and right_flag is DirectionFlag.RIGHT:
        return True
    return left_flag is DirectionFlag.UNSET and right_flag is DirectionFlag.UNSET


def balanced(left: Delimiter, right: Delimiter) -> bool:
    return (
        left.end <= right.start
        and left.size is right.size
        and balanced_amsflags(left.direction_flag, right.direction_flag)
        and left.bracket.partner is right.bracket
        and left.bracket.is_open
    )


class BalanceResolver:
    """Finds the partner of a delimiter, aborting on malformed nesting."""

    def __init__(
        self,
        host: TextHost,
        *,
        scanner: Optional[TokenScanner] = None,
        logger_name: str | None = None,
    ) -> None:
        self.host = host
        self.scanner = scanner or TokenScanner(host)
        self._logger_name = logger_name

    def resolve_right(self, left: Delimiter) -> Optional[Delimiter]:
        opened: list[Delimiter] = []
        for token in self.scanner.iter_forward(left.end):
            if token.side == "left":
                opened.append(token)
                continue
            top = opened[-1] if opened else left
            if not balanced(top, token):
                return None
            if not opened:
                return token
            opened.pop()
        return None

    def resolve_left(self, right: Delimiter) -> Optional[Delimiter]:
        closed: list[Delimiter] = []
        for token in self.scanner.iter_backward(right.start):
            if token.side == "right":
                closed.append(token)
                continue
            top = closed[-1] if closed else right
            if not balanced(token, top):
                return None
            if not closed:
                return token
            closed.pop()
        return None

    def balanced_pair_at(self, position: int) -> Optional[DelimiterPair]:
        with span(
            "delimiters::pair_at",
            logger_name=self._logger_name,
            component="delimiters",
            metadata={"position": position},
        ) as handle:
            found = self.scanner.find_at(position)
            if found is None:
                handle.add_metadata("status", "miss")
                return None

            if found.side == "left":
                partner = self.resolve_right(found)
                pair = (found, partner) if partner else None
            else:
                partner = self.resolve_left(found)
                pair = (partner, found) if partner else None

            handle.add_metadata("status", "paired" if pair else "unbalanced")
            handle.add_metadata("token", found.to_string())
            return pair


__all__ = [
    "BalanceResolver",
    "DelimiterPair",
    "balanced",
    "balanced_amsflags",
]
