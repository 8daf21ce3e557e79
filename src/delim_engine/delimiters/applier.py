"""Rewrite both members of a balanced pair as one atomic edit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from delim_engine.buffer.host import TextHost
from delim_engine.runtime import telemetry

from .cycles import Transform
from .resolver import BalanceResolver, DelimiterPair


@dataclass(frozen=True, slots=True)
class ApplyResult:
    """Outcome of ``TransformApplier.apply``."""

    status: Literal["applied", "noop"]
    cursor: int
    pair: Optional[DelimiterPair] = None
    rewritten: Optional[DelimiterPair] = None

    @property
    def applied(self) -> bool:
        return self.status == "applied"


class TransformApplier:
    """Owns all document mutation performed by the delimiter core."""

    def __init__(
        self,
        host: TextHost,
        *,
        resolver: Optional[BalanceResolver] = None,
        logger_name: str | None = None,
    ) -> None:
        self.host = host
        self.resolver = resolver or BalanceResolver(host, logger_name=logger_name)
        self._logger_name = logger_name

    def apply(
        self, position: int, transform: Transform, *, label: str = "cycle"
    ) -> ApplyResult:
        with telemetry.span(
            "delimiters::apply",
            logger_name=self._logger_name,
            component="delimiters",
            metadata={"position": position, "label": label},
        ) as handle:
            pair = self.resolver.balanced_pair_at(position)
            if pair is None:
                handle.add_metadata("status", "noop")
                telemetry.record_event(
                    "delimiters.noop",
                    level="debug",
                    data={"position": position, "label": label},
                    logger_name=self._logger_name,
                )
                return ApplyResult(status="noop", cursor=position)

            left, right = pair
            left_new = transform(left)
            right_new = transform(right)
            # everything between the pair shifts by the left rewrite's delta
            right_new = right_new.moved_to(
                right.start + (left_new.length - left.length)
            )

            with self.host.edit(label):
                # right first: left's offsets precede it and stay valid
                self.host.replace(right.start, right.end, right_new.to_string())
                self.host.replace(left.start, left.end, left_new.to_string())
                cursor = relocate_cursor(position, pair, (left_new, right_new))
                self.host.cursor = cursor

            handle.add_metadata("status", "applied")
            telemetry.record_event(
                "delimiters.applied",
                level="debug",
                data={
                    "label": label,
                    "left": f"{left} -> {left_new}",
                    "right": f"{right} -> {right_new}",
                    "cursor": cursor,
                },
                logger_name=self._logger_name,
            )
            return ApplyResult(
                status="applied",
                cursor=cursor,
                pair=pair,
                rewritten=(left_new, right_new),
            )


def relocate_cursor(
    position: int, before: DelimiterPair, after: DelimiterPair
) -> int:
    """Map ``position`` onto the rewritten token it was in (or preceded).

    Clamped to the token's last character since a rewrite may shorten it.
    """

    left, right = before
    left_new, right_new = after
    if position >= right.start:
        anchor_old, anchor_new = right, right_new
    else:
        anchor_old, anchor_new = left, left_new
    return min(
        anchor_new.start + (position - anchor_old.start),
        anchor_new.end - 1,
    )


__all__ = ["ApplyResult", "TransformApplier", "relocate_cursor"]
