"""Delimiter model, scanner, pairing, cycle generators, and rewrite engine."""

from .applier import ApplyResult, TransformApplier, relocate_cursor
from .cycles import (
    LEFT_BRACKETS,
    RIGHT_BRACKETS,
    SIZE_ORDER,
    Transform,
    cycle_bracket,
    cycle_size,
    next_bracket,
    next_size,
    previous_bracket,
    previous_size,
)
from .model import (
    MAX_TOKEN_LENGTH,
    TOKEN_PATTERN,
    Bracket,
    Delimiter,
    DelimiterConsistencyError,
    DirectionFlag,
    Size,
)
from .resolver import BalanceResolver, DelimiterPair, balanced, balanced_amsflags
from .scanner import TokenScanner

__all__ = [
    "ApplyResult",
    "BalanceResolver",
    "Bracket",
    "Delimiter",
    "DelimiterConsistencyError",
    "DelimiterPair",
    "DirectionFlag",
    "LEFT_BRACKETS",
    "MAX_TOKEN_LENGTH",
    "RIGHT_BRACKETS",
    "SIZE_ORDER",
    "Size",
    "TOKEN_PATTERN",
    "TokenScanner",
    "Transform",
    "TransformApplier",
    "balanced",
    "balanced_amsflags",
    "cycle_bracket",
    "cycle_size",
    "next_bracket",
    "next_size",
    "previous_bracket",
    "previous_size",
    "relocate_cursor",
]
