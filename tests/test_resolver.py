from __future__ import annotations

import pytest

from delim_engine.buffer import Buffer
from delim_engine.delimiters import (
    BalanceResolver,
    Delimiter,
    DelimiterConsistencyError,
    DirectionFlag,
    balanced,
    balanced_amsflags,
)


def make_resolver(text: str) -> BalanceResolver:
    return BalanceResolver(Buffer.from_text(text))


def spans(pair: tuple[Delimiter, Delimiter] | None) -> tuple[int, int] | None:
    if pair is None:
        return None
    left, right = pair
    return left.start, right.start


def test_balanced_amsflags_table() -> None:
    assert balanced_amsflags(DirectionFlag.LEFT, DirectionFlag.RIGHT) is True
    assert balanced_amsflags(DirectionFlag.UNSET, DirectionFlag.UNSET) is True
    assert balanced_amsflags(None, "") is True
    assert balanced_amsflags(DirectionFlag.LEFT, DirectionFlag.UNSET) is False
    assert balanced_amsflags(DirectionFlag.UNSET, DirectionFlag.RIGHT) is False
    assert balanced_amsflags(DirectionFlag.LEFT, DirectionFlag.LEFT) is False
    assert balanced_amsflags(DirectionFlag.RIGHT, DirectionFlag.RIGHT) is False
    assert balanced_amsflags(DirectionFlag.RIGHT, DirectionFlag.LEFT) is False


def test_balanced_requires_matching_size_and_bracket() -> None:
    left = Delimiter.parse(r"\bigl(", start=0)

    assert balanced(left, Delimiter.parse(r"\bigr)", start=8))
    assert not balanced(left, Delimiter.parse(r"\Bigr)", start=8))
    assert not balanced(left, Delimiter.parse(r"\bigr]", start=8))
    assert not balanced(left, Delimiter.parse(")", start=8))


def test_balanced_rejects_overlap() -> None:
    left = Delimiter.parse("(", start=5)

    assert not balanced(left, Delimiter.parse(")", start=5))
    assert balanced(left, Delimiter.parse(")", start=6))


def test_balanced_rejects_reversed_pair() -> None:
    assert not balanced(Delimiter.parse(")", start=0), Delimiter.parse("(", start=1))


def test_pair_at_outer_and_inner() -> None:
    resolver = make_resolver("(x(y)z)")

    assert spans(resolver.balanced_pair_at(0)) == (0, 6)
    assert spans(resolver.balanced_pair_at(2)) == (2, 4)
    assert spans(resolver.balanced_pair_at(4)) == (2, 4)
    assert spans(resolver.balanced_pair_at(6)) == (0, 6)


def test_pair_at_off_token_is_none() -> None:
    resolver = make_resolver("(x(y)z)")

    assert resolver.balanced_pair_at(1) is None


def test_extra_closer_breaks_backward_resolution() -> None:
    resolver = make_resolver("(x(y)z))")

    assert resolver.balanced_pair_at(7) is None


def test_mismatched_nesting_aborts_forward_scan() -> None:
    resolver = make_resolver("(x(y]z)")

    assert resolver.balanced_pair_at(0) is None


def test_mismatch_is_not_skipped() -> None:
    # the "]" stops the scan even though a matching ")" follows
    resolver = make_resolver("(a]b)")

    assert resolver.balanced_pair_at(0) is None
    assert resolver.balanced_pair_at(4) is None


def test_unterminated_pair_fails_at_document_end() -> None:
    resolver = make_resolver("(x [y]")

    assert resolver.balanced_pair_at(0) is None


def test_sized_pair_resolves_from_either_side() -> None:
    text = r"\Bigl[ a + \bigl( b \bigr) \Bigr]"
    resolver = make_resolver(text)
    outer_right = text.rindex("\\")

    assert spans(resolver.balanced_pair_at(0)) == (0, outer_right)
    assert spans(resolver.balanced_pair_at(len(text) - 1)) == (0, outer_right)
    inner = resolver.balanced_pair_at(text.index(r"\bigl"))
    assert inner is not None
    assert inner[1].to_string() == r"\bigr)"


def test_size_mismatch_is_unbalanced() -> None:
    resolver = make_resolver(r"\bigl( a \Bigr)")

    assert resolver.balanced_pair_at(0) is None


def test_flag_mismatch_is_unbalanced() -> None:
    resolver = make_resolver(r"\bigl( a \big)")

    assert resolver.balanced_pair_at(0) is None


def test_resolve_right_and_left_directly() -> None:
    text = r"\{ (a) \}"
    resolver = make_resolver(text)
    left = Delimiter.parse(r"\{", start=0)
    right = Delimiter.parse(r"\}", start=len(text) - 2)

    assert resolver.resolve_right(left) == right
    assert resolver.resolve_left(right) == left


def test_inconsistent_token_is_fatal() -> None:
    resolver = make_resolver(r"\bigr( x )")

    with pytest.raises(DelimiterConsistencyError):
        resolver.balanced_pair_at(0)
