from __future__ import annotations

from delim_engine.buffer import Buffer
from delim_engine.delimiters import (
    Delimiter,
    TransformApplier,
    next_bracket,
    next_size,
    previous_size,
    relocate_cursor,
)


def make_applier(text: str, *, cursor: int = 0) -> tuple[Buffer, TransformApplier]:
    buffer = Buffer.from_text(text, cursor=cursor)
    return buffer, TransformApplier(buffer)


def test_size_forward_cycles_through_every_class() -> None:
    buffer, applier = make_applier(r"\big(x\big)")
    seen = []

    for _ in range(4):
        result = applier.apply(0, next_size)
        assert result.applied
        seen.append((buffer.text, buffer.cursor))

    assert seen == [
        (r"\Big(x\Big)", 0),
        (r"\bigg(x\bigg)", 0),
        (r"\Bigg(x\Bigg)", 0),
        ("(x)", 0),
    ]


def test_growing_bare_pair_adds_direction_flags() -> None:
    buffer, applier = make_applier("(x)")

    result = applier.apply(0, next_size)

    assert buffer.text == r"\bigl(x\bigr)"
    assert result.rewritten is not None
    left_new, right_new = result.rewritten
    assert right_new.start == buffer.text.index(r"\bigr")
    assert buffer.read(right_new.start, right_new.end) == right_new.to_string()
    assert buffer.read(left_new.start, left_new.end) == left_new.to_string()


def test_bracket_forward_cycles_glyphs() -> None:
    buffer, applier = make_applier(r"\bigl(x\bigr)")
    seen = []

    for _ in range(3):
        applier.apply(0, next_bracket)
        seen.append(buffer.text)

    assert seen == [r"\bigl[x\bigr]", r"\bigl\{x\bigr\}", r"\bigl(x\bigr)"]
    assert buffer.cursor == 0


def test_cursor_on_right_token_follows_shift() -> None:
    buffer, applier = make_applier("(x)", cursor=2)

    result = applier.apply(2, next_size)

    assert buffer.text == r"\bigl(x\bigr)"
    assert result.cursor == 7
    assert buffer.cursor == 7


def test_cursor_clamped_when_token_shrinks() -> None:
    text = r"\Biggl(x\Biggr)"
    buffer, applier = make_applier(text)

    applier.apply(5, next_size)
    assert (buffer.text, buffer.cursor) == ("(x)", 0)

    buffer, applier = make_applier(text)
    applier.apply(13, next_size)
    assert (buffer.text, buffer.cursor) == ("(x)", 2)


def test_only_the_pair_under_cursor_changes() -> None:
    text = r"\bigl( (a) \bigr)"
    buffer, applier = make_applier(text)

    applier.apply(text.index("(a"), previous_size)

    assert buffer.text == r"\bigl( \Biggl(a\Biggr) \bigr)"


def test_noop_off_delimiter_leaves_everything() -> None:
    buffer, applier = make_applier("a + b", cursor=2)

    result = applier.apply(2, next_size)

    assert result.status == "noop"
    assert result.cursor == 2
    assert buffer.text == "a + b"
    assert buffer.cursor == 2
    assert buffer.document.version == 0
    assert len(buffer.undo_timeline) == 0


def test_noop_on_unbalanced_pair() -> None:
    buffer, applier = make_applier(r"\bigl( x \Bigr)", cursor=4)

    result = applier.apply(0, next_bracket)

    assert not result.applied
    assert buffer.text == r"\bigl( x \Bigr)"
    assert buffer.cursor == 4


def test_one_apply_is_one_undo_step() -> None:
    buffer, applier = make_applier("[x]", cursor=2)

    applier.apply(2, next_size)
    assert len(buffer.undo_timeline) == 1

    assert buffer.undo() is True
    assert buffer.text == "[x]"
    assert buffer.cursor == 2
    assert buffer.redo() is True
    assert buffer.text == r"\bigl[x\bigr]"


def test_relocate_cursor_maps_into_left_token() -> None:
    before = (Delimiter.parse(r"\Bigl(", start=0), Delimiter.parse(r"\Bigr)", start=7))
    after = (Delimiter.parse(r"\Biggl(", start=0), Delimiter.parse(r"\Biggr)", start=8))

    assert relocate_cursor(3, before, after) == 3
    assert relocate_cursor(8, before, after) == 9
