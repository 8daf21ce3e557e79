"""Editor-facing commands: cycle the delimiter pair under the cursor."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Optional

from delim_engine.buffer.host import TextHost
from delim_engine.delimiters import (
    ApplyResult,
    Transform,
    TransformApplier,
    next_bracket,
    next_size,
    previous_bracket,
    previous_size,
)

Command = Callable[..., ApplyResult]


def _run(
    host: TextHost,
    transform: Transform,
    position: Optional[int] = None,
    *,
    label: str,
    applier: Optional[TransformApplier] = None,
) -> ApplyResult:
    target = host.cursor if position is None else position
    engine = applier or TransformApplier(host)
    return engine.apply(target, transform, label=label)


def cycle_size_forward(
    host: TextHost,
    position: Optional[int] = None,
    *,
    applier: Optional[TransformApplier] = None,
) -> ApplyResult:
    return _run(host, next_size, position, label="size-forward", applier=applier)


def cycle_size_backward(
    host: TextHost,
    position: Optional[int] = None,
    *,
    applier: Optional[TransformApplier] = None,
) -> ApplyResult:
    return _run(host, previous_size, position, label="size-backward", applier=applier)


def cycle_bracket_forward(
    host: TextHost,
    position: Optional[int] = None,
    *,
    applier: Optional[TransformApplier] = None,
) -> ApplyResult:
    return _run(host, next_bracket, position, label="bracket-forward", applier=applier)


def cycle_bracket_backward(
    host: TextHost,
    position: Optional[int] = None,
    *,
    applier: Optional[TransformApplier] = None,
) -> ApplyResult:
    return _run(
        host, previous_bracket, position, label="bracket-backward", applier=applier
    )


COMMANDS: Dict[str, Command] = {
    "size-forward": cycle_size_forward,
    "size-backward": cycle_size_backward,
    "bracket-forward": cycle_bracket_forward,
    "bracket-backward": cycle_bracket_backward,
    # short aliases
    "grow": cycle_size_forward,
    "shrink": cycle_size_backward,
    "next-bracket": cycle_bracket_forward,
    "prev-bracket": cycle_bracket_backward,
}


def run_command(
    host: TextHost, name: str, position: Optional[int] = None, **kwargs: object
) -> ApplyResult:
    """Dispatch a command by name; unknown names raise ``KeyError``."""

    command = COMMANDS.get(name.strip())
    if command is None:
        raise KeyError(f"Unknown delimiter command '{name}'")
    return command(host, position, **kwargs)


def bind(host: TextHost, name: str) -> Callable[[], ApplyResult]:
    """Pre-bind a command to a host, for key-handler style callers."""

    return partial(run_command, host, name)


__all__ = [
    "COMMANDS",
    "bind",
    "cycle_bracket_backward",
    "cycle_bracket_forward",
    "cycle_size_backward",
    "cycle_size_forward",
    "run_command",
]
