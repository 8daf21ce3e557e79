"""High-level editing commands exposed to editor command layers."""

from .commands import (
    COMMANDS,
    bind,
    cycle_bracket_backward,
    cycle_bracket_forward,
    cycle_size_backward,
    cycle_size_forward,
    run_command,
)

__all__ = [
    "COMMANDS",
    "bind",
    "cycle_bracket_backward",
    "cycle_bracket_forward",
    "cycle_size_backward",
    "cycle_size_forward",
    "run_command",
]
