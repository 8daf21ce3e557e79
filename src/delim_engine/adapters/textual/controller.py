"""UI-agnostic controller translating key names into delimiter commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from delim_engine.actions import COMMANDS, run_command
from delim_engine.buffer import Buffer, BufferMirror
from delim_engine.delimiters import ApplyResult, DelimiterConsistencyError


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


DEFAULT_KEYMAP: Mapping[str, str] = {
    "ctrl+up": "size-forward",
    "ctrl+down": "size-backward",
    "ctrl+right": "bracket-forward",
    "ctrl+left": "bracket-backward",
}


@dataclass(slots=True)
class DelimiterUIHooks:
    """Callbacks the adapter uses to refresh host widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualDelimiterAdapter:
    """Routes key presses to cursor motion, undo, or a delimiter command."""

    def __init__(
        self,
        buffer: Buffer,
        hooks: DelimiterUIHooks,
        *,
        keymap: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self.keymap: Dict[str, str] = dict(DEFAULT_KEYMAP if keymap is None else keymap)
        unknown = [name for name in self.keymap.values() if name not in COMMANDS]
        if unknown:
            raise ValueError(f"Keymap references unknown commands {unknown}")
        self._refresh_buffer()

    def handle_textual_key(self, key: str) -> Optional[ApplyResult]:
        """Dispatch one key; returns the command outcome for command keys.

        Malformed tokens in the scanned range are reported through
        ``update_status`` and yield ``None`` with the buffer untouched.
        """

        normalized = key.strip().lower()
        self._log_state("key ->", key=normalized)
        command = self.keymap.get(normalized)
        if command is not None:
            try:
                result = run_command(self.buffer, command)
            except DelimiterConsistencyError as exc:
                # leave the buffer as is and surface the fault on the status line
                self.hooks.update_status(f"{command}:inconsistent delimiter")
                self._log_state("error <-", reason=str(exc))
                return None
            status = command if result.applied else f"{command}:no pair"
            self.hooks.update_status(status)
            self._log_state("result <-", status=result.status, cursor=result.cursor)
            self._refresh_buffer()
            return result

        if self._move_or_undo(normalized):
            self._refresh_buffer()
        return None

    def _move_or_undo(self, key: str) -> bool:
        buffer = self.buffer
        if key == "left":
            buffer.cursor = max(0, buffer.cursor - 1)
        elif key == "right":
            buffer.cursor = min(buffer.length, buffer.cursor + 1)
        elif key == "home":
            buffer.cursor = 0
        elif key == "end":
            buffer.cursor = buffer.length
        elif key == "ctrl+z":
            self.hooks.update_status("undo" if buffer.undo() else "nothing to undo")
        elif key == "ctrl+y":
            self.hooks.update_status("redo" if buffer.redo() else "nothing to redo")
        else:
            return False
        return True

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "buffer": self.buffer.name,
            "version": self.buffer.document.version,
            "cursor": self.buffer.cursor,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        line = " ".join([prefix, *(f"{k}={v!r}" for k, v in snapshot.items())])
        self.hooks.log(line)


__all__ = ["DEFAULT_KEYMAP", "DelimiterUIHooks", "TextualDelimiterAdapter"]
