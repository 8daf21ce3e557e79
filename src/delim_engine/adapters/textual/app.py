"""Executable Textual app for trying the delimiter commands by hand."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use delim_engine.adapters.textual.app"
    ) from exc

from delim_engine.buffer import Buffer, BufferMirror
from delim_engine.runtime import telemetry

from .controller import DelimiterUIHooks, TextualDelimiterAdapter

SAMPLE_TEXT = r"f(x) = \bigl( a + \Bigl[ b - \{ c \} \Bigr] \bigr)"


class DelimiterApp(App[None]):
    """Single-buffer view with a visible cursor and a status line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = SAMPLE_TEXT) -> None:
        super().__init__()
        self._initial_text = text
        self.adapter: TextualDelimiterAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = DelimiterUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
        )
        self.adapter = TextualDelimiterAdapter(
            Buffer.from_text(self._initial_text, name="demo"), hooks
        )
        self._update_status("ctrl+up/down: size  ctrl+left/right: bracket")

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_textual_key(event.key)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(_render_cursor(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _render_cursor(mirror: BufferMirror) -> Text:
    rendered = Text(mirror.text + " ")
    rendered.stylize("reverse", mirror.cursor, mirror.cursor + 1)
    return rendered


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cycle LaTeX delimiter pairs.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Initial buffer text")
    source.add_argument("--file", type=Path, help="Read initial buffer text from file")
    parser.add_argument(
        "--preset",
        default=os.environ.get("DELIM_ENGINE_PRESET"),
        choices=telemetry.PRESETS,
        help="Telemetry preset (default: environment-driven configuration)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)
    if args.file is not None:
        text = args.file.read_text(encoding="utf-8")
    else:
        text = args.text if args.text is not None else SAMPLE_TEXT
    DelimiterApp(text=text).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
