"""Textual host adapter; the controller has no Textual dependency."""

from .controller import DEFAULT_KEYMAP, DelimiterUIHooks, TextualDelimiterAdapter

__all__ = ["DEFAULT_KEYMAP", "DelimiterUIHooks", "TextualDelimiterAdapter"]
