"""Locate, validate, and cycle paired LaTeX delimiters in a text buffer."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "delimiters",
    "runtime",
]

__version__ = "0.1.0"
