"""Minimal line-oriented text editor built on a linked line buffer."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "runtime",
    "session",
]

__version__ = "0.1.0"
