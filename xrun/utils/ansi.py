"""ANSI escape handling for captured terminal output."""

from rich.text import Text


def strip_ansi(text: str) -> str:
    """Return ``text`` without color and cursor escape sequences.

    Text without escapes is returned unchanged. Otherwise the output is
    decoded line by line, so line endings become ``\\n`` and the trailing
    newline is dropped. The table parser is insensitive to both.
    """
    if "\x1b" not in text:
        return text
    return Text.from_ansi(text).plain
