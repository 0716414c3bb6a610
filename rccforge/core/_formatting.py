"""Shared formatting helpers for log lines and error messages."""

from __future__ import annotations


def quoted(text: str) -> str:
    """Wrap *text* in double quotes, escaping backslashes and quotes.

    Examples
    --------
    >>> quoted('res/icon.png')
    '"res/icon.png"'
    """
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def quoted_command(command: list[str]) -> str:
    """Render an argument vector as a single quoted command line."""
    return " ".join(quoted(arg) for arg in command)


def with_newline(text: str) -> str:
    """Return *text* terminated by exactly one trailing newline (unless empty)."""
    if text and not text.endswith("\n"):
        return text + "\n"
    return text
