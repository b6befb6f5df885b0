# src/launchrc/tokenize.py
"""Line reading and word splitting for rc file content.

Rules
-----
• A backslash immediately before a newline (optionally after a carriage
  return) splices the next line onto the current one, before anything else.
• ``#`` outside quotes starts a comment running to end of line.
• Single and double quotes group words containing whitespace.
• A backslash escapes the next character, inside quotes too.

A dangling backslash or an unterminated quote is accepted silently: the
escape is dropped and the open quote runs to the end of the line.
"""

from __future__ import annotations

from collections.abc import Iterator

from .constants import COMMENT_CHAR


def logical_lines(contents: str) -> Iterator[tuple[int, str]]:
    """Yield ``(lineno, stripped_line)`` for every non-blank logical line.

    A physical line ending in a backslash is joined with the next one.
    ``lineno`` is the physical line (from 1) the logical line starts on.
    """
    physical = contents.split("\n")
    last = len(physical)
    start = 1
    pending: list[str] | None = None

    for lineno, raw in enumerate(physical, 1):
        if pending is None:
            pending = []
            start = lineno
        if lineno < last and raw.endswith("\\\r"):
            pending.append(raw[:-2])
            continue
        if lineno < last and raw.endswith("\\"):
            pending.append(raw[:-1])
            continue
        pending.append(raw)
        line = "".join(pending).strip()
        pending = None
        if line:
            yield start, line


def tokenize_line(line: str, comment: str = COMMENT_CHAR) -> list[str]:
    """Split *line* into words, honoring comments, quotes and escapes."""
    words: list[str] = []
    current: list[str] = []
    escape = False
    in_quote: str | None = None

    for ch in line:
        if escape:
            current.append(ch)
            escape = False
        elif ch == "\\":
            escape = True
        elif in_quote is not None:
            if ch == in_quote:
                in_quote = None
            else:
                current.append(ch)
        elif ch in {"'", '"'}:
            in_quote = ch
        elif ch == comment:
            break
        elif ch.isspace():
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(ch)

    if current:
        words.append("".join(current))
    return words
