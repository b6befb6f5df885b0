# src/launchrc/platform_utils.py
"""Thin OS wrappers: file access, path conversion and terminal queries."""

import os
import sys
from collections.abc import Mapping
from pathlib import Path

from .constants import DEFAULT_TERMINAL_COLUMNS, NON_STANDARD_TERMS


# --- files -------------------------------------------------------------------


def can_read(path: str) -> bool:
    """Return True if *path* is a regular file we are allowed to read."""
    return os.path.isfile(path) and os.access(path, os.R_OK)


def read_file(path: str) -> str | None:
    """Return the file's text, or None if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def make_absolute(path: str, cwd: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(cwd, path)


# --- path conversion ---------------------------------------------------------


def _is_windows() -> bool:
    return sys.platform == "win32"


def convert_path(path: str) -> str:
    """Convert an MSYS-style path (``/c/foo``) to a native one on Windows."""
    if not _is_windows():
        return path
    if len(path) >= 2 and path[0] == "/" and path[1].isalpha() and (  # noqa: PLR2004
        len(path) == 2 or path[2] == "/"  # noqa: PLR2004
    ):
        path = f"{path[1]}:{path[2:] or '/'}"
    return path.replace("/", "\\")


def convert_path_list(path_list: str) -> str:
    """Convert a ``:``-separated MSYS path list to a native one on Windows."""
    if not _is_windows() or ";" in path_list:
        return path_list
    return ";".join(convert_path(p) for p in path_list.split(":"))


# --- terminal ----------------------------------------------------------------


class TerminalProbe:
    """Answers terminal questions from an environment snapshot."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def is_standard_terminal(self) -> bool:
        term = self.environ.get("TERM", "")
        if term in NON_STANDARD_TERMS or self.environ.get("EMACS") == "t":
            return False
        return sys.stdout.isatty() and sys.stderr.isatty()

    def terminal_columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stderr.fileno()).columns
        except (OSError, ValueError, AttributeError):
            pass
        columns = self.environ.get("COLUMNS", "")
        if columns.isdigit():
            return int(columns)
        return DEFAULT_TERMINAL_COLUMNS

    def is_emacs_terminal(self) -> bool:
        return self.environ.get("EMACS") == "t" or bool(
            self.environ.get("INSIDE_EMACS")
        )
