# src/launchrc/utils_logs.py
"""Diagnostic logger for the launcher.

Everything is written to stderr: stdout belongs to the resolved command
line printed by the CLI.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from contextlib import suppress
from typing import Any, TextIO, cast

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV


# ANSI Colors
RESET = "\033[0m"
CYAN = "\033[36m"
YELLOW = "\033[93m"
RED = "\033[91m"
GREEN = "\033[92m"
GRAY = "\033[90m"

# Logger levels
TRACE_LEVEL = logging.DEBUG - 5
SILENT_LEVEL = logging.CRITICAL + 1  # one above the highest builtin level

LEVEL_ORDER = [
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",  # disables all logging
]

TAG_STYLES = {
    "TRACE": (GRAY, "[TRACE]"),
    "DEBUG": (CYAN, "[DEBUG]"),
    "INFO": (GREEN, "INFO:"),
    "WARNING": (YELLOW, "WARNING:"),
    "ERROR": (RED, "ERROR:"),
    "CRITICAL": (RED, "FATAL:"),
}

# sanity check
assert set(TAG_STYLES.keys()) <= {lvl.upper() for lvl in LEVEL_ORDER}, (  # noqa: S101
    "TAG_STYLES contains unknown levels"
)


def safe_log(msg: str) -> None:
    """Emergency logger that never fails."""
    stream = cast("TextIO", sys.__stderr__)
    try:
        print(msg, file=stream)
    except Exception:  # noqa: BLE001
        # never crash during crash reporting
        with suppress(Exception):
            stream.write(f"[INTERNAL] {msg}\n")


class LaunchrcLogger(logging.Logger):
    """Logger for the launcher and its rc resolution."""

    enable_color: bool = False

    _logging_module_extended: bool = False

    # if stderr is redirected, we need to repoint
    _last_stream: TextIO | None = None

    def __init__(
        self,
        name: str,
        level: int = logging.NOTSET,
        *,
        enable_color: bool | None = None,
    ) -> None:
        super().__init__(name, level)

        if self.level == logging.NOTSET:
            self.setLevel(self.determine_log_level())

        self.enable_color = (
            enable_color
            if enable_color is not None
            else type(self).determine_color_enabled()
        )

        self.propagate = False  # avoid duplicate root logs

    def ensure_handlers(self) -> None:
        if self._last_stream is not sys.stderr or not self.handlers:
            self.handlers.clear()
            h = DiagnosticStreamHandler()
            h.setFormatter(TagFormatter("%(message)s"))
            h.enable_color = self.enable_color
            self.addHandler(h)
            self._last_stream = sys.stderr

    def _log(  # type: ignore[override]
        self, level: int, msg: str, args: tuple[Any, ...], **kwargs: Any
    ) -> None:
        self.ensure_handlers()
        for h in self.handlers:
            if isinstance(h, DiagnosticStreamHandler):
                h.enable_color = self.enable_color
        super()._log(level, msg, args, **kwargs)

    def setLevel(self, level: int | str) -> None:  # noqa: N802
        """Case insensitive version"""
        if isinstance(level, str):
            level = level.upper()
        super().setLevel(level)

    @classmethod
    def determine_color_enabled(cls) -> bool:
        """Return True if colored output should be enabled."""
        if "NO_COLOR" in os.environ:
            return False
        if os.getenv("FORCE_COLOR", "").lower() in {"1", "true", "yes"}:
            return True
        return sys.stderr.isatty()

    @classmethod
    def extend_logging_module(cls) -> bool:
        """Register the extra levels once. Returns False if already done."""
        if cls._logging_module_extended:
            return False
        cls._logging_module_extended = True

        logging.setLoggerClass(cls)

        logging.addLevelName(TRACE_LEVEL, "TRACE")
        logging.addLevelName(SILENT_LEVEL, "SILENT")

        logging.TRACE = TRACE_LEVEL  # type: ignore[attr-defined]
        logging.SILENT = SILENT_LEVEL  # type: ignore[attr-defined]

        return True

    def determine_log_level(
        self,
        *,
        args: argparse.Namespace | None = None,
    ) -> str:
        """Resolve log level from CLI → env → default."""
        args_level = getattr(args, "log_level", None)
        if args_level is not None:
            return str(args_level).upper()

        env_log_level = os.getenv(
            f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}"
        ) or os.getenv(DEFAULT_ENV_LOG_LEVEL)
        if env_log_level:
            return env_log_level.upper()

        return DEFAULT_LOG_LEVEL.upper()

    @property
    def level_name(self) -> str:
        """Return the current effective level name."""
        return logging.getLevelName(self.getEffectiveLevel())

    def error_if_not_debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an error; include the traceback only at debug/trace level."""
        exc_info = kwargs.pop("exc_info", True)
        stacklevel = kwargs.pop("stacklevel", 2)  # skip helper frame
        if self.isEnabledFor(logging.DEBUG):
            self.exception(msg, *args, exc_info=exc_info, stacklevel=stacklevel)
        else:
            self.error(msg, *args)

    def critical_if_not_debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a critical error; include the traceback only at debug/trace level."""
        exc_info = kwargs.pop("exc_info", True)
        stacklevel = kwargs.pop("stacklevel", 2)  # skip helper frame
        if self.isEnabledFor(logging.DEBUG):
            self.exception(msg, *args, exc_info=exc_info, stacklevel=stacklevel)
        else:
            self.critical(msg, *args)

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, **kwargs)


# --- Tag formatter ---------------------------------------------------------


class TagFormatter(logging.Formatter):
    def format(self: TagFormatter, record: logging.LogRecord) -> str:
        tag_color, tag_text = TAG_STYLES.get(record.levelname, ("", ""))
        msg = super().format(record)
        if tag_text:
            if getattr(record, "enable_color", False) and tag_color:
                prefix = f"{tag_color}{tag_text}{RESET}"
            else:
                prefix = tag_text
            return f"{prefix} {msg}"
        return msg


# --- DiagnosticStreamHandler --------------------------------------------------


class DiagnosticStreamHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Send every record to the current sys.stderr."""

    enable_color: bool = False

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr

        # used by TagFormatter
        record.enable_color = getattr(self, "enable_color", False)

        super().emit(record)
