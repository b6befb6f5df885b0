# src/launchrc/errors.py
"""Exit-code categories and the errors raised while resolving rc files.

Every error carries a ``code`` attribute; ``cli.main()`` turns it into the
process exit status.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    BAD_ARGV = 2
    INTERNAL_ERROR = 37


class LaunchrcError(Exception):
    """Base class for controlled resolution failures."""

    code: ExitCode = ExitCode.BAD_ARGV

    def __init__(self, message: str, *, code: ExitCode | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class UnreadableRcFileError(LaunchrcError):
    """An explicitly named rc file cannot be read."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Error: Unable to read rc file '{path}'.")
        self.path = path


class UnexpectedReadError(LaunchrcError):
    """A file that passed the readability check failed to read."""

    code = ExitCode.INTERNAL_ERROR

    def __init__(self, path: str) -> None:
        super().__init__(f"Unexpected error reading rc file '{path}'")
        self.path = path


class BadImportSyntaxError(LaunchrcError):
    """Malformed ``import`` line."""

    def __init__(self, path: str, line: str, lineno: int) -> None:
        super().__init__(
            f"Invalid import declaration in rc file '{path}' (line {lineno}): '{line}'"
        )
        self.path = path
        self.line = line
        self.lineno = lineno


class ImportCycleError(LaunchrcError):
    """An rc file imports one of its own ancestors."""

    def __init__(self, cycle: list[str]) -> None:
        loop = "".join(f"  {name}\n" for name in cycle)
        super().__init__(f"Import loop detected:\n{loop}")
        self.cycle = list(cycle)


class StartupOptionError(LaunchrcError):
    """Unknown or malformed startup flag."""

    def __init__(self, message: str, *, option: str, rcfile: str = "") -> None:
        super().__init__(message)
        self.option = option
        self.rcfile = rcfile


class StartupValidationError(LaunchrcError):
    """Up-front structural validation of the raw argument list failed."""
