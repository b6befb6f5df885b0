# src/launchrc/__init__.py

"""launchrc: resolve cascading rc files for a build-tool client.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use or custom launchers.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                → CLI entrypoint
    - OptionProcessor       → rc discovery, startup options, argument vector
    - RcFile / RcOption     → one rc file and one declared word
    - StartupOptions        → the launcher's own startup flags
"""

from .cli import main
from .errors import (
    BadImportSyntaxError,
    ExitCode,
    ImportCycleError,
    LaunchrcError,
    StartupOptionError,
    StartupValidationError,
    UnexpectedReadError,
    UnreadableRcFileError,
)
from .logs import get_app_logger
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
    get_metadata,
)
from .option_processor import OptionProcessor, default_override
from .rcfile import RcFile, RcOption, RcParseContext
from .startup_options import (
    StartupOptions,
    get_nullary_option,
    get_unary_option,
    is_arg,
)
from .tokenize import logical_lines, tokenize_line
from .workspace import WorkspaceLayout, find_workspace


__all__ = [  # noqa: RUF022
    # cli
    "main",
    # errors
    "BadImportSyntaxError",
    "ExitCode",
    "ImportCycleError",
    "LaunchrcError",
    "StartupOptionError",
    "StartupValidationError",
    "UnexpectedReadError",
    "UnreadableRcFileError",
    # logs
    "get_app_logger",
    # meta
    "Metadata",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "get_metadata",
    # option_processor
    "OptionProcessor",
    "default_override",
    # rcfile
    "RcFile",
    "RcOption",
    "RcParseContext",
    # startup_options
    "StartupOptions",
    "get_nullary_option",
    "get_unary_option",
    "is_arg",
    # tokenize
    "logical_lines",
    "tokenize_line",
    # workspace
    "WorkspaceLayout",
    "find_workspace",
]
