# src/launchrc/option_processor.py
"""Resolve the effective startup configuration for one client invocation.

Steps, in order:
  1. find the rc files (master candidates, then the one user rc file)
  2. parse them, imports included, into one option table
  3. replay rc ``startup`` options, then command-line startup options
  4. locate the command and synthesize the argument vector handed to the
     command dispatcher

Precedence slots in the synthesized ``--default_override`` directives:
slot 0 holds client defaults (terminal settings); the rc file with index
``i`` uses slot ``i + 1``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from . import platform_utils
from .constants import (
    CLIENT_CWD_PREFIX,
    CLIENT_ENV_PREFIX,
    CLIENT_RC_SOURCE,
    CLIENT_SLOT,
    COMMON_DIRECTIVE,
    DEFAULT_OVERRIDE_PREFIX,
    EMACS_FLAG,
    ENV_HOME,
    ENV_PATH,
    ENV_TMP,
    IGNORE_CLIENT_ENV,
    ISATTY_FLAG,
    NOMASTER_RC_FLAGS,
    RC_OVERRIDE_FLAGS,
    RC_SOURCE_PREFIX,
    STARTUP_DIRECTIVE,
    TERMINAL_COLUMNS_FLAG,
)
from .errors import UnreadableRcFileError
from .logs import get_app_logger
from .rcfile import RcFile, RcOption, RcParseContext
from .startup_options import (
    StartupOptions,
    get_nullary_option,
    get_unary_option,
    is_arg,
)
from .workspace import WorkspaceLayout


def default_override(slot: int, directive: str, value: str) -> str:
    return f"{DEFAULT_OVERRIDE_PREFIX}{slot}:{directive}={value}"


def _scan_rc_flags(args: list[str]) -> tuple[str | None, bool]:
    """Return (explicit rc path, use master rc) from a single pass over args."""
    explicit_rc: str | None = None
    use_master_rc = True
    for i, arg in enumerate(args[1:], 1):
        next_arg = args[i + 1] if i + 1 < len(args) else None
        for key in RC_OVERRIDE_FLAGS:
            if explicit_rc is None:
                explicit_rc = get_unary_option(arg, next_arg, key)
        if use_master_rc and any(
            get_nullary_option(arg, key) for key in NOMASTER_RC_FLAGS
        ):
            use_master_rc = False
    return explicit_rc, use_master_rc


class OptionProcessor:
    """Single-use: call parse_options() once, then read the results."""

    def __init__(
        self,
        startup_options: StartupOptions | None = None,
        *,
        layout: WorkspaceLayout | None = None,
        environ: Mapping[str, str] | None = None,
        terminal: platform_utils.TerminalProbe | None = None,
    ) -> None:
        self._initialized = False
        self.parsed_startup_options = startup_options or StartupOptions()
        self.layout = layout or WorkspaceLayout()
        self.environ: Mapping[str, str] = (
            dict(os.environ) if environ is None else environ
        )
        self.terminal = terminal or platform_utils.TerminalProbe(self.environ)

        self._args: list[str] = []
        self._ctx = RcParseContext(workspace="", layout=self.layout)
        self.command = ""
        self._command_arguments: list[str] = []
        self.startup_args = 0

    # --- results -------------------------------------------------------------

    @property
    def command_arguments(self) -> list[str]:
        return list(self._command_arguments)

    @property
    def rc_files(self) -> list[RcFile]:
        return list(self._ctx.rc_files)

    @property
    def rc_options(self) -> Mapping[str, list[RcOption]]:
        return self._ctx.options_view()

    # --- discovery -----------------------------------------------------------

    def find_user_rc(
        self,
        explicit_rc: str | None,
        rc_basename: str,
        workspace: str,
        cwd: str,
    ) -> str:
        """Return the user rc path, or "" if there is none.

        An explicit path must be readable. Otherwise the first readable of
        ``<workspace>/<basename>`` and ``$HOME/<basename>`` wins.
        """
        if explicit_rc is not None:
            rc_file = platform_utils.make_absolute(explicit_rc, cwd)
            if not platform_utils.can_read(rc_file):
                raise UnreadableRcFileError(rc_file)
            return rc_file

        if workspace:
            workspace_rc = os.path.join(workspace, rc_basename)
            if platform_utils.can_read(workspace_rc):
                return workspace_rc

        home = self.environ.get(ENV_HOME)
        if not home:
            return ""

        user_rc = os.path.join(home, rc_basename)
        if platform_utils.can_read(user_rc):
            return user_rc
        return ""

    def _parse_rc_files(self, candidates: list[str]) -> None:
        logger = get_app_logger()
        seen: set[str] = set()
        for path in candidates:
            if not path or path in seen:
                continue
            seen.add(path)
            rcfile = self._ctx.add_rc_file(path)
            logger.debug("Using rc file #%d: %s", rcfile.index, path)
            rcfile.parse(self._ctx)

    # --- entry point ---------------------------------------------------------

    def parse_options(
        self, args: list[str], workspace: str, cwd: str
    ) -> tuple[str, list[str]]:
        """Resolve *args* against the rc files.

        Returns:
            (command, command_arguments). The command is "" when nothing
            follows the startup options; no argument vector is built then.

        Raises:
            LaunchrcError: any discovery, parse or startup-option failure.
            RuntimeError: if called a second time on the same instance.
        """
        if self._initialized:
            xmsg = "OptionProcessor.parse_options() may only be called once"
            raise RuntimeError(xmsg)
        self._initialized = True

        logger = get_app_logger()
        self._args = list(args)
        self._ctx.workspace = workspace
        self._ctx.cwd = cwd

        explicit_rc, use_master_rc = _scan_rc_flags(self._args)
        self.parsed_startup_options.validate_startup_options(self._args)

        candidates: list[str] = []
        if use_master_rc:
            candidates.extend(
                self.layout.find_candidate_rc_paths(workspace, cwd, self._args)
            )
        else:
            logger.debug("Master rc files disabled.")

        candidates.append(
            self.find_user_rc(explicit_rc, self.layout.rc_basename(), workspace, cwd)
        )
        logger.trace("[parse_options] rc candidates: %s", candidates)

        self._parse_rc_files(candidates)
        self.parse_startup_options()

        if self.startup_args + 1 >= len(self._args):
            self.command = ""
            return self.command, self.command_arguments

        self.command = self._args[self.startup_args + 1]
        self.add_rcfile_args_and_options(self.parsed_startup_options.batch, cwd)
        self._command_arguments.extend(self._args[self.startup_args + 2 :])
        return self.command, self.command_arguments

    # --- startup options -----------------------------------------------------

    def _replay(self, arg: str, next_arg: str, rcfile: str) -> bool:
        return self.parsed_startup_options.process_arg(arg, next_arg, rcfile)

    def parse_startup_options(self) -> int:
        """Feed rc startup options, then command-line ones, to the parser.

        Command-line options come second so that they win for any flag
        where the last value counts. Returns the number of argv words
        after argv[0] consumed as startup options.
        """
        startup = self._ctx.rc_options.get(STARTUP_DIRECTIVE, [])
        i = 0
        while i < len(startup) - 1:
            option = startup[i]
            rcfile = self._ctx.rc_files[option.rcfile_index].filename
            if self._replay(option.value, startup[i + 1].value, rcfile):
                i += 1
            i += 1
        if i < len(startup):
            option = startup[i]
            if is_arg(option.value):
                rcfile = self._ctx.rc_files[option.rcfile_index].filename
                self._replay(option.value, "", rcfile)

        # stop on the first non-flag word; --help counts as one
        args = self._args
        i = 1
        while i < len(args) - 1 and is_arg(args[i]):
            if self._replay(args[i], args[i + 1], ""):
                i += 1
            i += 1
        if i < len(args) and is_arg(args[i]):
            self._replay(args[i], "", "")
            i += 1

        self.startup_args = max(i - 1, 0)
        return self.startup_args

    # --- argument vector -----------------------------------------------------

    def add_rcfile_args_and_options(self, batch: bool, cwd: str) -> None:
        """Append the provenance, override, environment and cwd arguments."""
        out = self._command_arguments

        # terminal settings count as the least important rc file
        out.append(f"{RC_SOURCE_PREFIX}{CLIENT_RC_SOURCE}")
        isatty = int(self.terminal.is_standard_terminal())
        out.append(
            default_override(CLIENT_SLOT, COMMON_DIRECTIVE, f"{ISATTY_FLAG}={isatty}")
        )
        columns = self.terminal.terminal_columns()
        out.append(
            default_override(
                CLIENT_SLOT, COMMON_DIRECTIVE, f"{TERMINAL_COLUMNS_FLAG}={columns}"
            )
        )

        for rcfile in self._ctx.rc_files:
            out.append(
                f"{RC_SOURCE_PREFIX}{platform_utils.convert_path(rcfile.filename)}"
            )

        for directive in sorted(self._ctx.rc_options):
            if directive == STARTUP_DIRECTIVE:
                # already applied by parse_startup_options()
                continue
            out.extend(
                default_override(option.rcfile_index + 1, directive, option.value)
                for option in self._ctx.rc_options[directive]
            )

        if batch:
            out.append(IGNORE_CLIENT_ENV)
        else:
            for name, value in self.environ.items():
                if name == ENV_PATH:
                    value = platform_utils.convert_path_list(value)  # noqa: PLW2901
                elif name == ENV_TMP:
                    # "c:/foo" is also a valid path list, so convert as one path
                    value = platform_utils.convert_path(value)  # noqa: PLW2901
                out.append(f"{CLIENT_ENV_PREFIX}{name}={value}")

        out.append(f"{CLIENT_CWD_PREFIX}{platform_utils.convert_path(cwd)}")

        if self.terminal.is_emacs_terminal():
            out.append(EMACS_FLAG)
