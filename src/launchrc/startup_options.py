# src/launchrc/startup_options.py
"""Startup options: the flags that configure the launcher itself.

Each flag is either nullary (a boolean, with a ``--no`` negation) or unary
(takes a value, either packed as ``--flag=value`` or as the following
word). Values are recorded as given; interpreting them is the job of
whoever consumes ``StartupOptions``.
"""

from __future__ import annotations

from .constants import HELP_FLAGS, NOMASTER_RC_FLAGS, RC_OVERRIDE_FLAGS
from .errors import StartupOptionError, StartupValidationError
from .logs import get_app_logger
from .meta import PROGRAM_SCRIPT


NULLARY_FLAGS: tuple[str, ...] = (
    "batch",
    "batch_cpu_scheduling",
    "block_for_lock",
    "client_debug",
    "deep_execroot",
    "expand_configs_in_place",
    "master_bazelrc",
    "master_blazerc",
    "watchfs",
)

UNARY_FLAGS: tuple[str, ...] = (
    "bazelrc",
    "blazerc",
    "host_javabase",
    "host_jvm_args",
    "host_jvm_profile",
    "install_base",
    "invocation_policy",
    "io_nice_level",
    "max_idle_secs",
    "output_base",
    "output_user_root",
)

# unary flags that may be repeated; every value is kept
MULTI_VALUED_FLAGS: frozenset[str] = frozenset({"host_jvm_args"})

COMMAND_LINE_SOURCE = "command line"


def is_arg(arg: str) -> bool:
    """True if *arg* looks like a flag and is not a help request."""
    return arg.startswith("-") and arg not in HELP_FLAGS


def get_unary_option(arg: str, next_arg: str | None, key: str) -> str | None:
    """Return the value of *key* if *arg* is ``key=value`` or ``key``.

    For the bare ``key`` form the value is *next_arg* (None if absent).
    """
    if not arg.startswith(key):
        return None
    rest = arg[len(key) :]
    if rest.startswith("="):
        return rest[1:]
    if rest:
        # a longer flag that merely shares the prefix
        return None
    return next_arg


def get_nullary_option(arg: str, key: str) -> bool:
    """True if *arg* is exactly *key*. ``key=value`` is an error."""
    if not arg.startswith(key):
        return False
    rest = arg[len(key) :]
    if rest.startswith("="):
        xmsg = f"In argument '{arg}': option '{key}' does not take a value."
        raise StartupOptionError(xmsg, option=arg)
    return not rest


class StartupOptions:
    """Parsed startup options, filled in one flag at a time by process_arg()."""

    def __init__(self) -> None:
        self.batch = False
        self.batch_cpu_scheduling = False
        self.block_for_lock = True
        self.client_debug = False
        self.deep_execroot = True
        self.expand_configs_in_place = False
        self.master_bazelrc = True
        self.master_blazerc = True
        self.watchfs = False

        self.bazelrc: str | None = None
        self.blazerc: str | None = None
        self.host_javabase: str | None = None
        self.host_jvm_args: list[str] = []
        self.host_jvm_profile: str | None = None
        self.install_base: str | None = None
        self.invocation_policy: str | None = None
        self.io_nice_level: str | None = None
        self.max_idle_secs: str | None = None
        self.output_base: str | None = None
        self.output_user_root: str | None = None

        # flag name -> where its (last) value came from
        self.option_sources: dict[str, str] = {}

    # --- validation ----------------------------------------------------------

    def validate_startup_options(self, args: list[str]) -> None:
        """Structural checks over the raw argument list, before any rc file.

        Raises:
            StartupValidationError: no argv[0], an rc override flag without
                a value, or rc-selection flags placed after the command.
        """
        if not args:
            xmsg = "No program name given: the argument list is empty."
            raise StartupValidationError(xmsg)

        i = 1
        while i < len(args) and is_arg(args[i]):
            arg = args[i]
            if arg in RC_OVERRIDE_FLAGS and i + 1 >= len(args):
                xmsg = f"Startup option '{arg}' requires a value."
                raise StartupValidationError(xmsg)
            if arg in {f"--{name}" for name in UNARY_FLAGS}:
                i += 1
            i += 1

        for arg in args[i + 1 :]:
            for key in (*RC_OVERRIDE_FLAGS, *NOMASTER_RC_FLAGS):
                if arg == key or arg.startswith(f"{key}="):
                    xmsg = (
                        f"'{key}' is a startup option and must be given "
                        "before the command."
                    )
                    raise StartupValidationError(xmsg)

    # --- processing ----------------------------------------------------------

    def process_arg(self, arg: str, next_arg: str | None, rcfile: str) -> bool:
        """Apply one startup flag.

        Args:
            arg: the flag word.
            next_arg: the word after it, offered as a separate value.
            rcfile: the rc file the flag came from, or "" for the command line.

        Returns:
            True if *next_arg* was consumed as the flag's value.

        Raises:
            StartupOptionError: unknown flag, or a value-taking flag with no
                value to take.
        """
        logger = get_app_logger()
        source = rcfile or COMMAND_LINE_SOURCE

        for name in UNARY_FLAGS:
            key = f"--{name}"
            value = get_unary_option(arg, next_arg, key)
            if value is None:
                if arg == key:
                    xmsg = f"Startup option '{key}' requires a value{_from(rcfile)}."
                    raise StartupOptionError(xmsg, option=arg, rcfile=rcfile)
                continue
            if name in MULTI_VALUED_FLAGS:
                getattr(self, name).append(value)
            else:
                setattr(self, name, value)
            self.option_sources[name] = source
            logger.trace("[startup] %s=%r (%s)", name, value, source)
            return arg == key

        for name in NULLARY_FLAGS:
            if get_nullary_option(arg, f"--{name}"):
                setattr(self, name, True)
            elif get_nullary_option(arg, f"--no{name}"):
                setattr(self, name, False)
            else:
                continue
            self.option_sources[name] = source
            logger.trace("[startup] %s=%r (%s)", name, getattr(self, name), source)
            return False

        xmsg = (
            f"Unknown startup option: '{arg}'{_from(rcfile)}.\n"
            f"  For more info, run '{PROGRAM_SCRIPT} help startup_options'."
        )
        raise StartupOptionError(xmsg, option=arg, rcfile=rcfile)


def _from(rcfile: str) -> str:
    return f" (from rc file '{rcfile}')" if rcfile else ""
