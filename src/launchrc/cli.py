# src/launchrc/cli.py

import argparse
import json
import platform
import sys
from difflib import get_close_matches
from pathlib import Path

from .errors import ExitCode, LaunchrcError
from .logs import get_app_logger
from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT, get_metadata
from .option_processor import OptionProcessor
from .types import ResolvedInvocation
from .utils_logs import LEVEL_ORDER, safe_log
from .workspace import find_workspace


CLIENT_ARGS_SEPARATOR = "--"


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = bad.split()
            for arg in bad_args:
                if not arg.startswith("-"):
                    continue
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")
            if bad_args:
                hint_lines.append(
                    f"Hint: pass the client's arguments after "
                    f"'{CLIENT_ARGS_SEPARATOR}'."
                )

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(ExitCode.BAD_ARGV, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        usage=f"%(prog)s [options] {CLIENT_ARGS_SEPARATOR} ARGV0 [ARGS ...]",
        description=(
            "Resolve the rc files for a build client invocation and print the "
            "command and argument vector it would be dispatched with."
        ),
    )

    parser.add_argument(
        "--workspace",
        help="Workspace root (default: nearest parent of --cwd with a WORKSPACE file).",
    )
    parser.add_argument(
        "--cwd",
        help="Working directory of the client (default: current directory).",
    )
    parser.add_argument(
        "--format",
        choices=("lines", "json"),
        default="lines",
        help="Output format: command then one argument per line, or JSON.",
    )

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


def _split_argv(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split our own options from the client's argument list."""
    if CLIENT_ARGS_SEPARATOR in argv:
        idx = argv.index(CLIENT_ARGS_SEPARATOR)
        return argv[:idx], argv[idx + 1 :]
    return argv, []


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = get_app_logger()
    log_level = logger.determine_log_level(args=args)
    logger.setLevel(log_level)
    if args.use_color is not None:
        logger.enable_color = args.use_color
    logger.trace("[BOOT] log-level initialized: %s", logger.level_name)

    logger.debug(
        "Runtime: Python %s (%s)",
        platform.python_version(),
        platform.python_implementation(),
    )


def _build_report(processor: OptionProcessor) -> ResolvedInvocation:
    startup = processor.parsed_startup_options
    return {
        "command": processor.command,
        "startup_args": processor.startup_args,
        "rc_files": [
            {"index": rc.index, "filename": rc.filename} for rc in processor.rc_files
        ],
        "command_arguments": processor.command_arguments,
        "startup": {
            "batch": startup.batch,
            "output_base": startup.output_base,
            "host_jvm_args": list(startup.host_jvm_args),
            "sources": dict(startup.option_sources),
        },
    }


def _print_report(report: ResolvedInvocation, fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(report, indent=2))
        return
    print(report["command"])
    for arg in report["command_arguments"]:
        print(arg)


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = get_app_logger()  # init (use env + defaults)

    try:
        own_argv, client_argv = _split_argv(
            list(sys.argv[1:] if argv is None else argv)
        )
        parser = _setup_parser()
        args = parser.parse_args(own_argv)

        _initialize_logger(args)

        if args.version:
            logger.info("%s %s", PROGRAM_DISPLAY, get_metadata())
            return ExitCode.SUCCESS

        cwd = Path(args.cwd).resolve() if args.cwd else Path.cwd().resolve()
        workspace = (
            str(Path(args.workspace).resolve())
            if args.workspace
            else find_workspace(cwd)
        )
        logger.debug("Workspace: %s", workspace or "(none)")
        logger.debug("Client cwd: %s", cwd)

        if not client_argv:
            client_argv = [PROGRAM_SCRIPT]

        processor = OptionProcessor()
        processor.parse_options(client_argv, workspace, str(cwd))
        _print_report(_build_report(processor), args.format)

    except LaunchrcError as e:
        # controlled termination
        try:
            logger.error_if_not_debug(str(e).rstrip("\n"))
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return e.code

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.critical_if_not_debug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", ExitCode.INTERNAL_ERROR)

    else:
        return ExitCode.SUCCESS
