# src/launchrc/rcfile.py
"""rc files and the option table they fill.

An rc file is a list of directive lines::

    # comment
    import %workspace%/tools/shared.rc
    startup --host_jvm_args=-Xmx2g
    build --jobs=8 --verbose_failures

``import`` pulls another rc file in at that point (depth-first). Every
other line appends its words to the table under the directive name,
tagged with the index of the file that declared them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from . import platform_utils
from .constants import IMPORT_DIRECTIVE, STARTUP_DIRECTIVE
from .errors import BadImportSyntaxError, ImportCycleError, UnexpectedReadError
from .logs import get_app_logger
from .tokenize import logical_lines, tokenize_line
from .workspace import WorkspaceLayout


@dataclass(frozen=True)
class RcOption:
    """One word declared under a directive, and the rc file it came from."""

    rcfile_index: int
    value: str


@dataclass(frozen=True)
class RcFile:
    """A discovered or imported rc file.

    ``index`` is its position in discovery order (imports included) and
    doubles as its precedence: higher indices were read later.
    """

    filename: str
    index: int

    def parse(self, ctx: RcParseContext) -> None:
        """Parse this file and everything it imports into *ctx*."""
        _parse(self, ctx, [self.filename])


@dataclass
class RcParseContext:
    """Accumulator shared by every rc file parsed for one invocation."""

    workspace: str
    layout: WorkspaceLayout = field(default_factory=WorkspaceLayout)
    rc_files: list[RcFile] = field(default_factory=list)
    rc_options: dict[str, list[RcOption]] = field(default_factory=dict)
    # relative import paths are resolved against this
    cwd: str = ""

    def add_rc_file(self, filename: str) -> RcFile:
        rcfile = RcFile(filename, len(self.rc_files))
        self.rc_files.append(rcfile)
        return rcfile

    def add_option(self, directive: str, option: RcOption) -> None:
        self.rc_options.setdefault(directive, []).append(option)

    def options_view(self) -> Mapping[str, list[RcOption]]:
        return MappingProxyType(self.rc_options)


def _resolve_import(
    rcfile: RcFile,
    ctx: RcParseContext,
    words: list[str],
    line: str,
    lineno: int,
) -> str:
    if len(words) != 2:  # noqa: PLR2004
        raise BadImportSyntaxError(rcfile.filename, line, lineno)
    path = words[1]
    if path.startswith(ctx.layout.workspace_prefix):
        relativized = ctx.layout.relativize_rc_path(ctx.workspace, path)
        if relativized is None:
            raise BadImportSyntaxError(rcfile.filename, line, lineno)
        path = relativized
    if ctx.cwd:
        path = platform_utils.make_absolute(path, ctx.cwd)
    return path


def _parse(rcfile: RcFile, ctx: RcParseContext, import_stack: list[str]) -> None:
    logger = get_app_logger()
    logger.trace("[rcfile] parsing #%d %s", rcfile.index, rcfile.filename)

    contents = platform_utils.read_file(rcfile.filename)
    if contents is None:
        # readability was checked before, so this is unexpected
        raise UnexpectedReadError(rcfile.filename)

    startup_options: list[str] = []

    for lineno, line in logical_lines(contents):
        words = tokenize_line(line)
        if not words:
            continue

        directive = words[0]
        if directive == IMPORT_DIRECTIVE:
            path = _resolve_import(rcfile, ctx, words, line, lineno)
            if path in import_stack:
                raise ImportCycleError(import_stack)

            imported = ctx.add_rc_file(path)
            logger.debug(
                "Importing %s (#%d) from %s", path, imported.index, rcfile.filename
            )
            import_stack.append(path)
            _parse(imported, ctx, import_stack)
            import_stack.pop()
            continue

        for word in words[1:]:
            ctx.add_option(directive, RcOption(rcfile.index, word))
            if directive == STARTUP_DIRECTIVE:
                startup_options.append(word)

    if startup_options:
        logger.info(
            "Reading 'startup' options from %s: %s",
            rcfile.filename,
            " ".join(startup_options),
        )
