# src/launchrc/constants.py
"""Central constants used across the project."""


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
ENV_HOME: str = "HOME"
ENV_PATH: str = "PATH"
ENV_TMP: str = "TMP"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_OUTPUT_FORMAT: str = "lines"
DEFAULT_TERMINAL_COLUMNS: int = 80

# --- rc file discovery ---
RC_BASENAME: str = ".bazelrc"
RC_OVERRIDE_FLAGS: tuple[str, ...] = ("--blazerc", "--bazelrc")
NOMASTER_RC_FLAGS: tuple[str, ...] = ("--nomaster_blazerc", "--nomaster_bazelrc")
WORKSPACE_MARKER: str = "WORKSPACE"
WORKSPACE_PREFIX: str = "%workspace%/"
WORKSPACE_RC_RELPATH: str = "tools/bazel.rc"
BINARY_RC_BASENAME: str = "bazel.bazelrc"
SYSTEM_RC_PATH: str = "/etc/bazel.bazelrc"

# --- rc grammar ---
COMMENT_CHAR: str = "#"
IMPORT_DIRECTIVE: str = "import"
STARTUP_DIRECTIVE: str = "startup"
HELP_FLAGS: frozenset[str] = frozenset({"--help", "-help", "-h"})

# --- synthesized argument vector ---
CLIENT_RC_SOURCE: str = "client"
CLIENT_SLOT: int = 0
RC_SOURCE_PREFIX: str = "--rc_source="
DEFAULT_OVERRIDE_PREFIX: str = "--default_override="
CLIENT_ENV_PREFIX: str = "--client_env="
IGNORE_CLIENT_ENV: str = "--ignore_client_env"
CLIENT_CWD_PREFIX: str = "--client_cwd="
EMACS_FLAG: str = "--emacs"
COMMON_DIRECTIVE: str = "common"
ISATTY_FLAG: str = "--isatty"
TERMINAL_COLUMNS_FLAG: str = "--terminal_columns"

# --- terminal detection ---
NON_STANDARD_TERMS: frozenset[str] = frozenset(
    {"", "dumb", "emacs", "xterm-mono", "symbolics", "9term"}
)
