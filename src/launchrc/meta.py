# src/launchrc/meta.py
"""Program identity and version metadata."""

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version


# --- program identity ---
PROGRAM_PACKAGE = "launchrc"
PROGRAM_SCRIPT = "launchrc"
PROGRAM_DISPLAY = "launchrc"
PROGRAM_ENV = "LAUNCHRC"


@dataclass(frozen=True)
class Metadata:
    """Version information reported by --version."""

    version: str
    commit: str

    def __str__(self) -> str:
        return f"{self.version} ({self.commit})"


def get_metadata() -> Metadata:
    """Return the installed version, or placeholders for a source checkout."""
    try:
        ver = version(PROGRAM_PACKAGE)
    except PackageNotFoundError:
        ver = "unknown"
    return Metadata(version=ver, commit="unknown")
