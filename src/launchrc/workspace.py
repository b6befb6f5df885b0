# src/launchrc/workspace.py
"""Workspace layout: where the master rc files live and how
``%workspace%/`` import paths are rewritten."""

import os
from pathlib import Path

from .constants import (
    BINARY_RC_BASENAME,
    RC_BASENAME,
    SYSTEM_RC_PATH,
    WORKSPACE_MARKER,
    WORKSPACE_PREFIX,
    WORKSPACE_RC_RELPATH,
)
from .logs import get_app_logger
from .platform_utils import can_read, make_absolute


def find_workspace(cwd: Path) -> str:
    """Return the nearest ancestor of *cwd* holding a WORKSPACE file, or ""."""
    current = cwd
    while True:
        if (current / WORKSPACE_MARKER).is_file():
            return str(current)
        parent = current.parent
        if parent == current:  # Reached filesystem root
            return ""
        current = parent


class WorkspaceLayout:
    """Default layout. Subclass or replace to change where rc files are found."""

    workspace_prefix = WORKSPACE_PREFIX

    def rc_basename(self) -> str:
        return RC_BASENAME

    def relativize_rc_path(self, workspace: str, path: str) -> str | None:
        """Rewrite ``%workspace%/x`` to ``<workspace>/x``.

        Returns None when there is no workspace to anchor the path to.
        """
        if not workspace:
            return None
        return f"{workspace}/{path[len(self.workspace_prefix) :]}"

    def _readable_or_empty(self, path: str) -> str:
        return path if can_read(path) else ""

    def find_candidate_rc_paths(
        self, workspace: str, cwd: str, args: list[str]
    ) -> list[str]:
        """Master rc candidates in precedence order.

        Unreadable candidates come back as "" so the caller can drop them.
        """
        logger = get_app_logger()
        candidates: list[str] = []

        candidates.append(
            self._readable_or_empty(os.path.join(workspace, WORKSPACE_RC_RELPATH))
            if workspace
            else ""
        )

        if args:
            binary_dir = os.path.dirname(make_absolute(args[0], cwd))
            candidates.append(
                self._readable_or_empty(os.path.join(binary_dir, BINARY_RC_BASENAME))
            )
        else:
            candidates.append("")

        candidates.append(self._readable_or_empty(SYSTEM_RC_PATH))

        logger.trace("[find_candidate_rc_paths] %s", candidates)
        return candidates
