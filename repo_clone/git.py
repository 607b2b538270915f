"""Thin wrapper around the external ``git`` binary.

Only two operations are needed: cloning a remote into a new directory and
pulling updates into an existing checkout. Both block until git exits.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class GitNotFoundError(Exception):
    """Raised when the ``git`` executable cannot be located."""


def find_git(executable: str = "git") -> str:
    """Return the full path of the git executable.

    Raises:
        GitNotFoundError: If git is not on ``PATH``
    """
    path = shutil.which(executable)
    if path is None:
        raise GitNotFoundError(f"'{executable}' not found in PATH")
    return path


class GitClient:
    """Runs git clone and pull as blocking subprocesses."""

    def __init__(self, executable: Optional[str] = None):
        """Initialize the git client.

        Args:
            executable: Path to the git binary, looked up on ``PATH`` if omitted
        """
        self.executable = executable or find_git()

    def _run(self, operation: str, args: list[str]) -> int:
        command = [self.executable, *args]
        logger.debug(f"Running: {' '.join(command)}")

        result = subprocess.run(command)
        if result.returncode != 0:
            logger.warning(f"git {operation} exited with status {result.returncode}")
        return result.returncode

    def clone(self, url: str, dest: Path) -> int:
        """Clone ``url`` into ``dest``.

        Returns:
            Exit status of ``git clone``
        """
        return self._run("clone", ["clone", url, str(dest)])

    def pull(self, repo_path: Path) -> int:
        """Pull updates into the checkout at ``repo_path``.

        Returns:
            Exit status of ``git pull``
        """
        return self._run("pull", ["-C", str(repo_path), "pull"])
