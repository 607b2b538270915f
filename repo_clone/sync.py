"""Clone-or-update logic for repo-clone.

This module decides whether a repository has to be cloned or updated and
drives the git client accordingly, honoring test (dry-run) mode.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .git import GitClient

logger = logging.getLogger(__name__)

CLONE = "clone"
UPDATE = "update"


class SyncResult:
    """Result of a single clone or update.

    Records which action was chosen and whether git actually ran.
    """

    def __init__(self, action: str, remote_url: str, local_path: Path):
        """Initialize the sync result.

        Args:
            action: Either ``clone`` or ``update``
            remote_url: Remote repository URL
            local_path: Local checkout path
        """
        self.action = action
        self.remote_url = remote_url
        self.local_path = local_path
        self.executed = False
        self.returncode: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """True unless git ran and reported a failure."""
        return not self.executed or self.returncode == 0

    def __str__(self) -> str:
        status = "skipped (test mode)" if not self.executed else f"exit {self.returncode}"
        return f"{self.action} {self.remote_url} -> {self.local_path}: {status}"


class RepoSync:
    """Clones a repository when absent and pulls it when present."""

    def __init__(self, git_client: Optional[GitClient] = None):
        """Initialize the synchronizer.

        Args:
            git_client: Git client to use; created lazily when first needed
        """
        self._git_client = git_client

    @property
    def git_client(self) -> GitClient:
        if self._git_client is None:
            self._git_client = GitClient()
        return self._git_client

    def sync(
        self,
        local_path: Path,
        remote_url: str,
        source_root: Path,
        test_mode: bool = False,
    ) -> SyncResult:
        """Clone or update the repository at ``local_path``.

        In test mode every decision is still made and reported, but nothing
        on disk is touched and git is never invoked.

        Args:
            local_path: Destination checkout directory
            remote_url: Remote repository URL
            source_root: Top-level source directory, created if missing
            test_mode: Skip all filesystem-mutating actions

        Returns:
            Result describing the chosen action

        Example:
            >>> result = RepoSync().sync(
            ...     Path("~/src/github/octocat/Hello-World"),
            ...     "https://github.com/octocat/Hello-World.git",
            ...     Path("~/src"),
            ...     test_mode=True,
            ... )
            >>> result.action
            'clone'
        """
        if test_mode:
            logger.info("TEST MODE - no directories will be created and git will not run")

        if not source_root.is_dir():
            if test_mode:
                print(f"Would create source root {source_root}")
            else:
                logger.info(f"Creating source root {source_root}")
                source_root.mkdir(parents=True, exist_ok=True)

        if not local_path.is_dir():
            result = SyncResult(CLONE, remote_url, local_path)
            print(f"Cloning {remote_url} into {local_path}")
            if not test_mode:
                result.returncode = self.git_client.clone(remote_url, local_path)
                result.executed = True
        else:
            result = SyncResult(UPDATE, remote_url, local_path)
            print(f"Updating {local_path}")
            if not test_mode:
                result.returncode = self.git_client.pull(local_path)
                result.executed = True

        logger.debug(str(result))
        return result
