"""Remote URL and local path construction for repo-clone."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

GIT_SUFFIX = ".git"


def build_subtree(segments: Sequence[str]) -> str:
    """Join repository subtree segments with ``/``, taking each verbatim.

    Example:
        >>> build_subtree(["octocat", "Hello-World"])
        'octocat/Hello-World'
    """
    return "/".join(segments)


def normalize_base_url(base_url: str) -> str:
    """Return ``base_url`` with exactly one trailing slash (empty stays empty)."""
    if not base_url:
        return ""
    return base_url.rstrip("/") + "/"


def build_remote_url(base_url: str, subtree: str, append_suffix: bool = True) -> str:
    """Build the remote repository URL.

    Args:
        base_url: Provider base URL, empty when only the subtree is known
        subtree: Repository subtree joined with ``/``
        append_suffix: Append ``.git`` unless the subtree already ends with it

    Returns:
        The remote URL handed to ``git clone``
    """
    url = normalize_base_url(base_url) + subtree
    if append_suffix and not url.endswith(GIT_SUFFIX):
        url += GIT_SUFFIX
    return url


def build_local_path(source_root: Path, provider_dir: str, subtree: str) -> Path:
    """Join source root, provider directory and subtree, keeping all three under the root."""
    return Path(f"{source_root}/{provider_dir}/{subtree}")
