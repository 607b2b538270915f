"""repo-clone - clone or update Git repositories into a provider-namespaced tree.

This package resolves a provider URL, provider directory and source root from
flags, environment variables and per-provider config files, then clones the
repository or pulls updates into it.
"""

from .config import ConfigurationError, ResolvedConfig, load_provider_config, resolve
from .git import GitClient, GitNotFoundError
from .sync import RepoSync, SyncResult

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "ResolvedConfig",
    "load_provider_config",
    "resolve",
    "GitClient",
    "GitNotFoundError",
    "RepoSync",
    "SyncResult",
]
