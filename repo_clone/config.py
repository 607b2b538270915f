"""Configuration resolution for repo-clone.

This module turns command-line flags, environment variables, per-provider
configuration files and built-in provider defaults into the single
ResolvedConfig used for one invocation.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

import yaml
from dotenv import dotenv_values
from typing_extensions import TypedDict

from .paths import normalize_base_url

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "REPO_CLONE_CONFIG_DIR"
SOURCE_ROOT_ENV = "REPO_CLONE_SOURCE_ROOT"
NO_SUFFIX_ENV = "REPO_CLONE_NO_SUFFIX"

CONFIG_SUFFIXES = ("", ".conf", ".yaml", ".yml")
CONFIG_KEYS = ("provider_url", "provider_dir")

TRUTHY = ("1", "true", "yes", "on")


class ConfigurationError(Exception):
    """Raised when the configuration cannot produce a usable destination."""


class ProviderDefaults(TypedDict):
    """Built-in defaults for a provider shorthand."""

    base_url: str
    provider_dir: str
    config_name: str


class ConfigOverrides(TypedDict, total=False):
    """Values read from a provider configuration file."""

    provider_url: str
    provider_dir: str


PROVIDERS: dict[str, ProviderDefaults] = {
    "arch": {
        "base_url": "https://gitlab.archlinux.org/archlinux/packaging/packages/",
        "provider_dir": "arch",
        "config_name": "arch",
    },
    "bitbucket": {
        "base_url": "https://bitbucket.org/",
        "provider_dir": "bitbucket",
        "config_name": "bitbucket",
    },
    "github": {
        "base_url": "https://github.com/",
        "provider_dir": "github",
        "config_name": "github",
    },
    "aur": {
        "base_url": "https://aur.archlinux.org/",
        "provider_dir": "aur",
        "config_name": "aur",
    },
}

SHORTHAND_ALIASES = {
    "arch": "arch",
    "abs": "arch",
    "bitbucket": "bitbucket",
    "bb": "bitbucket",
    "github": "github",
    "gh": "github",
    "aur": "aur",
}


@dataclass(frozen=True)
class ResolvedConfig:
    """Final provider URL, provider directory and source root for one run."""

    base_url: str
    provider_dir: str
    source_root: Path


def coalesce(*candidates: Optional[str]) -> Optional[str]:
    """Return the first candidate that is set and non-empty."""
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def is_truthy(value: Optional[str]) -> bool:
    """Return True for ``1``, ``true``, ``yes`` or ``on``, case-insensitively."""
    return value is not None and value.strip().lower() in TRUTHY


def split_shorthand(
    positionals: Sequence[str], flag_shorthand: Optional[str] = None
) -> tuple[Optional[str], list[str]]:
    """Separate the provider shorthand from the repository subtree segments.

    A shorthand given as a flag wins. Otherwise a recognized first positional
    token is taken as the shorthand and removed from the segments.

    Args:
        positionals: Positional arguments left after flag parsing
        flag_shorthand: Shorthand selected through a long flag, if any

    Returns:
        Tuple of canonical shorthand name (or None) and remaining segments
    """
    segments = list(positionals)
    if flag_shorthand:
        return SHORTHAND_ALIASES[flag_shorthand], segments

    if segments and segments[0] in SHORTHAND_ALIASES:
        return SHORTHAND_ALIASES[segments[0]], segments[1:]

    return None, segments


def default_config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the directory holding per-provider configuration files."""
    environ = os.environ if environ is None else environ

    explicit = environ.get(CONFIG_DIR_ENV)
    if explicit:
        return Path(explicit).expanduser()

    xdg = environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path("~/.config").expanduser()
    return base / "repo-clone"


def default_source_root(
    system: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> Path:
    """Return the platform-dependent default source root.

    Args:
        system: Platform identifier in ``sys.platform`` form
        environ: Environment mapping, used to detect MSYS-style shells

    Returns:
        Expanded default source root path
    """
    system = sys.platform if system is None else system
    environ = os.environ if environ is None else environ

    if system == "darwin":
        root = "~/Developer"
    elif (
        system in ("win32", "cygwin", "msys")
        or system.startswith("cygwin")
        or environ.get("MSYSTEM")
    ):
        root = "~/source/repos"
    else:
        root = "~/src"

    return Path(root).expanduser()


def find_config_file(config_dir: Path, config_name: str) -> Optional[Path]:
    """Locate the configuration file for a provider name, if present."""
    for suffix in CONFIG_SUFFIXES:
        candidate = config_dir / f"{config_name}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def load_provider_config(config_dir: Path, config_name: str) -> ConfigOverrides:
    """Load provider overrides from ``<config_dir>/<config_name>``.

    Plain and ``.conf`` files are read as dotenv-style ``key=value`` lines with
    python-dotenv, ``.yaml`` and ``.yml`` files with PyYAML. Only ``provider_url``
    and ``provider_dir`` are recognized; everything else is ignored. Nothing in
    the file is expanded or evaluated.

    Args:
        config_dir: Directory holding provider configuration files
        config_name: Provider configuration name

    Returns:
        The overrides found in the file, empty if no file exists

    Raises:
        ConfigurationError: If the file cannot be read or decoded, or a YAML
            file is malformed or not a mapping

    Example:
        >>> overrides = load_provider_config(Path("~/.config/repo-clone"), "github")
        >>> overrides.get("provider_dir")
        'gh'
    """
    config_path = find_config_file(config_dir, config_name)
    if config_path is None:
        logger.debug(f"No configuration file for '{config_name}' in {config_dir}")
        return {}

    logger.info(f"Loading provider configuration from {config_path}")

    if config_path.suffix in (".yaml", ".yml"):
        raw = _read_yaml_file(config_path)
    else:
        raw = _read_key_value_file(config_path)

    overrides: ConfigOverrides = {}
    for key, value in raw.items():
        normalized = key.strip().lower()
        if normalized not in CONFIG_KEYS:
            logger.warning(f"{config_path}: ignoring unknown key '{key}'")
            continue
        if value:
            overrides[normalized] = value  # type: ignore[literal-required]

    logger.debug(f"Overrides from {config_path}: {overrides}")
    return overrides


def _read_key_value_file(config_path: Path) -> dict[str, str]:
    """Read a dotenv-style ``key=value`` file without expanding or executing anything."""
    try:
        data = dotenv_values(config_path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read {config_path}: {e}") from e

    return {key: value or "" for key, value in data.items()}


def _read_yaml_file(config_path: Path) -> dict[str, str]:
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")

    return {
        str(key): "" if value is None else str(value) for key, value in data.items()
    }


def resolve(
    args: argparse.Namespace,
    shorthand: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    system: Optional[str] = None,
) -> ResolvedConfig:
    """Resolve the provider URL, provider directory and source root.

    Each value is taken from the first source that sets it: explicit flag,
    provider configuration file, shorthand default, then global default.

    Args:
        args: Parsed command-line flags
        shorthand: Canonical provider shorthand, if one was selected
        environ: Environment mapping (defaults to ``os.environ``)
        system: Platform identifier (defaults to ``sys.platform``)

    Returns:
        The resolved configuration

    Raises:
        ConfigurationError: If no provider directory can be resolved
    """
    environ = os.environ if environ is None else environ
    defaults: Optional[ProviderDefaults] = PROVIDERS[shorthand] if shorthand else None

    config_name = coalesce(
        getattr(args, "config", None), defaults["config_name"] if defaults else None
    )

    overrides: ConfigOverrides = {}
    if config_name:
        overrides = load_provider_config(default_config_dir(environ), config_name)

    base_url = coalesce(
        getattr(args, "provider_url", None),
        overrides.get("provider_url"),
        defaults["base_url"] if defaults else None,
    )
    provider_dir = coalesce(
        getattr(args, "provider_dir", None),
        overrides.get("provider_dir"),
        defaults["provider_dir"] if defaults else None,
    )
    source_root = coalesce(
        getattr(args, "root", None),
        environ.get(SOURCE_ROOT_ENV),
    )

    if not provider_dir:
        raise ConfigurationError("provider directory not set.")

    resolved = ResolvedConfig(
        base_url=normalize_base_url(base_url or ""),
        provider_dir=provider_dir,
        source_root=(
            Path(source_root).expanduser()
            if source_root
            else default_source_root(system, environ)
        ),
    )
    logger.debug(f"Resolved configuration: {resolved}")
    return resolved
