"""Command-line interface for repo-clone.

This module provides the CLI options and the main flow: resolve the
configuration, build the remote URL and local path, then clone or update.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .config import (
    NO_SUFFIX_ENV,
    ConfigurationError,
    is_truthy,
    resolve,
    split_shorthand,
)
from .git import GitClient, GitNotFoundError, find_git
from .paths import build_local_path, build_remote_url, build_subtree
from .sync import RepoSync

SHORTHAND_FLAGS = ("arch", "abs", "bitbucket", "bb", "github", "gh", "aur")

CONFIG_ERROR_HINT = (
    "hint: pass -p DIR, a provider shorthand such as --github, "
    "or -c NAME with a config file"
)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration.

    Args:
        verbose: Enable debug logging if True
    """
    level = logging.DEBUG if verbose else logging.INFO
    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level, format=format_str, handlers=[logging.StreamHandler()]
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="repo-clone",
        description="Clone or update a Git repository into <root>/<provider>/<path>",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  # Clone https://github.com/octocat/Hello-World.git into ~/src/github/octocat/Hello-World
  repo-clone --github octocat Hello-World

  # Same, using the bare shorthand token
  repo-clone gh octocat Hello-World

  # Preview the URL and path without touching anything
  repo-clone -t --aur yay

  # Custom provider with an explicit URL and directory
  repo-clone -v https://git.example.com -p example team project

Environment:
  REPO_CLONE_CONFIG_DIR   directory of provider config files
                          (default: $XDG_CONFIG_HOME/repo-clone)
  REPO_CLONE_SOURCE_ROOT  source root when -r is not given
  REPO_CLONE_NO_SUFFIX    if true, do not append .git to the remote URL
        """.strip(),
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="NAME",
        help="Provider config name, read from the config directory",
    )

    parser.add_argument(
        "-p",
        "--provider-dir",
        metavar="DIR",
        help="Provider directory under the source root",
    )

    parser.add_argument(
        "-r",
        "--root",
        metavar="PATH",
        help="Source root (default depends on the platform)",
    )

    parser.add_argument(
        "-t",
        "--test",
        action="store_true",
        help="Test mode: print what would happen without cloning, pulling or creating directories",
    )

    parser.add_argument(
        "-v",
        "--provider-url",
        metavar="URL",
        help="Provider base URL",
    )

    parser.add_argument(
        "-n",
        "--no-suffix",
        action="store_true",
        help="Do not append .git to the remote URL",
    )

    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )

    providers = parser.add_mutually_exclusive_group()
    for name in SHORTHAND_FLAGS:
        providers.add_argument(
            f"--{name}",
            dest="shorthand",
            action="store_const",
            const=name,
            help=f"Use the built-in {name} provider defaults",
        )

    parser.add_argument(
        "segments",
        nargs="*",
        metavar="PATH",
        help="Repository path segments, optionally preceded by a provider shorthand",
    )

    return parser


def main() -> None:
    """Main entry point for the CLI application."""
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        git_executable = find_git()
    except GitNotFoundError as e:
        logger.error(f"git is required: {e}")
        sys.exit(1)

    try:
        shorthand, segments = split_shorthand(args.segments, args.shorthand)
        if not any(segments):
            print("error: no repository path given.", file=sys.stderr)
            print("hint: pass the repository path, e.g. octocat Hello-World", file=sys.stderr)
            sys.exit(2)

        try:
            config = resolve(args, shorthand)
        except ConfigurationError as e:
            print(f"error: {e}", file=sys.stderr)
            print(CONFIG_ERROR_HINT, file=sys.stderr)
            sys.exit(2)

        append_suffix = not (args.no_suffix or is_truthy(os.getenv(NO_SUFFIX_ENV)))
        subtree = build_subtree(segments)
        remote_url = build_remote_url(config.base_url, subtree, append_suffix)
        local_path = build_local_path(config.source_root, config.provider_dir, subtree)

        print(f"Remote URL: {remote_url}")
        print(f"Local path: {local_path}")

        sync = RepoSync(GitClient(git_executable))
        sync.sync(local_path, remote_url, config.source_root, test_mode=args.test)

        sys.exit(0)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
