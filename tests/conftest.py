"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable

import pytest

from repo_clone.cli import create_parser


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that change resolution."""
    for name in (
        "REPO_CLONE_CONFIG_DIR",
        "REPO_CLONE_SOURCE_ROOT",
        "REPO_CLONE_NO_SUFFIX",
        "MSYSTEM",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return an empty provider config directory wired into the environment."""
    directory = tmp_path / "config"
    directory.mkdir()
    monkeypatch.setenv("REPO_CLONE_CONFIG_DIR", str(directory))
    return directory


@pytest.fixture
def parse_args() -> Callable[..., argparse.Namespace]:
    """Return a helper that parses CLI arguments with the real parser."""
    parser = create_parser()

    def _parse(*argv: str) -> argparse.Namespace:
        return parser.parse_args(list(argv))

    return _parse
