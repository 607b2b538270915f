"""Tests for CLI module."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from repo_clone.cli import create_parser, main
from repo_clone.config import default_source_root
from repo_clone.git import GitNotFoundError


def run_main(*argv: str) -> int:
    with patch("sys.argv", ["repo-clone", *argv]):
        with pytest.raises(SystemExit) as exc_info:
            main()
    return exc_info.value.code


class TestParser:
    """Test cases for argument parsing."""

    def test_parse_args_default(self) -> None:
        args = create_parser().parse_args([])

        assert args.config is None
        assert args.provider_dir is None
        assert args.root is None
        assert args.provider_url is None
        assert args.test is False
        assert args.no_suffix is False
        assert args.shorthand is None
        assert args.segments == []

    def test_parse_args_short_options(self) -> None:
        args = create_parser().parse_args(
            ["-c", "work", "-p", "dir", "-r", "/src", "-t", "-v", "https://x.org", "a", "b"]
        )

        assert args.config == "work"
        assert args.provider_dir == "dir"
        assert args.root == "/src"
        assert args.test is True
        assert args.provider_url == "https://x.org"
        assert args.segments == ["a", "b"]

    def test_parse_args_shorthand_flag(self) -> None:
        args = create_parser().parse_args(["--gh", "octocat", "Hello-World"])

        assert args.shorthand == "gh"
        assert args.segments == ["octocat", "Hello-World"]

    def test_shorthand_flags_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--github", "--aur", "yay"])

    def test_parse_args_help(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["-h"])
        assert exc_info.value.code == 0


@pytest.mark.usefixtures("config_dir")
class TestMain:
    """Test cases for the main flow."""

    @pytest.fixture(autouse=True)
    def git_found(self):
        with patch("repo_clone.cli.find_git", return_value="/usr/bin/git") as mock_find:
            yield mock_find

    @pytest.fixture
    def mock_git(self):
        with patch("repo_clone.cli.GitClient") as mock_client_class:
            client = mock_client_class.return_value
            client.clone.return_value = 0
            client.pull.return_value = 0
            yield client

    def test_github_dry_run(self, mock_git: Mock, capsys) -> None:
        assert run_main("-t", "--github", "octocat", "Hello-World") == 0

        out = capsys.readouterr().out
        expected_path = default_source_root() / "github" / "octocat" / "Hello-World"
        assert "Remote URL: https://github.com/octocat/Hello-World.git" in out
        assert f"Local path: {expected_path}" in out
        mock_git.clone.assert_not_called()
        mock_git.pull.assert_not_called()

    def test_bare_shorthand_token(self, tmp_path: Path, mock_git: Mock, capsys) -> None:
        assert run_main("-t", "-r", str(tmp_path), "aur", "yay") == 0

        out = capsys.readouterr().out
        assert "Remote URL: https://aur.archlinux.org/yay.git" in out
        assert f"Local path: {tmp_path / 'aur' / 'yay'}" in out

    def test_clone(self, tmp_path: Path, mock_git: Mock) -> None:
        root = tmp_path / "src"

        assert run_main("-r", str(root), "--github", "octocat", "Hello-World") == 0

        assert root.is_dir()
        mock_git.clone.assert_called_once_with(
            "https://github.com/octocat/Hello-World.git",
            root / "github" / "octocat" / "Hello-World",
        )

    def test_update(self, tmp_path: Path, mock_git: Mock, capsys) -> None:
        local = tmp_path / "bitbucket" / "team" / "project"
        local.mkdir(parents=True)

        assert run_main("-r", str(tmp_path), "bb", "team", "project") == 0

        mock_git.pull.assert_called_once_with(local)
        assert f"Updating {local}" in capsys.readouterr().out

    def test_git_failure_still_exits_zero(self, tmp_path: Path, mock_git: Mock) -> None:
        mock_git.clone.return_value = 128

        assert run_main("-r", str(tmp_path), "--github", "octocat", "Hello-World") == 0

    def test_test_mode_creates_nothing(self, tmp_path: Path, mock_git: Mock) -> None:
        root = tmp_path / "src"

        assert run_main("-t", "-r", str(root), "--github", "octocat", "Hello-World") == 0

        assert not root.exists()
        mock_git.clone.assert_not_called()

    def test_no_suffix_environment(
        self, mock_git: Mock, capsys, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("REPO_CLONE_NO_SUFFIX", "true")

        assert run_main("-t", "--github", "octocat", "Hello-World") == 0

        assert "Remote URL: https://github.com/octocat/Hello-World\n" in capsys.readouterr().out

    def test_no_suffix_flag(self, mock_git: Mock, capsys) -> None:
        assert run_main("-t", "-n", "--github", "octocat", "Hello-World") == 0

        assert "Remote URL: https://github.com/octocat/Hello-World\n" in capsys.readouterr().out

    def test_config_file_provider_dir(
        self, config_dir: Path, tmp_path: Path, mock_git: Mock, capsys
    ) -> None:
        (config_dir / "github").write_text("PROVIDER_DIR=gh\n", encoding="utf-8")

        assert run_main("-t", "-r", str(tmp_path), "--github", "octocat", "Hello-World") == 0

        out = capsys.readouterr().out
        assert "Remote URL: https://github.com/octocat/Hello-World.git" in out
        assert f"Local path: {tmp_path / 'gh' / 'octocat' / 'Hello-World'}" in out

    def test_explicit_provider(self, tmp_path: Path, mock_git: Mock, capsys) -> None:
        assert (
            run_main(
                "-t", "-r", str(tmp_path), "-v", "https://git.example.com//", "-p", "example",
                "team", "project",
            )
            == 0
        )

        assert "Remote URL: https://git.example.com/team/project.git" in capsys.readouterr().out

    def test_provider_directory_not_set(self, mock_git: Mock, capsys) -> None:
        assert run_main("octocat", "Hello-World") == 2

        err = capsys.readouterr().err
        assert "provider directory not set." in err
        assert len(err.strip().splitlines()) == 2
        mock_git.clone.assert_not_called()

    def test_empty_subtree(self, mock_git: Mock, capsys) -> None:
        assert run_main("--github") == 2

        assert "no repository path given." in capsys.readouterr().err

    def test_unreadable_config_file(self, config_dir: Path, mock_git: Mock, capsys) -> None:
        (config_dir / "github").write_bytes(b"PROVIDER_DIR=\xff\xfe\n")

        assert run_main("-t", "--github", "octocat", "Hello-World") == 2

        err = capsys.readouterr().err
        assert "error: Failed to read" in err
        assert len(err.strip().splitlines()) == 2

    def test_empty_segments_are_rejected(self, tmp_path: Path, mock_git: Mock, capsys) -> None:
        (tmp_path / "github").mkdir()

        assert run_main("-r", str(tmp_path), "--github", "") == 2

        assert "no repository path given." in capsys.readouterr().err
        mock_git.pull.assert_not_called()
        mock_git.clone.assert_not_called()

    def test_git_missing_exits_before_resolution(self, git_found: Mock) -> None:
        git_found.side_effect = GitNotFoundError("'git' not found in PATH")

        with patch("repo_clone.cli.resolve") as mock_resolve:
            assert run_main("--github", "octocat", "Hello-World") == 1

        mock_resolve.assert_not_called()

    def test_help_exits_zero(self) -> None:
        assert run_main("-h") == 0

    def test_keyboard_interrupt(self, tmp_path: Path, mock_git: Mock) -> None:
        mock_git.clone.side_effect = KeyboardInterrupt

        assert run_main("-r", str(tmp_path), "--github", "octocat", "Hello-World") == 130
