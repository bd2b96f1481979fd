from __future__ import annotations

from pathlib import Path

import pytest

from ghinit import git
from ghinit.exec import CommandExecutionError, CommandResult
from tests.ghinit.helpers import RecordingRunner


def make_git(repo_dir: Path, responses: dict | None = None) -> tuple[git.GitCli, RecordingRunner]:
    runner = RecordingRunner(responses)
    return git.GitCli(repo_dir, runner=runner), runner


def test_missing_git_is_unavailable(tmp_path: Path) -> None:
    cli, _runner = make_git(tmp_path, {("git",): None})

    assert cli.is_available() is False


def test_configured_git_path_is_used(tmp_path: Path) -> None:
    runner = RecordingRunner()
    cli = git.GitCli(tmp_path, git_path="/opt/git/bin/git", runner=runner)

    cli.init()

    assert runner.argvs == [("/opt/git/bin/git", "init")]
    assert runner.requests[0].cwd == tmp_path


def test_has_repository_without_metadata_skips_git(tmp_path: Path) -> None:
    cli, runner = make_git(tmp_path)

    assert cli.has_repository() is False
    assert runner.requests == []


def test_has_repository_confirms_top_level(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    argv = ("git", "rev-parse", "--show-toplevel")
    cli, runner = make_git(tmp_path, {argv: CommandResult(argv, 0, stdout=f"{tmp_path}\n")})

    assert cli.has_repository() is True
    assert runner.argvs == [argv]


@pytest.mark.parametrize(
    "result",
    [
        CommandResult(("git",), 128, stderr="fatal: not a git repository"),
        CommandResult(("git",), 0, stdout="/somewhere/else\n"),
        None,
    ],
)
def test_unreadable_or_foreign_metadata_is_not_a_repository(
    tmp_path: Path, result: CommandResult | None
) -> None:
    (tmp_path / ".git").mkdir()
    cli, _runner = make_git(tmp_path, {("git", "rev-parse"): result})

    assert cli.has_repository() is False


def test_mutating_commands_use_expected_arguments(tmp_path: Path) -> None:
    cli, runner = make_git(tmp_path)

    cli.stage_all()
    cli.commit("Initial commit")
    cli.create_branch("main")
    cli.rename_branch("main")
    cli.add_remote("origin", "https://github.com/octo/widgets.git")
    cli.add_safe_directory("/work/widgets")
    cli.push_upstream("origin", "main")

    assert runner.argvs == [
        ("git", "add", "."),
        ("git", "commit", "-m", "Initial commit"),
        ("git", "branch", "main"),
        ("git", "branch", "-m", "main"),
        ("git", "remote", "add", "origin", "https://github.com/octo/widgets.git"),
        ("git", "config", "--global", "--add", "safe.directory", "/work/widgets"),
        ("git", "push", "-u", "origin", "main"),
    ]
    assert runner.requests[-1].interactive is True


def test_current_branch_is_none_when_detached(tmp_path: Path) -> None:
    argv = ("git", "branch", "--show-current")
    cli, _ = make_git(tmp_path, {argv: CommandResult(argv, 0, stdout="\n")})

    assert cli.current_branch() is None


def test_current_branch_strips_output(tmp_path: Path) -> None:
    argv = ("git", "branch", "--show-current")
    cli, _ = make_git(tmp_path, {argv: CommandResult(argv, 0, stdout="master\n")})

    assert cli.current_branch() == "master"


def test_branch_exists_reads_branch_list(tmp_path: Path) -> None:
    argv = ("git", "branch", "--list")
    cli, _ = make_git(tmp_path, {argv: CommandResult(argv, 0, stdout="  main\n")})

    assert cli.branch_exists("main") is True


def test_remotes_lists_names(tmp_path: Path) -> None:
    argv = ("git", "remote")
    cli, _ = make_git(tmp_path, {argv: CommandResult(argv, 0, stdout="origin\nupstream\n")})

    assert cli.remotes() == ["origin", "upstream"]


def test_safe_directories_unset_key_is_empty(tmp_path: Path) -> None:
    argv = ("git", "config", "--global", "--get-all", "safe.directory")
    cli, _ = make_git(tmp_path, {argv: CommandResult(argv, 1)})

    assert cli.safe_directories() == []


def test_safe_directories_lists_entries(tmp_path: Path) -> None:
    argv = ("git", "config", "--global", "--get-all", "safe.directory")
    cli, _ = make_git(tmp_path, {argv: CommandResult(argv, 0, stdout="/a\n/b\n")})

    assert cli.safe_directories() == ["/a", "/b"]


def test_failed_commit_raises(tmp_path: Path) -> None:
    argv = ("git", "commit")
    cli, _ = make_git(
        tmp_path, {argv: CommandResult(argv, 1, stdout="nothing to commit, working tree clean")}
    )

    with pytest.raises(CommandExecutionError) as excinfo:
        cli.commit("Initial commit")

    assert "nothing to commit" in str(excinfo.value)
