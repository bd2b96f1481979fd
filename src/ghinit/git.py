"""Git adapter used by the bootstrap workflow."""

from __future__ import annotations

from pathlib import Path

from .exec import CommandLine, CommandRunner

GIT_DIRNAME = ".git"


def git_executable(git_path: str | None = None) -> str:
    """Return the configured git executable, defaulting to ``git``.

    Example:
        >>> git_executable(" ")
        'git'
    """
    resolved = git_path.strip() if isinstance(git_path, str) else ""
    return resolved or "git"


def remote_url(host: str, owner: str, name: str) -> str:
    """Return the HTTPS clone URL for ``owner/name``.

    Example:
        >>> remote_url("github.com", "octo", "widgets")
        'https://github.com/octo/widgets.git'
    """
    return f"https://{host}/{owner}/{name}.git"


class GitCli:
    """``VersionControl`` implementation backed by the git executable."""

    def __init__(
        self,
        repo_dir: Path,
        *,
        git_path: str | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.repo_dir = repo_dir
        self._cmd = CommandLine(git_executable(git_path), cwd=repo_dir, runner=runner)

    def is_available(self) -> bool:
        result = self._cmd.capture(["--version"])
        return result is not None and result.ok

    def has_repository(self) -> bool:
        """Return whether ``repo_dir`` is the top level of a readable work tree.

        An empty or corrupt ``.git`` does not count, and neither does a
        repository found in a parent directory.
        """
        if not (self.repo_dir / GIT_DIRNAME).exists():
            return False
        result = self._cmd.capture(["rev-parse", "--show-toplevel"])
        if result is None or not result.ok or not result.output:
            return False
        return Path(result.output).resolve() == self.repo_dir.resolve()

    def init(self) -> None:
        self._cmd.check(["init"])

    def safe_directories(self) -> list[str]:
        # Exit status 1 means the key is unset.
        result = self._cmd.capture(["config", "--global", "--get-all", "safe.directory"])
        if result is None or not result.ok:
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def add_safe_directory(self, path: str) -> None:
        self._cmd.check(["config", "--global", "--add", "safe.directory", path])

    def stage_all(self) -> None:
        self._cmd.check(["add", "."])

    def commit(self, message: str) -> None:
        self._cmd.check(["commit", "-m", message])

    def current_branch(self) -> str | None:
        """Return the checked-out branch, or ``None`` for a detached HEAD."""
        result = self._cmd.check(["branch", "--show-current"])
        return result.output or None

    def branch_exists(self, name: str) -> bool:
        result = self._cmd.check(["branch", "--list", name])
        return bool(result.output)

    def create_branch(self, name: str) -> None:
        self._cmd.check(["branch", name])

    def rename_branch(self, name: str) -> None:
        self._cmd.check(["branch", "-m", name])

    def remotes(self) -> list[str]:
        result = self._cmd.check(["remote"])
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def add_remote(self, name: str, url: str) -> None:
        self._cmd.check(["remote", "add", name, url])

    def push_upstream(self, remote: str, branch: str) -> None:
        self._cmd.check(["push", "-u", remote, branch], interactive=True)
