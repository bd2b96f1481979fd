"""GitHub CLI adapter used by the bootstrap workflow."""

from __future__ import annotations

from pathlib import Path

from .exec import CommandLine, CommandRunner
from .ports import VISIBILITY_VALUES

DEFAULT_HOST = "github.com"


def repo_slug(owner: str, name: str) -> str:
    """Return the ``owner/name`` slug gh expects.

    Example:
        >>> repo_slug("octo", "widgets")
        'octo/widgets'
    """
    return f"{owner}/{name}"


class GhCli:
    """``HostedRepoService`` implementation backed by the gh executable."""

    def __init__(
        self,
        *,
        gh_path: str | None = None,
        host: str = DEFAULT_HOST,
        cwd: Path | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        executable = gh_path.strip() if isinstance(gh_path, str) else ""
        self.host = host
        self._cmd = CommandLine(executable or "gh", cwd=cwd, runner=runner)

    def is_available(self) -> bool:
        result = self._cmd.capture(["--version"])
        return result is not None and result.ok

    def _qualified(self, slug: str) -> str:
        # gh resolves a bare OWNER/REPO against its default host.
        return f"{self.host}/{slug}"

    def is_authenticated(self) -> bool:
        result = self._cmd.capture(["auth", "status", "--hostname", self.host])
        return result is not None and result.ok

    def login(self) -> None:
        self._cmd.check(["auth", "login", "--hostname", self.host], interactive=True)

    def current_user(self) -> str | None:
        result = self._cmd.capture(["api", "user", "--hostname", self.host, "--jq", ".login"])
        if result is None or not result.ok:
            return None
        return result.output or None

    def repo_exists(self, slug: str) -> bool:
        """Return whether ``slug`` can be viewed; any failure counts as absent."""
        result = self._cmd.capture(["repo", "view", self._qualified(slug), "--json", "name"])
        return result is not None and result.ok

    def create_repo(self, slug: str, visibility: str) -> None:
        if visibility not in VISIBILITY_VALUES:
            raise ValueError(f"unsupported visibility: {visibility}")
        self._cmd.check(["repo", "create", self._qualified(slug), f"--{visibility}"])

    def default_branch(self, slug: str) -> str | None:
        result = self._cmd.capture(
            [
                "repo",
                "view",
                self._qualified(slug),
                "--json",
                "defaultBranchRef",
                "--jq",
                ".defaultBranchRef.name",
            ]
        )
        if result is None or not result.ok:
            return None
        return result.output or None
