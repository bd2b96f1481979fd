"""Repository bootstrap workflow.

Turns a working directory into a local repository with one commit, bound to a
GitHub remote of the same name, with its default branch pushed. Every step
checks whether its target state already holds, so re-running after fixing a
failure resumes where the previous run stopped. Nothing is rolled back.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

from pydantic import BaseModel, ConfigDict

from .. import gitignore, log
from ..config import Settings, Visibility
from ..exec import CommandExecutionError, CommandRunner
from ..git import GIT_DIRNAME, GitCli, remote_url
from ..github import GhCli, repo_slug
from ..names import validate_project_name
from ..ports import (
    VISIBILITY_VALUES,
    HostedRepoService,
    LocalRepoState,
    Prompter,
    RemoteRepoState,
    VersionControl,
)
from .base import BaseService
from .errors import (
    AuthenticationFailedError,
    BranchRenameFailedError,
    CommitFailedError,
    DependencyMissingError,
    IdentityUnresolvedError,
    IoFailedError,
    LocalInitFailedError,
    PushFailedError,
    RemoteAddFailedError,
    RemoteCreateFailedError,
    ServiceFailure,
    StageFailedError,
    UserCancelledError,
)

ORIGIN = "origin"
WriteIgnoreFile = Callable[[Path], Path]


class BootstrapRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_name: str
    cwd: Path
    visibility: Visibility | None = None
    commit_message: str = "Initial commit"
    default_branch: str = "main"
    excluded_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class BootstrapOutcome:
    project_name: str
    github_user: str
    remote_url: str
    branch: str
    remote_state: RemoteRepoState
    local_state: LocalRepoState
    remote_created: bool
    local_initialized: bool
    remote_bound: bool
    branch_renamed: bool
    ignore_path: Path
    messages: tuple[str, ...]


@contextmanager
def _failing_as(
    error_type: type[ServiceFailure], message: str, *, recovery_hint: str | None = None
) -> Iterator[None]:
    try:
        yield
    except CommandExecutionError as exc:
        raise error_type(f"{message}: {exc}", recovery_hint=recovery_hint) from exc


def count_content_files(root: Path, excluded_names: tuple[str, ...] = ()) -> int:
    """Count files under ``root``, skipping git metadata.

    ``excluded_names`` applies to files directly in ``root`` only.
    """
    excluded = set(excluded_names)
    total = 0
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if name != GIT_DIRNAME]
        skip = excluded if Path(dirpath) == root else set()
        total += sum(1 for name in filenames if name not in skip)
    return total


class BootstrapRepoService(BaseService[BootstrapRequest, BootstrapOutcome]):
    """Create-or-adopt a GitHub remote and push an initial commit to it."""

    def __init__(
        self,
        vcs: VersionControl,
        hosted: HostedRepoService,
        prompter: Prompter,
        *,
        write_ignore_file: WriteIgnoreFile = gitignore.write_ignore_file,
    ) -> None:
        self._vcs = vcs
        self._hosted = hosted
        self._prompter = prompter
        self._write_ignore_file = write_ignore_file
        self._messages: list[str] = []

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        cwd: Path,
        prompter: Prompter,
        runner: CommandRunner | None = None,
    ) -> BootstrapRepoService:
        """Wire the service to the real git and gh executables."""
        return cls(
            GitCli(cwd, git_path=settings.git_path, runner=runner),
            GhCli(gh_path=settings.gh_path, host=settings.github_host, cwd=cwd, runner=runner),
            prompter,
        )

    def _note(self, message: str) -> None:
        self._messages.append(message)
        log.info(message)

    def _run(self, request: BootstrapRequest) -> BootstrapOutcome:
        self._messages = []
        name = validate_project_name(request.project_name)

        self._check_dependencies()
        self._ensure_authenticated()
        user = self._resolve_identity()
        slug = repo_slug(user, name)

        self._check_content(request)
        remote_state, remote_created = self._ensure_remote(slug, request)
        local_state, local_initialized = self._ensure_local(request.cwd)
        self._ensure_safe_directory(request.cwd)
        ignore_path = self._write_ignore(request.cwd)

        self._note("Staging files...")
        with _failing_as(StageFailedError, "failed to stage files"):
            self._vcs.stage_all()
        self._note(f"Committing: {request.commit_message}")
        with _failing_as(
            CommitFailedError,
            "failed to commit",
            recovery_hint="a re-run with nothing new to commit fails here; push manually",
        ):
            self._vcs.commit(request.commit_message)

        url = remote_url(self._hosted.host, user, name)
        remote_bound = self._ensure_origin(url)
        branch = self._resolve_default_branch(slug, request.default_branch)
        branch_renamed = self._align_branch(branch)

        self._note(f"Pushing {branch} to {ORIGIN}...")
        with _failing_as(PushFailedError, f"failed to push {branch}"):
            self._vcs.push_upstream(ORIGIN, branch)

        log.success(f"Repository ready: https://{self._hosted.host}/{slug}")
        return BootstrapOutcome(
            project_name=name,
            github_user=user,
            remote_url=url,
            branch=branch,
            remote_state=remote_state,
            local_state=local_state,
            remote_created=remote_created,
            local_initialized=local_initialized,
            remote_bound=remote_bound,
            branch_renamed=branch_renamed,
            ignore_path=ignore_path,
            messages=tuple(self._messages),
        )

    def _check_dependencies(self) -> None:
        if not self._vcs.is_available():
            raise DependencyMissingError(
                "git is not installed or not on PATH",
                recovery_hint="install git from https://git-scm.com/downloads",
            )
        if not self._hosted.is_available():
            raise DependencyMissingError(
                "gh is not installed or not on PATH",
                recovery_hint="install the GitHub CLI from https://cli.github.com",
            )

    def _ensure_authenticated(self) -> None:
        if self._hosted.is_authenticated():
            log.debug("GitHub CLI is authenticated")
            return
        log.warning("GitHub CLI is not authenticated; starting gh auth login")
        try:
            self._hosted.login()
        except CommandExecutionError as exc:
            raise AuthenticationFailedError(
                f"GitHub login failed: {exc}", recovery_hint="run: gh auth login"
            ) from exc
        if not self._hosted.is_authenticated():
            raise AuthenticationFailedError(
                "GitHub CLI is still not authenticated", recovery_hint="run: gh auth login"
            )

    def _resolve_identity(self) -> str:
        user = (self._hosted.current_user() or "").strip()
        if not user:
            raise IdentityUnresolvedError(
                "could not determine the authenticated GitHub user",
                recovery_hint="check: gh api user",
            )
        self._note(f"GitHub user: {user}")
        return user

    def _check_content(self, request: BootstrapRequest) -> None:
        count = count_content_files(request.cwd, request.excluded_names)
        log.debug(f"Found {count} file(s) in {request.cwd}")
        if count:
            return
        if not self._prompter.confirm(
            f"No files found in {request.cwd}. Continue with an empty repository?", False
        ):
            raise UserCancelledError("cancelled: working directory has no files")

    def _ensure_remote(self, slug: str, request: BootstrapRequest) -> tuple[RemoteRepoState, bool]:
        if self._hosted.repo_exists(slug):
            if not self._prompter.confirm(
                f"Repository {slug} already exists on GitHub. Continue using it?", False
            ):
                raise UserCancelledError(f"cancelled: {slug} already exists")
            self._note(f"Using existing repository {slug}")
            return RemoteRepoState.EXISTS, False

        visibility = request.visibility or self._prompter.select(
            "Repository visibility", VISIBILITY_VALUES, "private"
        )
        self._note(f"Creating {visibility} repository {slug}...")
        with _failing_as(RemoteCreateFailedError, f"failed to create {slug}"):
            self._hosted.create_repo(slug, visibility)
        return RemoteRepoState.ABSENT, True

    def _ensure_local(self, cwd: Path) -> tuple[LocalRepoState, bool]:
        if self._vcs.has_repository():
            self._note("Local repository already initialized")
            return LocalRepoState.EXISTS, False
        self._note("Initializing local repository...")
        with _failing_as(LocalInitFailedError, f"failed to initialize {cwd}"):
            self._vcs.init()
        return LocalRepoState.ABSENT, True

    def _ensure_safe_directory(self, cwd: Path) -> None:
        path = cwd.resolve().as_posix()
        listed = self._vcs.safe_directories()
        if path in listed or "*" in listed:
            return
        log.debug(f"Marking {path} as a safe directory")
        with _failing_as(LocalInitFailedError, f"failed to mark {path} as safe.directory"):
            self._vcs.add_safe_directory(path)

    def _write_ignore(self, cwd: Path) -> Path:
        try:
            path = self._write_ignore_file(cwd)
        except (OSError, UnicodeError) as exc:
            raise IoFailedError(f"failed to write {gitignore.IGNORE_FILENAME}: {exc}") from exc
        self._note(f"Updated {path.name}")
        return path

    def _ensure_origin(self, url: str) -> bool:
        with _failing_as(RemoteAddFailedError, "failed to list remotes"):
            remotes = self._vcs.remotes()
        if ORIGIN in remotes:
            self._note(f"Remote {ORIGIN} already configured")
            return False
        self._note(f"Adding remote {ORIGIN}: {url}")
        with _failing_as(RemoteAddFailedError, f"failed to add remote {ORIGIN}"):
            self._vcs.add_remote(ORIGIN, url)
        return True

    def _resolve_default_branch(self, slug: str, fallback: str) -> str:
        branch = (self._hosted.default_branch(slug) or "").strip()
        if not branch:
            log.debug(f"Default branch unavailable for {slug}; using {fallback}")
            return fallback
        return branch

    def _align_branch(self, branch: str) -> bool:
        """Make ``branch`` the local branch to push; return whether a rename ran."""
        with _failing_as(BranchRenameFailedError, "failed to read the current branch"):
            current = self._vcs.current_branch()
            target_exists = self._vcs.branch_exists(branch)
        if current == branch:
            return False
        if current is None:
            # Detached HEAD: point the branch at HEAD instead of renaming.
            if not target_exists:
                self._note(f"Creating branch {branch}")
                with _failing_as(BranchRenameFailedError, f"failed to create {branch}"):
                    self._vcs.create_branch(branch)
            return False
        if target_exists:
            raise BranchRenameFailedError(
                f"cannot rename {current} to {branch}: {branch} already exists",
                recovery_hint=f"check out {branch} or delete it, then re-run",
            )
        self._note(f"Renaming branch {current} to {branch}")
        with _failing_as(BranchRenameFailedError, f"failed to rename {current} to {branch}"):
            self._vcs.rename_branch(branch)
        return True
