from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ghinit.exec import CommandExecutionError, CommandRequest, CommandResult


def command_error(*argv: str) -> CommandExecutionError:
    request = CommandRequest(argv=argv)
    return CommandExecutionError(
        request=request,
        result=CommandResult(argv=argv, returncode=1, stderr="boom"),
        detail=f"command failed: {' '.join(argv)}\nboom",
    )


@dataclass
class FakeVersionControl:
    """In-memory ``VersionControl`` that mirrors the subset of git state used."""

    repo_dir: Path
    available: bool = True
    initialized: bool = False
    branch: str | None = "master"
    branches: set[str] = field(default_factory=set)
    remote_names: list[str] = field(default_factory=list)
    safe: list[str] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def _record(self, name: str, *args: str) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise command_error("git", name, *args)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    def is_available(self) -> bool:
        return self.available

    def has_repository(self) -> bool:
        return self.initialized

    def init(self) -> None:
        self._record("init")
        self.initialized = True

    def safe_directories(self) -> list[str]:
        return list(self.safe)

    def add_safe_directory(self, path: str) -> None:
        self._record("add_safe_directory", path)
        self.safe.append(path)

    def stage_all(self) -> None:
        self._record("stage_all")

    def commit(self, message: str) -> None:
        self._record("commit", message)
        if self.branch:
            self.branches.add(self.branch)

    def current_branch(self) -> str | None:
        self._record("current_branch")
        return self.branch

    def branch_exists(self, name: str) -> bool:
        return name in self.branches

    def create_branch(self, name: str) -> None:
        self._record("create_branch", name)
        self.branches.add(name)

    def rename_branch(self, name: str) -> None:
        self._record("rename_branch", name)
        self.branches.discard(self.branch or "")
        self.branches.add(name)
        self.branch = name

    def remotes(self) -> list[str]:
        return list(self.remote_names)

    def add_remote(self, name: str, url: str) -> None:
        self._record("add_remote", name, url)
        self.remote_names.append(name)

    def push_upstream(self, remote: str, branch: str) -> None:
        self._record("push_upstream", remote, branch)


@dataclass
class FakeHostedRepo:
    """In-memory ``HostedRepoService``."""

    host: str = "github.com"
    available: bool = True
    authenticated: bool = True
    login_succeeds: bool = True
    user: str | None = "octo"
    repos: set[str] = field(default_factory=set)
    default: str | None = "main"
    fail_create: bool = False
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    def is_available(self) -> bool:
        return self.available

    def is_authenticated(self) -> bool:
        return self.authenticated

    def login(self) -> None:
        self.calls.append(("login",))
        if not self.login_succeeds:
            raise command_error("gh", "auth", "login")
        self.authenticated = True

    def current_user(self) -> str | None:
        return self.user

    def repo_exists(self, slug: str) -> bool:
        return slug in self.repos

    def create_repo(self, slug: str, visibility: str) -> None:
        self.calls.append(("create_repo", slug, visibility))
        if self.fail_create:
            raise command_error("gh", "repo", "create", slug)
        self.repos.add(slug)

    def default_branch(self, slug: str) -> str | None:
        return self.default


class ScriptedPrompter:
    """``Prompter`` that replays queued answers and records questions."""

    def __init__(
        self,
        confirms: Sequence[bool] = (),
        strings: Sequence[str] = (),
        selections: Sequence[str] = (),
    ) -> None:
        self._confirms = list(confirms)
        self._strings = list(strings)
        self._selections = list(selections)
        self.questions: list[str] = []

    def confirm(self, question: str, default: bool = False) -> bool:
        self.questions.append(question)
        if not self._confirms:
            raise AssertionError(f"unexpected confirm: {question}")
        return self._confirms.pop(0)

    def prompt_string(self, question: str, default: str) -> str:
        self.questions.append(question)
        if not self._strings:
            raise AssertionError(f"unexpected prompt: {question}")
        return self._strings.pop(0)

    def select(self, question: str, choices: Sequence[str], default: str) -> str:
        self.questions.append(question)
        if not self._selections:
            raise AssertionError(f"unexpected select: {question}")
        return self._selections.pop(0)


class RecordingRunner:
    """``CommandRunner`` returning scripted results keyed by argv prefix."""

    def __init__(self, responses: dict[tuple[str, ...], CommandResult | None] | None = None):
        self.responses = responses or {}
        self.requests: list[CommandRequest] = []

    def run(self, request: CommandRequest) -> CommandResult | None:
        self.requests.append(request)
        for prefix, result in self.responses.items():
            if request.argv[: len(prefix)] == prefix:
                return result
        return CommandResult(argv=request.argv, returncode=0)

    @property
    def argvs(self) -> list[tuple[str, ...]]:
        return [request.argv for request in self.requests]
