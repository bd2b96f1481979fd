"""Typed capability ports used by the bootstrap workflow.

Adapters report command failures by raising
``ghinit.exec.CommandExecutionError``; query operations that are allowed to
fail return ``None``/``False`` instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence


class RemoteRepoState(str, Enum):
    ABSENT = "absent"
    EXISTS = "exists"


class LocalRepoState(str, Enum):
    ABSENT = "absent"
    EXISTS = "exists"


VISIBILITY_VALUES = ("private", "public", "internal")


class VersionControl(Protocol):
    """Version-control command surface bound to one working directory."""

    def is_available(self) -> bool: ...

    def has_repository(self) -> bool: ...

    def init(self) -> None: ...

    def safe_directories(self) -> list[str]: ...

    def add_safe_directory(self, path: str) -> None: ...

    def stage_all(self) -> None: ...

    def commit(self, message: str) -> None: ...

    def current_branch(self) -> str | None: ...

    def branch_exists(self, name: str) -> bool: ...

    def create_branch(self, name: str) -> None: ...

    def rename_branch(self, name: str) -> None: ...

    def remotes(self) -> list[str]: ...

    def add_remote(self, name: str, url: str) -> None: ...

    def push_upstream(self, remote: str, branch: str) -> None: ...


class HostedRepoService(Protocol):
    """Hosted-repository command surface (GitHub CLI)."""

    host: str

    def is_available(self) -> bool: ...

    def is_authenticated(self) -> bool: ...

    def login(self) -> None: ...

    def current_user(self) -> str | None: ...

    def repo_exists(self, slug: str) -> bool: ...

    def create_repo(self, slug: str, visibility: str) -> None: ...

    def default_branch(self, slug: str) -> str | None: ...


class Prompter(Protocol):
    """Interactive confirmation channel."""

    def confirm(self, question: str, default: bool = False) -> bool: ...

    def prompt_string(self, question: str, default: str) -> str: ...

    def select(self, question: str, choices: Sequence[str], default: str) -> str: ...


class EnvironmentStore(Protocol):
    """Persistent user environment (PATH) accessor."""

    def entries(self) -> list[str]: ...

    def append(self, entry: str) -> None: ...
