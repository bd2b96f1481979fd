"""Service failure contracts.

Services return typed outcomes on success and raise ServiceFailure on expected
dependency, authentication, user, or external-command failures. Programmer bugs
raise normal exceptions. Every ServiceFailure is terminal for the run: the CLI
prints it and exits with status 1.
"""

from __future__ import annotations

from typing import Literal

ServiceFailureCode = Literal[
    "validation_failed",
    "dependency_missing",
    "authentication_failed",
    "identity_unresolved",
    "user_cancelled",
    "remote_create_failed",
    "local_init_failed",
    "stage_failed",
    "commit_failed",
    "remote_add_failed",
    "branch_rename_failed",
    "push_failed",
    "io_failed",
]


class ServiceFailure(Exception):
    """Expected service failure.

    Use ``raise SomeFailure(...) from exc`` to chain the causing exception; it
    is available as ``__cause__``.
    """

    code: ServiceFailureCode

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.recovery_hint = recovery_hint


class ValidationFailedError(ServiceFailure):
    """Invalid input, such as a malformed project name or config file."""

    code = "validation_failed"


class DependencyMissingError(ServiceFailure):
    """A required executable (git, gh) cannot be invoked."""

    code = "dependency_missing"


class AuthenticationFailedError(ServiceFailure):
    """The hosted-repo CLI is not authenticated and login did not succeed."""

    code = "authentication_failed"


class IdentityUnresolvedError(ServiceFailure):
    """The authenticated session did not yield a user login."""

    code = "identity_unresolved"


class UserCancelledError(ServiceFailure):
    """The user declined a confirmation prompt."""

    code = "user_cancelled"


class RemoteCreateFailedError(ServiceFailure):
    code = "remote_create_failed"


class LocalInitFailedError(ServiceFailure):
    code = "local_init_failed"


class StageFailedError(ServiceFailure):
    code = "stage_failed"


class CommitFailedError(ServiceFailure):
    code = "commit_failed"


class RemoteAddFailedError(ServiceFailure):
    code = "remote_add_failed"


class BranchRenameFailedError(ServiceFailure):
    code = "branch_rename_failed"


class PushFailedError(ServiceFailure):
    code = "push_failed"


class IoFailedError(ServiceFailure):
    """I/O operation failed (ignore file, shell profile, registry)."""

    code = "io_failed"
