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
    ValidationFailedError,
)

__all__ = [
    "AuthenticationFailedError",
    "BaseService",
    "BranchRenameFailedError",
    "CommitFailedError",
    "DependencyMissingError",
    "IdentityUnresolvedError",
    "IoFailedError",
    "LocalInitFailedError",
    "PushFailedError",
    "RemoteAddFailedError",
    "RemoteCreateFailedError",
    "ServiceFailure",
    "StageFailedError",
    "UserCancelledError",
    "ValidationFailedError",
]
