"""Configuration helpers for ghinit.

Settings are layered: model defaults, then ``config.json`` in the user config
directory, then ``GHINIT_*`` environment variables.

Example:
    >>> Settings().commit_message
    'Initial commit'
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal, Mapping

from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .services.errors import ValidationFailedError

APP_NAME = "ghinit"
CONFIG_FILENAME = "config.json"

Visibility = Literal["private", "public", "internal"]

_ENV_FIELDS = {
    "GHINIT_GIT_PATH": "git_path",
    "GHINIT_GH_PATH": "gh_path",
    "GHINIT_VISIBILITY": "visibility",
    "GHINIT_COMMIT_MESSAGE": "commit_message",
    "GHINIT_DEFAULT_BRANCH": "default_branch",
    "GHINIT_GITHUB_HOST": "github_host",
    "GHINIT_PROFILE": "profile_path",
}


class Settings(BaseModel):
    """Runtime settings for ghinit commands.

    Attributes:
        git_path: Git executable.
        gh_path: GitHub CLI executable.
        visibility: Visibility for new remotes; ``None`` prompts.
        commit_message: Message for the initial commit.
        default_branch: Branch used when the remote reports none.
        github_host: Host used for auth and remote URLs.
        profile_path: Shell profile that ``add-to-path`` edits on POSIX.
    """

    model_config = ConfigDict(extra="ignore")

    git_path: str = "git"
    gh_path: str = "gh"
    visibility: Visibility | None = None
    commit_message: str = "Initial commit"
    default_branch: str = "main"
    github_host: str = "github.com"
    profile_path: Path | None = None

    @field_validator("git_path", "gh_path", "commit_message", "default_branch", "github_host")
    @classmethod
    def require_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("must not be empty")
        return normalized

    @field_validator("visibility", mode="before")
    @classmethod
    def normalize_visibility(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            return normalized or None
        return value


def config_path() -> Path:
    """Return the path of the user configuration file."""
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME


def _load_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ValidationFailedError(f"cannot read config file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValidationFailedError(f"config file {path} must contain a JSON object")
    return payload


def load_settings(
    *,
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from the config file and environment.

    Args:
        path: Config file override; defaults to ``config_path()``.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated ``Settings``.

    Example:
        >>> load_settings(path=Path("/nonexistent/config.json"), environ={}).gh_path
        'gh'
    """
    payload = _load_file(path if path is not None else config_path())
    env = os.environ if environ is None else environ
    for key, field in _ENV_FIELDS.items():
        value = env.get(key)
        if value is not None and value.strip():
            payload[field] = value
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailedError(f"invalid configuration: {exc}") from exc
