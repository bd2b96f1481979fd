"""Project name validation.

A project name doubles as the GitHub repository name, so it follows the
characters GitHub accepts for repository slugs.

Example:
    >>> validate_project_name("my-tool.v2")
    'my-tool.v2'
    >>> is_valid_project_name("bad..name")
    False
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from .services.errors import ValidationFailedError

PromptString = Callable[[str, str], str]

PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-._]*[a-zA-Z0-9]$")


def is_valid_project_name(value: str) -> bool:
    """Return whether ``value`` is an acceptable project name.

    Example:
        >>> is_valid_project_name("a")
        False
        >>> is_valid_project_name("ab")
        True
    """
    if not PROJECT_NAME_PATTERN.match(value):
        return False
    if ".." in value:
        return False
    return not value.endswith(".")


def validate_project_name(value: str) -> str:
    """Return the stripped name or raise ``ValidationFailedError``."""
    name = value.strip()
    if not is_valid_project_name(name):
        raise ValidationFailedError(
            f"invalid project name: {name!r}",
            recovery_hint=(
                "use letters, digits, '-', '.', or '_'; start and end with a letter "
                "or digit; no '..'"
            ),
        )
    return name


def default_project_name(cwd: Path) -> str:
    """Return the base name of the working directory.

    Example:
        >>> default_project_name(Path("/work/widgets"))
        'widgets'
    """
    return cwd.resolve().name if not cwd.name else cwd.name


def resolve_project_name(
    provided: str | None,
    cwd: Path,
    *,
    ask: PromptString | None = None,
) -> str:
    """Resolve the project name from an argument, a prompt, or the cwd.

    An empty prompt response falls back to the directory base name.
    """
    default = default_project_name(cwd)
    if provided is not None and provided.strip():
        return validate_project_name(provided)
    if ask is None:
        return validate_project_name(default)
    answer = ask("Project name", default)
    return validate_project_name(answer or default)
