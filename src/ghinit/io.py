"""Console prompts for interactive confirmation."""

from __future__ import annotations

import sys
from typing import Sequence

import questionary

from .services.errors import UserCancelledError


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def prompt(text: str, default: str | None = None) -> str:
    """Prompt the user for a line of input.

    Args:
        text: Prompt label shown to the user.
        default: Value returned when the user enters an empty string.

    Returns:
        The user-provided or default string.

    Example:
        Project name [widgets]:
    """
    if _use_questionary():
        value = questionary.text(text, default=default or "").ask()
        if value is None:
            raise UserCancelledError("aborted")
        value = str(value).strip()
    elif default:
        value = input(f"{text} [{default}]: ").strip()
    else:
        value = input(f"{text}: ").strip()
    if value == "" and default is not None:
        return default
    return value


def confirm(text: str, default: bool = False) -> bool:
    """Prompt for a yes/no confirmation.

    Args:
        text: Prompt label shown to the user.
        default: Default answer when the user presses enter.

    Returns:
        ``True`` when the user confirms.
    """
    if _use_questionary():
        response = questionary.confirm(text, default=default).ask()
        return bool(response)
    suffix = "[Y/n]" if default else "[y/N]"
    response = input(f"{text} {suffix}: ").strip().lower()
    if response == "":
        return default
    return response in {"y", "yes"}


def select(text: str, choices: Sequence[str], default: str) -> str:
    """Prompt for one of ``choices``; unknown answers re-prompt."""
    if _use_questionary():
        value = questionary.select(text, choices=list(choices), default=default).ask()
        if value is None:
            raise UserCancelledError("aborted")
        return str(value)
    options = "/".join(choices)
    while True:
        response = input(f"{text} ({options}) [{default}]: ").strip().lower()
        if response == "":
            return default
        if response in choices:
            return response


class ConsolePrompter:
    """``Prompter`` backed by the functions above."""

    def confirm(self, question: str, default: bool = False) -> bool:
        return confirm(question, default=default)

    def prompt_string(self, question: str, default: str) -> str:
        return prompt(question, default=default)

    def select(self, question: str, choices: Sequence[str], default: str) -> str:
        return select(question, choices, default)


class AssumeYesPrompter:
    """Answer every confirmation with yes; other prompts take their default."""

    def confirm(self, question: str, default: bool = False) -> bool:
        return True

    def prompt_string(self, question: str, default: str) -> str:
        return default

    def select(self, question: str, choices: Sequence[str], default: str) -> str:
        return default
