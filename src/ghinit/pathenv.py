"""Persistent user PATH updates for the ``add-to-path`` command.

On Windows the user ``Path`` value under ``HKCU\\Environment`` is edited. On
other platforms an ``export PATH=...`` line is appended to a shell profile.
Either way the change applies to new shells only.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from . import log
from .ports import EnvironmentStore
from .services.base import BaseService
from .services.errors import IoFailedError, ValidationFailedError

PROFILE_MARKER = "# added by ghinit"


def normalize_entry(entry: str) -> str:
    """Normalize a PATH entry for comparison.

    Example:
        >>> normalize_entry("/opt/tools/") == normalize_entry("/opt/tools")
        True
    """
    return os.path.normcase(os.path.normpath(entry.strip()))


def default_directory() -> Path:
    """Return the directory holding the running ``ghinit`` executable."""
    return Path(sys.argv[0]).resolve().parent


def default_profile_path() -> Path:
    return Path.home() / ".profile"


class ProfileEnvironmentStore:
    """POSIX store: current ``PATH`` plus entries this tool already exported."""

    def __init__(self, profile: Path, *, environ: Mapping[str, str] | None = None) -> None:
        self.profile = profile
        self._environ = os.environ if environ is None else environ

    def _read(self) -> str:
        # Profiles are shell scripts in any encoding; keep unknown bytes intact.
        if not self.profile.exists():
            return ""
        return self.profile.read_text(encoding="utf-8", errors="surrogateescape")

    def _exported_entries(self) -> list[str]:
        entries: list[str] = []
        lines = self._read().splitlines()
        for previous, line in zip([""] + lines, lines):
            if previous.strip() != PROFILE_MARKER:
                continue
            prefix = 'export PATH="$PATH:'
            if line.startswith(prefix) and line.endswith('"'):
                entries.append(line[len(prefix) : -1])
        return entries

    def entries(self) -> list[str]:
        current = [item for item in self._environ.get("PATH", "").split(os.pathsep) if item]
        return current + self._exported_entries()

    def append(self, entry: str) -> None:
        existing = self._read()
        prefix = "" if not existing or existing.endswith("\n") else "\n"
        with self.profile.open("a", encoding="utf-8") as fh:
            fh.write(f'{prefix}{PROFILE_MARKER}\nexport PATH="$PATH:{entry}"\n')


class WindowsEnvironmentStore:
    """Windows store backed by the per-user registry environment."""

    _KEY = "Environment"
    _VALUE = "Path"

    def _read(self) -> str:
        import winreg

        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, self._KEY) as key:
            try:
                value, _kind = winreg.QueryValueEx(key, self._VALUE)
            except FileNotFoundError:
                return ""
        return str(value)

    def entries(self) -> list[str]:
        return [item for item in self._read().split(";") if item]

    def append(self, entry: str) -> None:
        import winreg

        current = self._read().rstrip(";")
        updated = f"{current};{entry}" if current else entry
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, self._KEY, 0, winreg.KEY_SET_VALUE) as key:
            winreg.SetValueEx(key, self._VALUE, 0, winreg.REG_EXPAND_SZ, updated)


def default_store(profile: Path | None = None) -> EnvironmentStore:
    if sys.platform == "win32":
        return WindowsEnvironmentStore()
    return ProfileEnvironmentStore(profile or default_profile_path())


@dataclass(frozen=True)
class AddToPathRequest:
    directory: Path


@dataclass(frozen=True)
class AddToPathOutcome:
    directory: Path
    added: bool


class AddToPathService(BaseService[AddToPathRequest, AddToPathOutcome]):
    """Append a directory to the persistent PATH unless already present."""

    def __init__(self, store: EnvironmentStore) -> None:
        self._store = store

    def _run(self, request: AddToPathRequest) -> AddToPathOutcome:
        directory = request.directory.expanduser().resolve()
        if not directory.is_dir():
            raise ValidationFailedError(f"not a directory: {directory}")
        try:
            known = {normalize_entry(item) for item in self._store.entries()}
            if normalize_entry(str(directory)) in known:
                log.info(f"{directory} is already on PATH")
                return AddToPathOutcome(directory=directory, added=False)
            self._store.append(str(directory))
        except (OSError, UnicodeError) as exc:
            raise IoFailedError(f"failed to update PATH: {exc}") from exc
        log.success(f"Added {directory} to PATH; open a new shell to pick it up")
        return AddToPathOutcome(directory=directory, added=True)
