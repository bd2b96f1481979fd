"""Subprocess helpers shared by the git and gh adapters."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol

from . import log


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request.

    ``interactive`` requests inherit the terminal instead of capturing output,
    which is what login flows and pushes with credential prompts need.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    interactive: bool = False


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return (self.stdout or "").strip()


class CommandRunner(Protocol):
    """Runtime command-execution interface.

    Implementations return ``None`` when the executable cannot be found.
    """

    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Default command-runner adapter backed by subprocess."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        log.trace(f"$ {shlex.join(request.argv)}")
        run_kwargs: dict[str, object] = {
            "cwd": request.cwd,
            "env": request.env,
            "check": False,
        }
        if not request.interactive:
            run_kwargs["capture_output"] = True
            run_kwargs["text"] = True
        try:
            completed = subprocess.run(list(request.argv), **run_kwargs)
        except FileNotFoundError:
            return None

        stdout = completed.stdout if isinstance(completed.stdout, str) else ""
        stderr = completed.stderr if isinstance(completed.stderr, str) else ""
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )


@dataclass(frozen=True)
class CommandExecutionError(RuntimeError):
    """Raised when a command is missing or exits non-zero."""

    request: CommandRequest
    detail: str
    result: CommandResult | None = None

    def __str__(self) -> str:
        return self.detail

    @property
    def missing(self) -> bool:
        return self.result is None


def _missing_command_detail(request: CommandRequest) -> str:
    if not request.argv:
        return "missing required command"
    return f"missing required command: {request.argv[0]}"


def _command_failure_detail(request: CommandRequest, result: CommandResult) -> str:
    output = (result.stderr or result.stdout or "").strip()
    command_text = shlex.join(request.argv)
    if output:
        return f"command failed: {command_text}\n{output}"
    return f"command failed: {command_text}"


class CommandLine:
    """Bind an executable and working directory to a command runner.

    Example:
        >>> CommandLine("git").argv(["status"])
        ('git', 'status')
    """

    def __init__(
        self,
        executable: str,
        *,
        cwd: Path | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.executable = executable
        self.cwd = cwd
        self.runner = runner or SubprocessCommandRunner()

    def argv(self, args: list[str]) -> tuple[str, ...]:
        return (self.executable, *args)

    def capture(self, args: list[str], *, interactive: bool = False) -> CommandResult | None:
        request = CommandRequest(argv=self.argv(args), cwd=self.cwd, interactive=interactive)
        return self.runner.run(request)

    def check(self, args: list[str], *, interactive: bool = False) -> CommandResult:
        """Run a command and raise ``CommandExecutionError`` unless it succeeds."""
        request = CommandRequest(argv=self.argv(args), cwd=self.cwd, interactive=interactive)
        result = self.runner.run(request)
        if result is None:
            raise CommandExecutionError(request=request, detail=_missing_command_detail(request))
        if not result.ok:
            raise CommandExecutionError(
                request=request,
                result=result,
                detail=_command_failure_detail(request, result),
            )
        return result
