"""Command-line entry point for ghinit."""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import click
import typer

from . import __version__, config, io, names, pathenv
from . import log as ghinit_log
from .services.bootstrap import BootstrapRepoService, BootstrapRequest
from .services.errors import ServiceFailure

app = typer.Typer(
    name="ghinit",
    help="Create a GitHub repository for the current directory and push it.",
    no_args_is_help=True,
    add_completion=False,
)


class VisibilityChoice(str, Enum):
    private = "private"
    public = "public"
    internal = "internal"


def _fail(error: ServiceFailure) -> NoReturn:
    ghinit_log.error(f"error: {error.message}")
    if error.recovery_hint:
        ghinit_log.warning(f"hint: {error.recovery_hint}")
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ghinit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            click_type=click.Choice(ghinit_log.LEVEL_NAMES, case_sensitive=False),
            help="Minimum level of messages to print.",
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colorized output.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    if log_level is not None:
        ghinit_log.set_level(log_level)
    if no_color:
        ghinit_log.set_no_color(True)


@app.command("init")
def init_command(
    project_name: Annotated[
        Optional[str],
        typer.Argument(help="Repository name; defaults to the directory name."),
    ] = None,
    visibility: Annotated[
        Optional[VisibilityChoice],
        typer.Option("--visibility", help="Visibility for a newly created repository."),
    ] = None,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Answer yes to every confirmation.")
    ] = False,
) -> None:
    """Create or adopt the GitHub remote, commit everything, and push."""
    cwd = Path.cwd()
    prompter = io.AssumeYesPrompter() if yes else io.ConsolePrompter()
    try:
        settings = config.load_settings()
        project = names.resolve_project_name(project_name, cwd, ask=prompter.prompt_string)
        request = BootstrapRequest(
            project_name=project,
            cwd=cwd,
            visibility=visibility.value if visibility else settings.visibility,
            commit_message=settings.commit_message,
            default_branch=settings.default_branch,
            excluded_names=(Path(sys.argv[0]).name,),
        )
        service = BootstrapRepoService.from_settings(settings, cwd=cwd, prompter=prompter)
        service(request)
    except ServiceFailure as exc:
        _fail(exc)


@app.command("add-to-path")
def add_to_path_command(
    directory: Annotated[
        Optional[Path],
        typer.Argument(help="Directory to add; defaults to the ghinit install directory."),
    ] = None,
    profile: Annotated[
        Optional[Path],
        typer.Option("--profile", help="Shell profile to edit on POSIX systems."),
    ] = None,
) -> None:
    """Append a directory to the persistent user PATH."""
    try:
        settings = config.load_settings()
        store = pathenv.default_store(profile or settings.profile_path)
        service = pathenv.AddToPathService(store)
        service(pathenv.AddToPathRequest(directory=directory or pathenv.default_directory()))
    except ServiceFailure as exc:
        _fail(exc)


def main() -> None:
    app()
