"""Typer CLI application for create-kapp."""

from __future__ import annotations

import logging
from typing import Annotated

import httpx
from rich.console import Console
from rich.logging import RichHandler
from typer import Argument, Exit, Option, Typer

import create_kapp
from create_kapp.cli._prompts import PromptEngine
from create_kapp.cli._scaffold import (
    DEFAULT_BRANCH,
    DEFAULT_HOST,
    DEFAULT_OWNER,
    ScaffoldSession,
    TemplateSource,
)
from create_kapp.cli._types import Template

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()


@app.callback()
def main() -> None:
    """create-kapp — start a new project from a ready-made template."""


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_templates() -> None:
    default = Template.default()
    _console.print()
    _console.print("[bold cyan]◆[/]  Available templates")
    _console.print("[dim]│[/]")
    for t in Template:
        marker = " [dim](default)[/]" if t is default else ""
        _console.print(f"[dim]│[/]  [bold cyan]{t.value:<16}[/] [bold]{t.label}[/]{marker}")
        _console.print(f"[dim]│[/]  {' ' * 16} [dim]{t.description}[/]")
        _console.print("[dim]│[/]")
    _console.print()


def _list_templates_callback(value: bool) -> None:
    if value:
        _print_templates()
        raise Exit()


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"create-kapp {create_kapp.__version__}")
        raise Exit()


@app.command()
def create(
    destination: Annotated[
        str | None,
        Argument(help="Directory to set the project up in ('.' for the current one)."),
    ] = None,
    template: Annotated[
        str | None,
        Option(
            "--template",
            "-t",
            help="Template name. Unknown names fall back to the default template.",
            show_default=False,
        ),
    ] = None,
    owner: Annotated[
        str, Option("--owner", envvar="CREATE_KAPP_OWNER", help="Account hosting the templates")
    ] = DEFAULT_OWNER,
    branch: Annotated[
        str, Option("--branch", envvar="CREATE_KAPP_BRANCH", help="Branch to download")
    ] = DEFAULT_BRANCH,
    host: Annotated[
        str, Option("--host", envvar="CREATE_KAPP_HOST", help="Archive host")
    ] = DEFAULT_HOST,
    yes: Annotated[
        bool, Option("--yes", "-y", help="Extract into a non-empty directory without asking.")
    ] = False,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Show debug logging.")] = False,
    list_templates: Annotated[
        bool,
        Option(
            "--list-templates",
            "-l",
            help="List all available templates and exit.",
            callback=_list_templates_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
    version: Annotated[
        bool,
        Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Download a template and unpack it into a project directory."""
    _setup_logging(verbose)

    source = TemplateSource(host=host, owner=owner, branch=branch)
    prompt = PromptEngine(_console)

    with httpx.Client(timeout=None) as client:
        session = ScaffoldSession(prompt, client, source)
        try:
            completed = session.run(destination, template, assume_yes=yes)
        except (EOFError, KeyboardInterrupt):
            prompt.print("", end="\n")
            prompt.error("Aborted.")
            raise Exit(code=1) from None

    if not completed:
        raise Exit(code=1)
