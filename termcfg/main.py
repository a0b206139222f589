"""termcfg CLI Main Entry Point

Inspect and exercise the terminal configuration language.

Usage:
    termcfg parse path/to/config         # List entries of a settings file
    termcfg parse path/to/config --yaml  # Same, as YAML
    termcfg expand "[a, b\\, c]"          # Split a value into list elements
    termcfg render "{?n>3:big}" -V n:i32=5
    termcfg settings -c path/to/config   # Resolved settings and window title
    termcfg --version                    # Show version
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ._version import __version__
from .commands import expand_command, parse_command, render_command, settings_command
from .commands.utils import setup_logging
from .lib.errors import TermcfgError, handle_error

typer_app = typer.Typer(no_args_is_help=True, add_completion=False)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"termcfg {__version__}")
        raise typer.Exit()


@typer_app.callback()
def cli(
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show informational log messages."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Terminal configuration language tools."""
    setup_logging(verbose)


@typer_app.command("parse")
def parse(
    path: Path = typer.Argument(..., help="Settings file to read."),
    as_yaml: bool = typer.Option(False, "--yaml", help="Print entries as YAML."),
) -> None:
    """List the key/value entries of a settings file."""
    try:
        parse_command(path, as_yaml=as_yaml)
    except TermcfgError as exc:
        handle_error(exc)


@typer_app.command("expand")
def expand(
    value: str = typer.Argument(..., help="Value to split, e.g. '[a, b]'."),
) -> None:
    """Split a settings value into its list elements."""
    expand_command(value)


@typer_app.command("render")
def render(
    template: str = typer.Argument(..., help="Template with {...} placeholders."),
    variables: Optional[List[str]] = typer.Option(
        None,
        "-V",
        "--var",
        help="Variable binding name[:kind]=value (kinds: bool, i32, u32, f32, f64, str).",
    ),
) -> None:
    """Render a template against the given variables."""
    try:
        render_command(template, list(variables) if variables else [])
    except TermcfgError as exc:
        handle_error(exc)


@typer_app.command("settings")
def settings(
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Config file (default: XDG config dir)."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on any problem in the config."
    ),
    title: Optional[str] = typer.Option(
        None, "--title", help="Program-set title used to render the window title."
    ),
) -> None:
    """Show the resolved terminal settings."""
    try:
        settings_command(config, strict=strict, program_title=title)
    except TermcfgError as exc:
        handle_error(exc)


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    The optional `argv` parameter is forwarded to Typer; None reads sys.argv.
    """
    typer_app(args=argv)


if __name__ == "__main__":
    app()
