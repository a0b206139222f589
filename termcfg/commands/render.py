"""Render command - interpolate a template against variables"""

from __future__ import annotations

import typer
from rich.markup import escape

from termcfg.lib.errors import TermcfgError
from termcfg.lib.template import interpolate
from termcfg.lib.variables import Variable

from .utils import err_console


def parse_bindings(specs: list[str]) -> list[Variable]:
    """Turn ``name:kind=value`` strings into variables."""
    variables = []
    for spec in specs:
        try:
            variables.append(Variable.parse(spec))
        except ValueError as e:
            raise TermcfgError(f"bad variable {spec!r}: {e}") from e
    return variables


def render_command(template: str, bindings: list[str]) -> None:
    """Print the rendered template; exit 1 if evaluation reported an error."""
    result = interpolate(template, parse_bindings(bindings))
    typer.echo(result.text)

    if result.error:
        err_console.print(f"[yellow]template error:[/yellow] {escape(result.error)}")
        raise typer.Exit(1)
