"""Expand command - split a value into its list elements"""

from __future__ import annotations

import typer
from rich.markup import escape

from termcfg.lib.lists import expand_list_value

from .utils import err_console


def expand_command(value: str) -> None:
    """Print each element of value on its own line."""
    problems: list[str] = []
    for element in expand_list_value(value, problems.append):
        typer.echo(element)

    for message in problems:
        err_console.print(f"[yellow]warning:[/yellow] {escape(message)}")
