"""Parse command - list the entries of a settings file"""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from rich.markup import escape
from rich.table import Table

from termcfg.lib.errors import ConfigNotFoundError, Diagnostic
from termcfg.lib.lexer import ConfigEntry, iter_entries

from .utils import console, err_console


def parse_command(path: Path, as_yaml: bool = False) -> None:
    """Print every entry of a settings file; exit 1 on syntax errors."""
    if not path.is_file():
        raise ConfigNotFoundError(path)

    problems: list[Diagnostic] = []

    def on_error(line: int, message: str) -> bool:
        problems.append(Diagnostic(line, message))
        return False

    entries = list(iter_entries(path, on_error=on_error))

    if as_yaml:
        data = [entry._asdict() for entry in entries]
        typer.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)
    else:
        console.print(_entries_table(entries))

    for problem in problems:
        err_console.print(f"[red]{path}:{problem.line}:[/red] {escape(problem.message)}")

    if problems:
        raise typer.Exit(1)


def _entries_table(entries: list[ConfigEntry]) -> Table:
    table = Table()
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for entry in entries:
        value = "[dim](flag)[/dim]" if entry.value is None else escape(repr(entry.value))
        table.add_row(str(entry.line), entry.key, value)

    return table
