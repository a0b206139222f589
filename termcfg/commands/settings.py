"""Settings command - show the resolved terminal settings"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.table import Table

from termcfg.lib.settings import Settings, load_settings
from termcfg.lib.title import render_window_title

from .utils import console


def settings_command(
    config: Optional[Path] = None,
    strict: bool = False,
    program_title: Optional[str] = None,
) -> None:
    """Load settings and print a summary with the rendered window title."""
    result = load_settings(config, strict=strict)
    settings = result.settings

    source = escape(str(result.path)) if result.path else "[dim](defaults)[/dim]"
    console.print(f"Config: {source}")
    console.print(_settings_table(settings))
    title = render_window_title(settings, program_title)
    console.print(f"Window title: {escape(repr(title))}")

    if result.diagnostics:
        console.print(f"[yellow]{len(result.diagnostics)} problem(s) in config[/yellow]")


def _settings_table(settings: Settings) -> Table:
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    scheme = settings.colorscheme
    rows = [
        ("term", settings.term),
        ("title", settings.title),
        ("title-format", settings.title_format),
        ("dynamic title", str(settings.dynamic_title)),
        ("size", f"{settings.cols}x{settings.rows}"),
        ("font", ", ".join(settings.font)),
        ("font-size", f"{settings.font_size} @ {settings.font_dpi} dpi"),
        ("colorscheme", scheme.name),
        ("background", settings.background.to_hex()),
        ("foreground", settings.foreground.to_hex()),
        ("palette", " ".join(c.to_hex() for c in scheme.colors)),
        ("scroll-lines", str(settings.scroll_discrete_lines)),
    ]
    for name, value in rows:
        table.add_row(name, escape(value))

    return table
