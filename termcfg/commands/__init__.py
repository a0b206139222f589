"""CLI commands"""

from .parse import parse_command
from .expand import expand_command
from .render import render_command
from .settings import settings_command

__all__ = ["parse_command", "expand_command", "render_command", "settings_command"]
