"""Configuration language: settings lexer, list values and templates."""

from .lexer import ConfigEntry, SettingsLexer, iter_entries, parse
from .lists import expand_list_value
from .template import InterpolationResult, interpolate
from .variables import Variable, VarKind

__all__ = [
    "ConfigEntry",
    "SettingsLexer",
    "iter_entries",
    "parse",
    "expand_list_value",
    "InterpolationResult",
    "interpolate",
    "Variable",
    "VarKind",
]
