"""termcfg - terminal configuration language."""

from ._version import __version__
from .lib import (
    ConfigEntry,
    InterpolationResult,
    SettingsLexer,
    Variable,
    VarKind,
    expand_list_value,
    interpolate,
    iter_entries,
    parse,
)

__all__ = [
    "__version__",
    "ConfigEntry",
    "InterpolationResult",
    "SettingsLexer",
    "Variable",
    "VarKind",
    "expand_list_value",
    "interpolate",
    "iter_entries",
    "parse",
]
