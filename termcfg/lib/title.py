"""Window title rendering from ``title-format``."""

from __future__ import annotations

import logging
from typing import Optional

from .settings import Settings
from .template import interpolate, needs_interpolation
from .variables import Variable, VarKind

log = logging.getLogger(__name__)


def title_variables(settings: Settings, program_title: Optional[str] = None) -> list[Variable]:
    """Variables available to ``title-format``.

    ``title`` is the title set by the running program. It is ignored when
    dynamic titles are disabled.
    """
    if not settings.dynamic_title:
        program_title = None
    return [
        Variable("app_title", VarKind.STRING, settings.title),
        Variable("title", VarKind.STRING, program_title or ""),
        Variable("has_title", VarKind.BOOL, bool(program_title)),
        Variable("rows", VarKind.UINT32, settings.rows),
        Variable("cols", VarKind.UINT32, settings.cols),
        Variable("font_size", VarKind.UINT32, settings.font_size),
        Variable("dpi", VarKind.UINT32, settings.font_dpi),
    ]


def render_window_title(settings: Settings, program_title: Optional[str] = None) -> str:
    template = settings.title_format
    if not needs_interpolation(template):
        return interpolate(template).text

    result = interpolate(template, title_variables(settings, program_title))
    if result.error:
        log.warning("title-format: %s", result.error)
    return result.text
