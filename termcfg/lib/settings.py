"""Terminal settings read from the config file.

Config keys are the long command line option names:

    # ~/.config/wayst/config
    font = ["Noto Sans Mono", FontAwesome]
    font-size = 11
    colorscheme = solarized
    title-format = "{?has_title:{title} - }{app_title}"
    no-flash

Flag options may be given bare (``no-flash``) or as ``no-flash = true``.
Colors are hex digits; a leading ``#`` must be quoted since it would start
a comment.
Problems never stop loading; they are collected as ``Diagnostic`` records
and logged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from .colors import PRESET_NAMES, ColorRGB, ColorRGBA, Colorscheme, preset
from .errors import (
    ConfigNotFoundError,
    Diagnostic,
    InvalidValueError,
    SettingsError,
)
from .lexer import Source, iter_entries
from .lists import expand_list_value

log = logging.getLogger(__name__)

CONFIG_DIR_NAME = "wayst"
CONFIG_FILE_NAME = "config"

DEFAULT_TITLE_FORMAT = "{?has_title:{title} - }{app_title}"
DEFAULT_FONTS = ("Noto Sans Mono", "FontAwesome", "NotoColorEmoji")


class Option(NamedTuple):
    name: str
    takes_value: bool
    metavar: Optional[str]
    description: str


OPTIONS: tuple[Option, ...] = (
    Option("config-file", True, "path", "use configuration file"),
    Option("skip-config", False, None, "skip default configuration file"),
    Option("xorg-only", False, None, "always use X11"),
    Option("term", True, "string", "TERM value"),
    Option("title", True, "string", "window title and application class name"),
    Option("no-dynamic-title", False, None, "don't allow programs to change window title"),
    Option("title-format", True, "string", "window title format string"),
    Option("locale", True, "string", "override locale"),
    Option("rows", True, "number", "number of rows"),
    Option("columns", True, "number", "number of columns"),
    Option("bg-color", True, "#RRGGBBAA", "background color"),
    Option("fg-color", True, "#RRGGBB", "foreground color"),
    *(
        Option(f"color-{i}", True, "#RRGGBB", f"palette color {name}")
        for i, name in enumerate(
            (
                "black", "red", "green", "yellow", "blue", "magenta", "cyan", "grey",
                "bright black", "bright red", "bright green", "bright yellow",
                "bright blue", "bright magenta", "bright cyan", "bright grey",
            )
        )
    ),
    Option("fg-color-dim", True, "#RRGGBB", "dim/faint text color"),
    Option("h-bg-color", True, "#RRGGBBAA", "highlighted text background color"),
    Option("h-fg-color", True, "#RRGGBB", "highlighted text foreground color"),
    Option("h-change-fg", False, None, "highligting text changes foreground color"),
    Option("no-flash", False, None, "disable visual flash"),
    Option("colorscheme", True, "name", "colorscheme preset: " + ", ".join(PRESET_NAMES)),
    Option("font", True, "name", "font family, a list adds fallback fonts"),
    Option("font-size", True, "number", "font size"),
    Option("dpi", True, "number", "dpi"),
    Option("scroll-lines", True, "number", "lines scrolled per wheel click"),
)

OPTIONS_BY_NAME = {opt.name: opt for opt in OPTIONS}

# only meaningful on the command line
_COMMAND_LINE_ONLY = frozenset({"config-file", "skip-config"})


class Settings(BaseModel):
    """Resolved terminal settings."""

    config_path: Optional[Path] = Field(default=None, description="Config file that was read")
    x11_is_default: bool = Field(default=False, description="Prefer X11 over Wayland")
    term: str = Field(default="xterm-256color", description="TERM value")
    locale: Optional[str] = Field(default=None, description="Locale override")
    title: str = Field(default="Wayst", description="Application title")
    dynamic_title: bool = Field(
        default=True, description="Allow programs to set the window title"
    )
    title_format: str = Field(
        default=DEFAULT_TITLE_FORMAT, description="Window title template"
    )
    rows: int = Field(default=24, description="Initial rows")
    cols: int = Field(default=80, description="Initial columns")
    font: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FONTS),
        description="Font families, primary first",
    )
    font_size: int = Field(default=10, description="Font size")
    font_dpi: int = Field(default=96, description="Font dpi")
    bg: Optional[ColorRGBA] = Field(
        default=None, description="Background, None uses the colorscheme's"
    )
    bghl: ColorRGBA = ColorRGBA(50, 50, 50, 240)
    fg: Optional[ColorRGB] = Field(
        default=None, description="Foreground, None uses the colorscheme's"
    )
    fghl: ColorRGB = ColorRGB(255, 255, 255)
    fg_dim: ColorRGB = ColorRGB(150, 150, 150)
    highlight_change_fg: bool = False
    colorscheme_preset: int = Field(default=0, description="Index into PRESET_NAMES")
    colors: dict[int, ColorRGB] = Field(
        default_factory=dict, description="Explicit palette overrides"
    )
    no_flash: bool = False
    scroll_discrete_lines: int = Field(default=3, ge=0, le=255)

    @property
    def colorscheme(self) -> Colorscheme:
        """The preset with explicit ``color-N`` overrides applied."""
        base = preset(self.colorscheme_preset)
        colors = tuple(self.colors.get(i, c) for i, c in enumerate(base.colors))
        return base._replace(colors=colors)

    @property
    def background(self) -> ColorRGBA:
        if self.bg is not None:
            return self.bg
        return self.colorscheme.bg or ColorRGBA(0, 0, 0, 240)

    @property
    def foreground(self) -> ColorRGB:
        if self.fg is not None:
            return self.fg
        return self.colorscheme.fg or ColorRGB(255, 255, 255)


def _parse_int(key: str, value: str, minimum: int = 0, maximum: Optional[int] = None) -> int:
    try:
        number = int(value.strip(), 10)
    except ValueError as e:
        raise InvalidValueError(key, value, "expected a number") from e
    if number < minimum:
        raise InvalidValueError(key, value, f"must be at least {minimum}")
    if maximum is not None:
        number = min(number, maximum)
    return number


def _parse_rgb(key: str, value: str) -> ColorRGB:
    try:
        return ColorRGB.from_hex(value)
    except ValueError as e:
        raise InvalidValueError(key, value, str(e)) from e


def _parse_rgba(key: str, value: str) -> ColorRGBA:
    try:
        return ColorRGBA.from_hex(value)
    except ValueError as e:
        raise InvalidValueError(key, value, str(e)) from e


def _parse_colorscheme(key: str, value: str) -> int:
    name = value.strip().lower()
    if name in PRESET_NAMES:
        return PRESET_NAMES.index(name)
    return _parse_int(key, value, maximum=len(PRESET_NAMES) - 1)


@dataclass
class SettingsLoader:
    """Applies config entries to a ``Settings`` object."""

    settings: Settings = field(default_factory=Settings)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, line: int, message: str) -> None:
        log.warning("%s", Diagnostic(line, message))
        self.diagnostics.append(Diagnostic(line, message))

    def load(self, source: Source) -> Settings:
        """Lex source and apply every entry in order."""

        def on_syntax_error(line: int, message: str) -> bool:
            self.report(line, message)
            return False

        for entry in iter_entries(source, on_error=on_syntax_error):
            self.apply(entry.key, entry.value, entry.line)
        return self.settings

    def apply(self, key: str, value: Optional[str], line: int = 0) -> None:
        """Apply one setting. Bad keys and values become diagnostics."""
        option = OPTIONS_BY_NAME.get(key)
        if option is None:
            self.report(line, f"unknown setting '{key}'")
            return

        if not option.takes_value:
            flag = "true" if value is None else value.strip().lower()
            if flag == "false":
                return
            if flag != "true":
                self.report(line, f"'{key}' expects true or false, got '{value}'")
                return
            self._handle(key, None, line)
            return

        if value is None:
            self.report(line, f"'{key}' requires a value")
            return

        try:
            self._handle(key, value, line)
        except InvalidValueError as e:
            self.report(line, e.message)

    def _elements(self, value: str, line: int) -> list[str]:
        return expand_list_value(value, lambda message: self.report(line, message))

    def _scalar(self, key: str, value: str, line: int) -> str:
        elements = self._elements(value, line)
        if len(elements) > 1:
            raise InvalidValueError(key, value, "does not accept a list")
        return elements[0]

    def _handle(self, key: str, value: Optional[str], line: int) -> None:
        s = self.settings

        if key in _COMMAND_LINE_ONLY:
            log.debug("'%s' is ignored in the config file", key)
        elif key == "xorg-only":
            s.x11_is_default = True
        elif key == "no-dynamic-title":
            s.dynamic_title = False
        elif key == "h-change-fg":
            s.highlight_change_fg = True
        elif key == "no-flash":
            s.no_flash = True
        elif key == "font":
            fonts = [f.strip() for f in self._elements(value, line) if f.strip()]
            if not fonts:
                raise InvalidValueError(key, value, "expected at least one font family")
            s.font = fonts
        else:
            text = self._scalar(key, value, line)
            self._handle_scalar(key, text)

    def _handle_scalar(self, key: str, text: str) -> None:
        s = self.settings

        if key == "term":
            s.term = text
        elif key == "title":
            s.title = text
        elif key == "title-format":
            s.title_format = text
        elif key == "locale":
            s.locale = text
        elif key == "rows":
            s.rows = _parse_int(key, text, minimum=1)
        elif key == "columns":
            s.cols = _parse_int(key, text, minimum=1)
        elif key == "font-size":
            s.font_size = _parse_int(key, text, minimum=1)
        elif key == "dpi":
            s.font_dpi = _parse_int(key, text, minimum=1)
        elif key == "scroll-lines":
            s.scroll_discrete_lines = _parse_int(key, text, maximum=255)
        elif key == "colorscheme":
            s.colorscheme_preset = _parse_colorscheme(key, text)
        elif key == "bg-color":
            s.bg = _parse_rgba(key, text)
        elif key == "fg-color":
            s.fg = _parse_rgb(key, text)
        elif key == "fg-color-dim":
            s.fg_dim = _parse_rgb(key, text)
        elif key == "h-bg-color":
            s.bghl = _parse_rgba(key, text)
        elif key == "h-fg-color":
            s.fghl = _parse_rgb(key, text)
        elif key.startswith("color-"):
            index = int(key[len("color-") :])
            s.colors[index] = _parse_rgb(key, text)


def find_config_path(
    explicit: Optional[Path] = None, env: Optional[Mapping[str, str]] = None
) -> Optional[Path]:
    """Resolve the config file location.

    Order: explicit path, ``$XDG_CONFIG_HOME/wayst/config``,
    ``$HOME/.config/wayst/config``.
    """
    if explicit is not None:
        return Path(explicit)

    env = os.environ if env is None else env
    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    home = env.get("HOME")
    if home:
        return Path(home) / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    log.warning("Could not find config directory")
    return None


@dataclass
class LoadResult:
    settings: Settings
    diagnostics: list[Diagnostic]
    path: Optional[Path] = None


def load_settings(
    path: Optional[Path] = None,
    strict: bool = False,
    env: Optional[Mapping[str, str]] = None,
) -> LoadResult:
    """Load settings from the config file.

    A missing default config is fine and gives default settings. A missing
    explicit ``path`` raises ``ConfigNotFoundError``. With ``strict`` any
    diagnostic raises ``SettingsError``.
    """
    config_path = find_config_path(path, env)
    loader = SettingsLoader()

    if config_path is None:
        return LoadResult(loader.settings, loader.diagnostics)

    if not config_path.is_file():
        if path is not None:
            raise ConfigNotFoundError(config_path)
        log.info("No config file at %s, using defaults", config_path)
        return LoadResult(loader.settings, loader.diagnostics)

    log.info("Reading config from %s", config_path)
    loader.load(config_path)
    loader.settings.config_path = config_path

    if strict and loader.diagnostics:
        raise SettingsError(loader.diagnostics)

    return LoadResult(loader.settings, loader.diagnostics, config_path)
