"""Colors and built-in colorschemes."""

from __future__ import annotations

from typing import NamedTuple, Optional

HEX_DIGITS = "0123456789abcdefABCDEF"


class ColorRGB(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, text: str) -> "ColorRGB":
        """Parse ``RRGGBB`` with an optional leading ``#``."""
        digits = _hex_digits(text, (6,))
        return cls(*_channels(digits))

    def to_hex(self) -> str:
        return "#{:02X}{:02X}{:02X}".format(*self)

    def to_rgba(self, alpha: int = 255) -> "ColorRGBA":
        return ColorRGBA(self.r, self.g, self.b, alpha)


class ColorRGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_hex(cls, text: str) -> "ColorRGBA":
        """Parse ``RRGGBBAA`` or ``RRGGBB`` (opaque), ``#`` optional."""
        digits = _hex_digits(text, (8, 6))
        return cls(*_channels(digits))

    def to_hex(self) -> str:
        return "#{:02X}{:02X}{:02X}{:02X}".format(*self)

    def to_rgb(self) -> ColorRGB:
        return ColorRGB(self.r, self.g, self.b)


def _hex_digits(text: str, lengths: tuple[int, ...]) -> str:
    digits = text.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    if len(digits) not in lengths:
        expected = " or ".join(str(n) for n in lengths)
        raise ValueError(f"expected {expected} hex digits, got {text!r}")
    for c in digits:
        if c not in HEX_DIGITS:
            raise ValueError(f"'{c}' is not a hex digit")
    return digits


def _channels(digits: str) -> list[int]:
    return [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]


class Colorscheme(NamedTuple):
    """Sixteen palette colors plus the scheme's default background/foreground."""

    name: str
    colors: tuple[ColorRGB, ...]
    bg: Optional[ColorRGBA] = None
    fg: Optional[ColorRGB] = None


# palette colors 0-15, then background and foreground
_PRESET_HEX = {
    "wayst": (
        "000000", "AB1F00", "D2FF00", "FF7D00", "00518C", "B7006F", "00AEA0", "AAAAAA",
        "545454", "BB3939", "AFFF52", "FFA855", "107BC9", "FF368A", "40FFEF", "FFFFFF",
        "000000EE", "FFFFFF",
    ),
    "linux": (
        "000000", "AA0000", "00AA00", "AA5500", "0000AA", "AA00AA", "00AAAA", "AAAAAA",
        "555555", "FF5555", "55FF55", "FFFF55", "5555FF", "FF55FF", "55FFFF", "FFFFFF",
        "000000", "FFFFFF",
    ),
    "xterm": (
        "000000", "CD0000", "00CD00", "CDCD00", "0000EE", "CD00CD", "00CDCD", "E5E5E5",
        "7F7F7F", "FF0000", "00FF00", "FFFF00", "5C5CFF", "FF00FF", "00FFFF", "FFFFFF",
        "000000", "FFFFFF",
    ),
    "rxvt": (
        "000000", "CD0000", "00CD00", "CDCD00", "0000CD", "CD00CD", "00CDCD", "FAEBD7",
        "404040", "FF0000", "00FF00", "FFFF00", "0000FF", "FF00FF", "00FFFF", "FFFFFF",
        "000000", "FFFFFF",
    ),
    "yaru": (
        "2E3436", "CC0000", "4E9A06", "C4A000", "3465A4", "75507B", "06989A", "D3D7CF",
        "555753", "EF2929", "8AE234", "FCE94F", "729FCF", "AD7FA8", "34E2E2", "EEEEEC",
        "300A24", "FFFFFF",
    ),
    "tango": (
        "000000", "CC0000", "4D9A05", "C3A000", "3464A3", "754F7B", "05979A", "D3D6CF",
        "545652", "EF2828", "89E234", "FBE84F", "729ECF", "AC7EA8", "34E2E2", "EDEDEB",
        "2D2D2D", "EEEEEC",
    ),
    "orchis": (
        "000000", "CC0000", "4D9A05", "C3A000", "3464A3", "754F7B", "05979A", "D3D6CF",
        "545652", "EF2828", "89E234", "FBE84F", "729ECF", "AC7EA8", "34E2E2", "EDEDEB",
        "303030", "EFEFEF",
    ),
    "solarized": (
        "073642", "DC322F", "859900", "B58900", "268BD2", "D33682", "2AA198", "EEE8D5",
        "002B36", "CB4B16", "586E75", "657B83", "839496", "6C71C4", "93A1A1", "FDF6E3",
        "002B36", "839496",
    ),
}

PRESET_NAMES = tuple(_PRESET_HEX)


def preset(index_or_name: int | str) -> Colorscheme:
    """Built-in colorscheme by index or case-insensitive name.

    Out of range indices fall back to the first preset.
    """
    if isinstance(index_or_name, str):
        name = index_or_name.lower()
        if name not in _PRESET_HEX:
            raise KeyError(index_or_name)
    else:
        index = index_or_name if 0 <= index_or_name < len(PRESET_NAMES) else 0
        name = PRESET_NAMES[index]

    table = _PRESET_HEX[name]
    return Colorscheme(
        name=name,
        colors=tuple(ColorRGB.from_hex(h) for h in table[:16]),
        bg=ColorRGBA.from_hex(table[16]),
        fg=ColorRGB.from_hex(table[17]),
    )


def build_palette_256(colors: tuple[ColorRGB, ...]) -> list[ColorRGB]:
    """Expand 16 scheme colors into the 256 color palette.

    Entries 16-231 are the 6x6x6 color cube, 232 and up the grayscale ramp.
    One extra entry at index 256 continues the ramp.
    """
    palette: list[ColorRGB] = []
    for i in range(257):
        if i < 16:
            palette.append(colors[i])
        elif i < 232:
            cube = i - 16
            b = int((cube % 6) * 255 / 5.0)
            g = int(((cube // 6) % 6) * 255 / 5.0)
            r = int(((cube // 36) % 6) * 255 / 5.0)
            palette.append(ColorRGB(r, g, b))
        else:
            level = int(((i - 232) * 10 + 8) / 256.0 * 255.0)
            palette.append(ColorRGB(level, level, level))
    return palette
