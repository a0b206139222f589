"""Character classes shared by the lexer, list expander and templates."""

BLANKS = " \t"


def is_blank(c: str) -> bool:
    return c == " " or c == "\t"


def is_control(c: str) -> bool:
    code = ord(c)
    return code < 0x20 or code == 0x7F


def strip_blanks(text: str) -> str:
    return text.strip(BLANKS)
