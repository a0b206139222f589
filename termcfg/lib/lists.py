"""List value expansion.

A settings value is a list only when it contains an unescaped ``[``:

    font = ["Noto Sans Mono", "Font Awesome", NotoColorEmoji]

Anything else is a scalar and comes back as a single element. Literal
``[``, ``]``, ``,`` and ``\\`` must be escaped with a backslash inside a
list. Blanks outside quotes are dropped from list elements.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .chars import is_blank

log = logging.getLogger(__name__)

ListErrorCallback = Callable[[str], None]


def _report(on_error: Optional[ListErrorCallback], message: str) -> None:
    if on_error is None:
        log.warning(message)
    else:
        on_error(message)


def is_list_value(value: Optional[str]) -> bool:
    """True when value has an unescaped ``[``."""
    if value is None:
        return False
    escaped = False
    for c in value:
        if c == "[" and not escaped:
            return True
        escaped = c == "\\" and not escaped
    return False


def _unescape_scalar(value: str) -> str:
    out: list[str] = []
    escaped = False
    for c in value:
        escaped = c == "\\" and not escaped
        if not escaped:
            out.append(c)
    return "".join(out)


def expand_list_value(
    value: Optional[str], on_error: Optional[ListErrorCallback] = None
) -> list[str]:
    """Split a settings value into its elements.

    Never returns an empty list. ``None`` gives ``[""]`` and a scalar gives
    a single element with its escapes resolved. Structural problems are
    reported through ``on_error(message)`` and a best-effort result is still
    returned.

    Args:
        value: Raw value as produced by the lexer
        on_error: Optional callback for diagnostics

    Returns:
        Elements in source order, duplicates preserved

    Example:
        >>> expand_list_value("[a\\\\,b, c]")
        ['a,b', 'c']
    """
    if value is None:
        return [""]
    if not is_list_value(value):
        return [_unescape_scalar(value)]

    elements: list[list[str]] = [[]]
    whitespace: list[str] = []
    in_string = False
    in_list = False
    escaped = False
    has_brackets = False

    for c in value:
        if not escaped and not in_string and c == "[":
            has_brackets = True
            in_list = True
            continue
        if not escaped and not in_string and in_list and c == "]":
            in_list = False
            continue
        if not escaped and c == '"':
            if not in_string:
                whitespace.clear()
            in_string = not in_string
            continue
        if not escaped and c == "\\":
            escaped = True
            continue
        if not escaped and not in_string and c == ",":
            elements.append([])
            whitespace.clear()
            continue

        escaped = False
        if not in_string and is_blank(c):
            continue
        current = elements[-1]
        if is_blank(c) and current:
            # may be interior whitespace, only kept if more text follows
            whitespace.append(c)
        else:
            current.extend(whitespace)
            whitespace.clear()
            current.append(c)

    result = ["".join(element) for element in elements]

    if in_list:
        _report(on_error, f"list not terminated in '{value}'")
    elif len(result) == 1 and has_brackets:
        _report(
            on_error,
            f"'{value}' is a single element list, did you mean '\\[{result[0]}\\]'?",
        )
    if in_string:
        _report(on_error, f"string not terminated in list '{value}'")

    return result
