"""Settings file lexer.

Reads ``key = value`` lines from a configuration source, one character at a
time. Handles ``#`` comments, ``"quoted"`` spans, backslash escapes and
``[bracketed, lists]`` that may span several lines.

Two entry points:
  - ``iter_entries(source)`` yields ``ConfigEntry`` records lazily
  - ``parse(source, on_entry, on_error)`` pushes them to a callback

Syntax problems go to ``on_error(line, message)``. Returning True from it
stops the lexer; entries produced before that point stay valid. Without an
error callback problems are logged as warnings and lexing always completes.
"""

from __future__ import annotations

import codecs
import logging
import os
from typing import IO, Callable, Iterator, NamedTuple, Optional, Union

from .chars import is_blank, is_control

log = logging.getLogger(__name__)

CHUNK_SIZE = 8 * 1024

EntryCallback = Callable[[str, Optional[str], int], None]
ErrorCallback = Callable[[int, str], bool]
Source = Union[bytes, bytearray, str, "os.PathLike[str]", IO[bytes], IO[str]]


class ConfigEntry(NamedTuple):
    """One ``key = value`` record. ``value`` is None for flag-style keys."""

    key: str
    value: Optional[str]
    line: int


class SettingsLexer:
    """Character-level state machine over a settings source.

    An instance can lex any number of sources one after another; state is
    reset at the start of each ``entries()`` call.
    """

    def __init__(self, on_error: Optional[ErrorCallback] = None) -> None:
        self.on_error = on_error
        self.aborted = False
        self._reset()

    def _reset(self) -> None:
        self.line = 1
        self.key_line = 0
        self.key: list[str] = []
        self.value: list[str] = []
        self.whitespace: list[str] = []
        self.in_comment = False
        self.in_value = False
        self.in_string = False
        self.in_list = False
        self.escaped = False
        self.aborted = False
        self._ready: list[ConfigEntry] = []

    def entries(self, source: Source) -> Iterator[ConfigEntry]:
        """Lex source, yielding entries in file order."""
        self._reset()
        chunks = read_chunks(source)
        try:
            for chunk in chunks:
                for c in chunk:
                    self.feed(c)
                    if self._ready:
                        yield from self._drain()
                    if self.aborted:
                        return
            self.finish()
            yield from self._drain()
        finally:
            chunks.close()

    def _drain(self) -> Iterator[ConfigEntry]:
        ready, self._ready = self._ready, []
        yield from ready

    def _emit(self, key: str, value: Optional[str], line: int) -> None:
        self._ready.append(ConfigEntry(key, value, line))

    def _error(self, message: str) -> bool:
        """Report a syntax error. Returns True when lexing must stop."""
        if self.on_error is None:
            log.warning("line %d: %s", self.line, message)
            return False
        if self.on_error(self.line, message):
            log.debug("lexing aborted at line %d", self.line)
            self.aborted = True
        return self.aborted

    def feed(self, c: str) -> None:
        """Consume one character."""
        self._consume(c)
        if c == "\n":
            self.line += 1

    def _consume(self, c: str) -> None:
        if self.in_comment:
            if c != "\n":
                return
            self.in_comment = False
        elif c == "#" and not self.escaped and not self.in_string:
            self.in_comment = True
            return

        if self.in_value:
            self._consume_value(c)
        elif c == "=":
            self.key_line = self.line
            self.in_value = True
        elif c == "\n":
            if self.key:
                self._emit("".join(self.key), None, self.line)
                self.key.clear()
        elif not is_control(c) and not is_blank(c):
            self.key.append(c)

    def _push(self, c: str) -> None:
        if self.whitespace:
            self.value.extend(self.whitespace)
            self.whitespace.clear()
        self.value.append(c)

    def _consume_value(self, c: str) -> None:
        if c == "\\" and not self.escaped:
            self.escaped = True
            if self.in_list:
                self._push(c)
            return

        if c == '"' and not self.escaped:
            if not self.in_string and self.value and not self.in_list:
                pending = "".join(self.value)
                if self._error(f"unexpected token '{pending}' before '\"'"):
                    return
                self.value.clear()
            if not self.in_string:
                self.whitespace.clear()
            self.in_string = not self.in_string
            if self.in_list:
                self._push(c)
            return

        if c == "[" and not self.escaped and not self.in_string:
            if self.in_list and self._error(
                "list element cannot be a list, did you mean '\\[' ?"
            ):
                return
            self.in_list = True
        elif c == "]" and not self.escaped and not self.in_string:
            if not self.in_list and self._error(
                "'[' expected before ']' did you mean '\\]' ?"
            ):
                return
            self.in_list = False

        if c == "\n" and not self.in_list:
            self._end_value()
            return

        if self.escaped and not self.in_list:
            if c == "n":
                self._push("\n")
            elif c == '"' and self.in_string:
                self._push('"')
            elif self._error(f"escape character '{c}' invalid in this context"):
                return
        elif not is_control(c):
            if self.in_string or not is_blank(c):
                if self.in_string and c in "[]":
                    # keep quoted brackets literal for list expansion
                    self._push("\\")
                self._push(c)
            elif self.value:
                self.whitespace.append(c)
        self.escaped = False

    def _end_value(self) -> None:
        self._emit("".join(self.key), "".join(self.value), self.key_line)
        unterminated = self.in_string
        self.key.clear()
        self.value.clear()
        self.whitespace.clear()
        self.in_value = False
        self.in_string = False
        self.escaped = False
        if unterminated:
            self._error("'\"' expected before end of line")

    def finish(self) -> None:
        """Flush the pending entry and report unterminated constructs."""
        if self.in_value:
            # "" rather than None, same as a value ended by a newline
            self._emit("".join(self.key), "".join(self.value), self.key_line)
        elif self.key:
            self._emit("".join(self.key), None, self.line)

        if self.in_string and self._error("'\"' expected before end of file"):
            return
        if self.in_list:
            self._error("']' expected before end of file")


def read_chunks(source: Source) -> Iterator[str]:
    """Yield decoded text chunks from any supported source.

    ``str`` is treated as configuration text, not as a path; pass a
    ``pathlib.Path`` to read a file.
    """
    if isinstance(source, (bytes, bytearray)):
        yield bytes(source).decode("utf-8", errors="replace")
    elif isinstance(source, str):
        yield source
    elif isinstance(source, os.PathLike):
        with open(source, "rb") as f:
            yield from _read_stream(f)
    else:
        yield from _read_stream(source)


def _read_stream(stream: IO) -> Iterator[str]:
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        if isinstance(chunk, (bytes, bytearray)):
            chunk = decoder.decode(chunk)
        yield chunk
    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail


def iter_entries(
    source: Source, on_error: Optional[ErrorCallback] = None
) -> Iterator[ConfigEntry]:
    """Lazily lex source into ``ConfigEntry`` records."""
    return SettingsLexer(on_error).entries(source)


def parse(
    source: Source,
    on_entry: EntryCallback,
    on_error: Optional[ErrorCallback] = None,
) -> bool:
    """Lex source, calling ``on_entry(key, value, line)`` for each entry.

    Returns False if ``on_error`` requested an abort, True otherwise.
    """
    lexer = SettingsLexer(on_error)
    for entry in lexer.entries(source):
        on_entry(entry.key, entry.value, entry.line)
    return not lexer.aborted
