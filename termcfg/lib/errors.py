"""Shared error handling for termcfg."""

import sys
from dataclasses import dataclass
from typing import NoReturn, Optional, Sequence

import typer


class TermcfgError(Exception):
    """Base exception for termcfg operations."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigNotFoundError(TermcfgError):
    """Raised when an explicitly requested config file does not exist."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}", exit_code=2)


class InvalidValueError(TermcfgError):
    """Raised when a setting has a value of the wrong shape."""

    def __init__(self, key: str, value: Optional[str], reason: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"invalid value {value!r} for '{key}': {reason}")


@dataclass(frozen=True)
class Diagnostic:
    """A problem found while reading settings. ``line`` is 0 when unknown."""

    line: int
    message: str

    def __str__(self) -> str:
        if self.line:
            return f"line {self.line}: {self.message}"
        return self.message


class SettingsError(TermcfgError):
    """Raised in strict mode when the config produced diagnostics."""

    def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
        self.diagnostics = list(diagnostics)
        details = "; ".join(str(d) for d in self.diagnostics)
        super().__init__(f"{len(self.diagnostics)} problem(s) in config: {details}")


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Handle and exit on termcfg errors."""
    if isinstance(error, TermcfgError):
        exit_with_error(error.message, error.exit_code)
    else:
        # Unexpected error
        typer.echo(f"Unexpected error: {error}", err=True)
        sys.exit(1)
