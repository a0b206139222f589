"""Typed variables for template evaluation.

A template is always rendered against a fresh set of variables supplied by
the caller. Each variable carries a kind that decides how it is printed and
how it behaves inside a condition.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

log = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1

TRUE_TEXT = "true"
FALSE_TEXT = "false"


class VarKind(str, Enum):
    """Storage kind of a template variable."""

    BOOL = "bool"
    INT32 = "i32"
    UINT32 = "u32"
    FLOAT = "f32"
    DOUBLE = "f64"
    STRING = "str"

    @classmethod
    def from_name(cls, name: str) -> "VarKind":
        """Resolve a kind from its short name or a common alias."""
        key = name.strip().lower()
        if key in _KIND_ALIASES:
            return _KIND_ALIASES[key]
        return cls(key)

    @property
    def is_numeric(self) -> bool:
        return self is not VarKind.STRING


_KIND_ALIASES = {
    "b": VarKind.BOOL,
    "boolean": VarKind.BOOL,
    "int": VarKind.INT32,
    "int32": VarKind.INT32,
    "uint": VarKind.UINT32,
    "uint32": VarKind.UINT32,
    "float": VarKind.FLOAT,
    "double": VarKind.DOUBLE,
    "string": VarKind.STRING,
    "s": VarKind.STRING,
}


def _coerce(kind: VarKind, value: Any) -> Any:
    if kind is VarKind.BOOL:
        return bool(value)
    if kind is VarKind.INT32:
        value = int(value)
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f"{value} does not fit in a 32-bit signed integer")
        return value
    if kind is VarKind.UINT32:
        value = int(value)
        if not 0 <= value <= UINT32_MAX:
            raise ValueError(f"{value} does not fit in a 32-bit unsigned integer")
        return value
    if kind in (VarKind.FLOAT, VarKind.DOUBLE):
        return float(value)
    return str(value)


@dataclass(frozen=True)
class Variable:
    """A named, typed value bound for one template evaluation."""

    name: str
    kind: VarKind
    value: Any

    def __post_init__(self) -> None:
        kind = VarKind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", _coerce(kind, self.value))

    @classmethod
    def infer(cls, name: str, value: Any) -> "Variable":
        """Build a variable, picking the kind from the Python type of value."""
        if isinstance(value, bool):
            return cls(name, VarKind.BOOL, value)
        if isinstance(value, int):
            if INT32_MIN <= value <= INT32_MAX:
                return cls(name, VarKind.INT32, value)
            return cls(name, VarKind.UINT32, value)
        if isinstance(value, float):
            return cls(name, VarKind.DOUBLE, value)
        return cls(name, VarKind.STRING, value)

    @classmethod
    def parse(cls, spec: str) -> "Variable":
        """Parse a ``name:kind=value`` binding.

        The kind may be omitted (``name=value``), in which case the value is
        bound as a string.
        """
        target, sep, raw = spec.partition("=")
        if not sep:
            raise ValueError(f"expected name[:kind]=value, got {spec!r}")
        name, _, kind_name = target.partition(":")
        name = name.strip()
        if not name:
            raise ValueError(f"missing variable name in {spec!r}")
        kind = VarKind.from_name(kind_name) if kind_name.strip() else VarKind.STRING
        if kind is VarKind.BOOL:
            lowered = raw.strip().lower()
            if lowered in ("true", "1", "yes", "on"):
                return cls(name, kind, True)
            if lowered in ("false", "0", "no", "off", ""):
                return cls(name, kind, False)
            raise ValueError(f"invalid boolean {raw!r} for variable {name!r}")
        return cls(name, kind, raw)

    def to_text(self) -> str:
        """Canonical text form used when a placeholder names this variable."""
        if self.kind is VarKind.BOOL:
            return TRUE_TEXT if self.value else FALSE_TEXT
        return str(self.value)

    def numeric(self) -> float:
        if self.kind is VarKind.STRING:
            raise TypeError(f"variable {self.name!r} is a string")
        return float(self.value)


VariableSource = Union[Mapping[str, Variable], Iterable[Variable], None]


def bind_variables(variables: VariableSource) -> dict[str, Variable]:
    """Index variables by name. A name bound twice keeps the later binding."""
    if variables is None:
        return {}
    if isinstance(variables, Mapping):
        return {name: var for name, var in variables.items()}
    scope: dict[str, Variable] = {}
    for var in variables:
        scope[var.name] = var
    return scope


@dataclass
class EvaluationContext:
    """Variables plus the most recent error of one evaluation call."""

    variables: dict[str, Variable]
    error: Optional[str] = None

    def lookup(self, name: str) -> Optional[Variable]:
        return self.variables.get(name)

    def fail(self, message: str) -> None:
        log.debug("template evaluation error: %s", message)
        self.error = message
