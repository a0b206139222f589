"""Template interpolation for display strings.

Supports ``{expr}`` placeholders where ``expr`` is either:
  - ``{name}`` - the canonical text of the variable ``name``
  - ``{?CONDITION:BODY}`` - BODY when CONDITION holds, nothing otherwise

BODY may itself contain placeholders. A backslash escapes the next
character anywhere in the template. Deliberately minimal: no loops, no
assignment, no else branch.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from .chars import is_control, strip_blanks
from .conditions import evaluate_condition
from .variables import EvaluationContext, VariableSource, bind_variables


class InterpolationResult(NamedTuple):
    """Rendered text and the most recent evaluation error, if any."""

    text: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def interpolate(template: str, variables: VariableSource = None) -> InterpolationResult:
    """Expand all placeholders in template.

    Evaluation never raises for template problems. A placeholder that cannot
    be evaluated renders as an empty string (or counts as 0/false inside a
    condition) and its message becomes ``error``. When several placeholders
    fail, the last failure wins.

    Args:
        template: Text with ``{...}`` placeholders
        variables: Variables to resolve, as an iterable or a name mapping

    Returns:
        InterpolationResult with the rendered text and optional error

    Example:
        >>> interpolate("{?n>3:big}", [Variable("n", VarKind.INT32, 5)]).text
        'big'
    """
    ctx = EvaluationContext(bind_variables(variables))
    cleaned = "".join(c for c in template if not is_control(c))
    text = expand(cleaned, ctx)
    return InterpolationResult(text, ctx.error)


def expand(text: str, ctx: EvaluationContext) -> str:
    """Copy text, replacing every top-level placeholder by its value.

    Escapes inside a placeholder are kept so the expression sees them.
    An unterminated placeholder is dropped.
    """
    out: list[str] = []
    expr: list[str] = []
    depth = 0
    escaped = False

    for c in text:
        if escaped:
            escaped = False
            if depth:
                expr.append("\\")
                expr.append(c)
            else:
                out.append(c)
            continue
        if c == "\\":
            escaped = True
            continue

        if depth == 0:
            if c == "{":
                expr.clear()
                depth = 1
            else:
                out.append(c)
        elif c == "}":
            depth -= 1
            if depth == 0:
                out.append(evaluate("".join(expr), ctx))
            else:
                expr.append(c)
        else:
            if c == "{":
                depth += 1
            expr.append(c)

    return "".join(out)


def evaluate(expr: str, ctx: EvaluationContext) -> str:
    """Evaluate the text between a placeholder's braces."""
    stripped = expr.lstrip(" \t")
    if stripped.startswith("?"):
        return _evaluate_conditional(stripped[1:], ctx)

    if not expr:
        return ""
    raw = _unescape(expr)
    name = strip_blanks(raw) or raw
    var = ctx.lookup(name)
    if var is None:
        ctx.fail(f"reference to undefined variable '{name}'")
        return ""
    return var.to_text()


def _evaluate_conditional(text: str, ctx: EvaluationContext) -> str:
    condition: list[str] = []
    depth = 0
    escaped = False

    for i, c in enumerate(text):
        if escaped:
            escaped = False
            condition.append(c)
        elif c == "\\":
            escaped = True
        elif c == ":" and depth == 0:
            if not evaluate_condition("".join(condition), ctx):
                return ""
            return expand(text[i + 1 :], ctx)
        else:
            if c == "{":
                depth += 1
            elif c == "}" and depth:
                depth -= 1
            condition.append(c)

    # no body separator, nothing to emit
    return ""


def _unescape(text: str) -> str:
    out: list[str] = []
    escaped = False
    for c in text:
        if escaped or c != "\\":
            out.append(c)
            escaped = False
        else:
            escaped = True
    return "".join(out)


def needs_interpolation(template: str) -> bool:
    """True when template has at least one unescaped ``{``."""
    escaped = False
    for c in template:
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c == "{":
            return True
    return False


__all__ = [
    "InterpolationResult",
    "interpolate",
    "expand",
    "evaluate",
    "needs_interpolation",
]
