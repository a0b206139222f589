"""Boolean conditions used by ``{?CONDITION:BODY}`` placeholders.

Conditions are evaluated straight from their text. The text is split on
``&&`` first and every segment on ``||`` second, so ``a && b || c`` reads as
``a && (b || c)``. This is the reverse of the usual precedence and existing
title templates rely on it.

Each remaining piece is a single comparison, tried in the fixed order
``<=``, ``>=``, ``<``, ``>``, ``!=``, ``==``. A piece without an operator is
a lone operand that is true when non-zero.
"""

from __future__ import annotations

import operator
import re

from .chars import strip_blanks
from .variables import EvaluationContext, VarKind

AND_TOKEN = "&&"
OR_TOKEN = "||"

COMPARISON_OPERATORS = ("<=", ">=", "<", ">", "!=", "==")

_NUMERIC_COMPARISONS = {
    "<=": operator.le,
    ">=": operator.ge,
    "<": operator.lt,
    ">": operator.gt,
}

# Leading numeric prefix, the same text a C "%lg" conversion would accept,
# hex floats included.
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:"
    r"(?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)"
    r"|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?"
    r"|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def evaluate_condition(text: str, ctx: EvaluationContext) -> bool:
    """Evaluate a full condition: AND over ``&&`` segments."""
    for segment in text.split(AND_TOKEN):
        if not _evaluate_disjunction(segment, ctx):
            return False
    return True


def _evaluate_disjunction(segment: str, ctx: EvaluationContext) -> bool:
    for part in segment.split(OR_TOKEN):
        if evaluate_comparison(part, ctx):
            return True
    return False


def evaluate_comparison(text: str, ctx: EvaluationContext) -> bool:
    """Evaluate one comparison, or a lone operand when no operator matches."""
    for op in COMPARISON_OPERATORS:
        lhs, found, rhs = text.partition(op)
        if found:
            break
    else:
        return evaluate_operand(text, ctx) != 0.0

    if op in _NUMERIC_COMPARISONS:
        left = evaluate_operand(lhs, ctx)
        right = evaluate_operand(rhs, ctx)
        return _NUMERIC_COMPARISONS[op](left, right)

    equal = _operands_equal(lhs, rhs, ctx)
    return equal if op == "==" else not equal


def _operands_equal(lhs: str, rhs: str, ctx: EvaluationContext) -> bool:
    left_var = ctx.lookup(strip_blanks(lhs))
    right_var = ctx.lookup(strip_blanks(rhs))
    if (
        left_var is not None
        and right_var is not None
        and left_var.kind is VarKind.STRING
        and right_var.kind is VarKind.STRING
    ):
        return left_var.value == right_var.value
    return evaluate_operand(lhs, ctx) == evaluate_operand(rhs, ctx)


def evaluate_operand(text: str, ctx: EvaluationContext) -> float:
    """Numeric value of a single operand.

    ``true``/``false`` literals, variables and numeric literals are accepted.
    Anything else is 0 without reporting an error. A leading ``!`` maps zero
    to 1 and everything else to 0.
    """
    text = strip_blanks(text)
    negate = text.startswith("!")
    if negate:
        text = strip_blanks(text[1:])

    lowered = text.lower()
    if lowered == "true":
        value = 1.0
    elif lowered == "false":
        value = 0.0
    else:
        var = ctx.lookup(text)
        if var is None:
            value = parse_float_prefix(text)
        elif var.kind is VarKind.STRING:
            ctx.fail(f"cannot use string variable '{text}' in numeric context")
            return 0.0
        else:
            value = var.numeric()

    if negate:
        return 1.0 if value == 0.0 else 0.0
    return value


def parse_float_prefix(text: str) -> float:
    """Parse the longest leading float literal of text, 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    if match.group("hex"):
        return float.fromhex(match.group(0))
    return float(match.group(0))
