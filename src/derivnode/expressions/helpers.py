"""Generic helpers shared by expression nodes.

These helpers know nothing about a particular operator: they serialize a
node as a prefix call or an infix chain, write numbers according to the
display preferences, and substitute the unknown placeholder in nodes that
bind a variable.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from derivnode.expressions.context import PrintFloatMode

if TYPE_CHECKING:
    from derivnode.expressions.core import Expression, Symbol

__all__ = [
    "UNKNOWN_SYMBOL_NAME",
    "UNDEFINED_TOKEN",
    "format_number",
    "prefix_serialize",
    "infix_serialize",
    "replace_unknown_in_parametered_expression",
]

# Name of the placeholder a host puts where "the variable" of a one-variable
# function goes, before the actual variable name is known.
UNKNOWN_SYMBOL_NAME = "?x"
UNDEFINED_TOKEN = "undef"


def _exponent_notation(formatted: str) -> str:
    mantissa, exponent = formatted.split("e")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}E{int(exponent)}"


def format_number(value: float, float_mode: PrintFloatMode, significant_digits: int) -> str:
    """Writes a number with the given display preferences.

    Args:
        value: The number.
        float_mode: Decimal or scientific display.
        significant_digits: Maximum number of significant digits.

    Returns:
        The text. NaN is written as ``undef``; exponents use ``E`` so the
        parser reads the text back.

    Examples:
        >>> format_number(12.0, PrintFloatMode.DECIMAL, 10)
        '12'
        >>> format_number(0.00012, PrintFloatMode.SCIENTIFIC, 10)
        '1.2E-4'
    """
    value = float(value)
    if math.isnan(value):
        return UNDEFINED_TOKEN
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if significant_digits < 1:
        raise ValueError("significant_digits must be at least 1.")

    if float_mode is PrintFloatMode.SCIENTIFIC:
        return _exponent_notation(f"{value:.{significant_digits - 1}e}")

    if value.is_integer() and abs(value) < 10.0**significant_digits:
        return str(int(value))
    formatted = f"{value:.{significant_digits}g}"
    if "e" in formatted:
        return _exponent_notation(formatted)
    return formatted


def prefix_serialize(
    expression: Expression,
    name: str,
    float_mode: PrintFloatMode,
    significant_digits: int,
) -> str:
    """Serializes ``expression`` as ``name(child,child,...)``."""
    arguments = ",".join(
        operand.serialize(float_mode, significant_digits) for operand in expression.operands
    )
    return f"{name}({arguments})"


def infix_serialize(
    expression: Expression,
    token: str,
    float_mode: PrintFloatMode,
    significant_digits: int,
) -> str:
    """Serializes the operands of ``expression`` joined by ``token``.

    Operands binding more loosely than the operator are parenthesized.
    """
    parts = []
    for index, operand in enumerate(expression.operands):
        text = operand.serialize(float_mode, significant_digits)
        if expression.needs_parentheses(operand, index):
            text = f"({text})"
        parts.append(text)
    return token.join(parts)


def replace_unknown_in_parametered_expression(expression: Expression, symbol: Symbol) -> Expression:
    """Substitutes the unknown placeholder in a node that binds a variable.

    The node's operand 1 is its bound variable and is left untouched. The
    unknown is replaced in every other operand, except in operand 0 when
    the bound variable is the unknown itself: there the placeholder refers
    to the bound variable, not to the outer unknown.

    Args:
        expression: A node of the form ``op(body, variable, ...)``.
        symbol: The symbol replacing the placeholder.

    Returns:
        A node of the same type and shape.
    """
    body, parameter, *others = expression.operands
    if parameter.name != UNKNOWN_SYMBOL_NAME:
        body = body.replace_unknown(symbol)
    others = [operand.replace_unknown(symbol) for operand in others]
    return expression.with_operands((body, parameter, *others))
