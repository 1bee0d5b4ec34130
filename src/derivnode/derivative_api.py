"""Front end for derivatives of expression text at a point.

Examples:
    >>> from derivnode.derivative_api import derivative_at
    >>> float(derivative_at("s^3", "s", 2).value)
    12.0
    >>> derivative_at("1/s", "s", 0).is_defined
    False
"""

from __future__ import annotations

from derivnode.expressions.context import AngleUnit, Context
from derivnode.expressions.core import Expression, Number, Symbol
from derivnode.expressions.derivative import Derivative
from derivnode.expressions.parser import parse
from derivnode.ridders.config import RiddersConfig
from derivnode.ridders.differentiator import DifferentiationResult, UndefinedResult
from derivnode.utils.precision import Precision, PrecisionConfig

__all__ = [
    "build_derivative",
    "derivative_at",
    "approximate_derivative",
]


def _as_expression(value: Expression | str | float) -> Expression:
    if isinstance(value, Expression):
        return value
    if isinstance(value, str):
        return parse(value)
    return Number(value)


def build_derivative(
    function: Expression | str,
    symbol: Symbol | str,
    point: Expression | str | float,
) -> Derivative:
    """Builds a :class:`Derivative` node from expressions, text or numbers.

    Args:
        function: The expression to differentiate, or its text.
        symbol: The bound symbol or its name.
        point: The point, as an expression, text or number.

    Returns:
        The node ``diff(function, symbol, point)``.
    """
    if isinstance(symbol, str):
        symbol = Symbol(symbol)
    return Derivative(_as_expression(function), symbol, _as_expression(point))


def derivative_at(
    function: Expression | str,
    symbol: Symbol | str,
    point: Expression | str | float,
    *,
    context: Context | None = None,
    angle_unit: AngleUnit = AngleUnit.RADIAN,
    precision: Precision | str | PrecisionConfig = Precision.FULL,
    config: RiddersConfig | None = None,
) -> DifferentiationResult | UndefinedResult:
    """Estimates ``d function / d symbol`` at ``point`` with an error bound.

    Args:
        function: The expression to differentiate, or its text.
        symbol: The bound symbol or its name.
        point: The point, as an expression, text or number.
        context: Values of other free symbols.
        angle_unit: Angle convention of trigonometric functions.
        precision: Working precision.
        config: Ridders configuration.

    Returns:
        The estimate, or an :class:`UndefinedResult`.
    """
    node = build_derivative(function, symbol, point)
    return node.differentiate(context, angle_unit, precision, config)


def approximate_derivative(
    text: str,
    *,
    context: Context | None = None,
    angle_unit: AngleUnit = AngleUnit.RADIAN,
    precision: Precision | str | PrecisionConfig = Precision.FULL,
) -> float:
    """Parses and approximates expression text that may contain ``diff`` calls.

    Args:
        text: Expression text such as ``"diff(exp(s),s,0)+1"``.
        context: Values of free symbols.
        angle_unit: Angle convention.
        precision: Working precision.

    Returns:
        The value as a float; NaN when undefined.
    """
    return float(parse(text).approximate(context, angle_unit, precision))
