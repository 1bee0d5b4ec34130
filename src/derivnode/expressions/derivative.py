"""Provides the Derivative node: the derivative of an expression at a point.

``diff(f, x, a)`` is the derivative of ``f`` with respect to the bound
symbol ``x``, evaluated at ``x = a``. No symbolic differentiation rule is
applied: reduction leaves the node in place and approximation estimates
the value numerically with :class:`NumericDifferentiator`.

Examples:
--------
>>> from derivnode.expressions.parser import parse
>>> node = parse("diff(x^3,x,2)")
>>> float(node.approximate())
12.0
>>> node.polynomial_degree("y")
0
>>> node.serialize()
'diff(x^3,x,2)'
"""

from __future__ import annotations

import numpy as np

from derivnode.expressions.context import (
    DEFAULT_SIGNIFICANT_DIGITS,
    AngleUnit,
    Context,
    PrintFloatMode,
)
from derivnode.expressions.core import (
    UNKNOWN_DEGREE,
    Expression,
    ImaginaryUnit,
    Symbol,
    Undefined,
    default_shallow_reduce,
)
from derivnode.expressions.helpers import prefix_serialize, replace_unknown_in_parametered_expression
from derivnode.expressions.layout import prefix_layout
from derivnode.expressions.matrix import Matrix
from derivnode.logger import derivnode_logger
from derivnode.ridders.config import RiddersConfig
from derivnode.ridders.differentiator import (
    DifferentiationResult,
    NumericDifferentiator,
    UndefinedReason,
    UndefinedResult,
)
from derivnode.utils.numerics import is_nan
from derivnode.utils.precision import Precision, PrecisionConfig, as_precision_config
from derivnode.utils.validate import validate_operand_count, validate_operand_kind

__all__ = ["Derivative"]


class Derivative(Expression):
    """Derivative of ``function`` with respect to ``bound_symbol`` at ``point``.

    Attributes:
        NAME: Operator name used by serialization, layout and the parser.
        UNSUPPORTED_KINDS: Node kinds that make the derivative undefined;
            there is no matrix or complex derivative.
    """

    NAME = "diff"
    NUMBER_OF_OPERANDS = 3
    UNSUPPORTED_KINDS = (Matrix, ImaginaryUnit)

    def __init__(self, *operands: Expression) -> None:
        """Builds the node from ``(function, bound_symbol, point)``.

        Raises:
            InvalidOperandError: If there are not exactly three operands or
                the second one is not a :class:`Symbol`.
        """
        validate_operand_count(operands, self.NUMBER_OF_OPERANDS, self.NAME)
        validate_operand_kind(operands[1], Symbol, self.NAME, 1)
        super().__init__(*operands)

    @property
    def function(self) -> Expression:
        return self.child(0)

    @property
    def bound_symbol(self) -> Symbol:
        return self.child(1)

    @property
    def point(self) -> Expression:
        return self.child(2)

    def number_of_operands(self) -> int:
        return self.NUMBER_OF_OPERANDS

    # Degree

    def polynomial_degree(self, symbol_name: str) -> int:
        """Degree in ``symbol_name``: 0 if no operand depends on it, else unknown.

        Without symbolic rules nothing bounds how the derivative depends on
        a symbol that occurs in its operands.
        """
        if all(operand.polynomial_degree(symbol_name) == 0 for operand in self.operands):
            return 0
        return UNKNOWN_DEGREE

    # Reduction

    def reduce(
        self,
        context: Context | None = None,
        angle_unit: AngleUnit = AngleUnit.RADIAN,
        replace_symbols: bool = True,
    ) -> Expression:
        context = context or Context()
        # inside the function the bound symbol shadows any outer value
        function = self.function.reduce(context.without(self.bound_symbol.name), angle_unit, replace_symbols)
        point = self.point.reduce(context, angle_unit, replace_symbols)
        reduced = self.with_operands((function, self.bound_symbol, point))
        return reduced.shallow_reduce(context, angle_unit, replace_symbols)

    def shallow_reduce(self, context: Context, angle_unit: AngleUnit, replace_symbols: bool) -> Expression:
        reduced = default_shallow_reduce(self)
        if reduced.is_undefined():
            return reduced
        if any(operand.contains(Matrix) for operand in self.operands):
            return Undefined()
        # TODO: linearity diff(f+g) -> diff(f)+diff(g) once symbolic rules exist
        return self

    def replace_unknown(self, symbol: Symbol) -> Expression:
        return replace_unknown_in_parametered_expression(self, symbol)

    # Approximation

    def differentiate(
        self,
        context: Context | None = None,
        angle_unit: AngleUnit = AngleUnit.RADIAN,
        precision: Precision | str | PrecisionConfig = Precision.FULL,
        config: RiddersConfig | None = None,
    ) -> DifferentiationResult | UndefinedResult:
        """Estimates the derivative with its error.

        Args:
            context: Values of the free symbols other than the bound one.
            angle_unit: Angle convention of trigonometric functions.
            precision: Working precision.
            config: Ridders configuration; defaults to :class:`RiddersConfig`.

        Returns:
            The estimate, or an :class:`UndefinedResult` saying why there is
            none.
        """
        with np.errstate(all="ignore"):
            return self._differentiate(context or Context(), angle_unit, as_precision_config(precision), config)

    def _differentiate(
        self,
        context: Context,
        angle_unit: AngleUnit,
        precision: PrecisionConfig,
        config: RiddersConfig | None,
    ) -> DifferentiationResult | UndefinedResult:
        if any(operand.contains(self.UNSUPPORTED_KINDS) for operand in self.operands):
            derivnode_logger.warning(
                "%s() of a matrix or complex operand is undefined: %s", self.NAME, self.serialize()
            )
            return UndefinedResult(UndefinedReason.UNSUPPORTED_OPERAND_KIND)

        abscissa = self.point._approximate(context, angle_unit, precision)
        if is_nan(abscissa):
            return UndefinedResult(UndefinedReason.NON_NUMERIC_INPUT)

        name = self.bound_symbol.name
        body = self.function

        def function(x: np.floating) -> np.floating:
            return body.approximate_with_value_for_symbol(name, x, context, angle_unit, precision)

        return NumericDifferentiator(config, precision).differentiate(function, abscissa)

    def _approximate(self, context, angle_unit, config):
        return config.cast(self._differentiate(context, angle_unit, config, None).value)

    # Text and display

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return prefix_serialize(self, self.NAME, float_mode, significant_digits)

    def create_layout(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS):
        return prefix_layout(self, self.NAME, float_mode, significant_digits)
