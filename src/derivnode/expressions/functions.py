"""Elementary function nodes, written as prefix calls like ``sin(x)``."""

from __future__ import annotations

import numpy as np

from derivnode.expressions.context import DEFAULT_SIGNIFICANT_DIGITS, AngleUnit, PrintFloatMode
from derivnode.expressions.core import Expression
from derivnode.expressions.helpers import prefix_serialize
from derivnode.expressions.layout import prefix_layout
from derivnode.utils.validate import validate_operand_count

__all__ = [
    "Function",
    "Sine",
    "Cosine",
    "Tangent",
    "Exponential",
    "NaturalLogarithm",
    "Logarithm",
    "SquareRoot",
    "AbsoluteValue",
    "FUNCTIONS",
]


class Function(Expression):
    """A one-argument function called by name."""

    name = "?"
    uses_angle_unit = False

    def __init__(self, *operands: Expression) -> None:
        validate_operand_count(operands, 1, self.name)
        super().__init__(*operands)

    def _compute(self, x: np.floating) -> np.floating:
        raise NotImplementedError

    def _approximate(self, context, angle_unit, config):
        x = self.operands[0]._approximate(context, angle_unit, config)
        if self.uses_angle_unit:
            x = config.cast(x * config.cast(angle_unit.radians_per_unit))
        return config.cast(self._compute(x))

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return prefix_serialize(self, self.name, float_mode, significant_digits)

    def create_layout(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS):
        return prefix_layout(self, self.name, float_mode, significant_digits)


class Sine(Function):
    name = "sin"
    uses_angle_unit = True

    def _compute(self, x):
        return np.sin(x)


class Cosine(Function):
    name = "cos"
    uses_angle_unit = True

    def _compute(self, x):
        return np.cos(x)


class Tangent(Function):
    name = "tan"
    uses_angle_unit = True

    def _compute(self, x):
        return np.tan(x)


class Exponential(Function):
    name = "exp"

    def _compute(self, x):
        return np.exp(x)


class NaturalLogarithm(Function):
    name = "ln"

    def _compute(self, x):
        if x <= 0:
            return type(x)(np.nan)
        return np.log(x)


class Logarithm(Function):
    """Decimal logarithm."""

    name = "log"

    def _compute(self, x):
        if x <= 0:
            return type(x)(np.nan)
        return np.log10(x)


class SquareRoot(Function):
    name = "sqrt"

    def _compute(self, x):
        if x < 0:
            return type(x)(np.nan)
        return np.sqrt(x)


class AbsoluteValue(Function):
    name = "abs"

    def _compute(self, x):
        return np.abs(x)


FUNCTIONS: dict[str, type[Function]] = {
    cls.name: cls
    for cls in (
        Sine,
        Cosine,
        Tangent,
        Exponential,
        NaturalLogarithm,
        Logarithm,
        SquareRoot,
        AbsoluteValue,
    )
}
