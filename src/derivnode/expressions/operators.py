"""Arithmetic operator nodes."""

from __future__ import annotations

import numpy as np

from derivnode.expressions.context import DEFAULT_SIGNIFICANT_DIGITS, PrintFloatMode
from derivnode.expressions.core import (
    PRECEDENCE_ADDITIVE,
    PRECEDENCE_MULTIPLICATIVE,
    PRECEDENCE_POWER,
    PRECEDENCE_UNARY,
    UNKNOWN_DEGREE,
    Expression,
    Number,
    Undefined,
    default_shallow_reduce,
)
from derivnode.expressions.helpers import infix_serialize
from derivnode.expressions.layout import HorizontalLayout, ParenthesisLayout, StringLayout, infix_layout
from derivnode.utils.precision import Precision, get_precision_config
from derivnode.utils.validate import validate_operand_count

__all__ = [
    "Operator",
    "Addition",
    "Subtraction",
    "Multiplication",
    "Division",
    "Power",
    "Opposite",
]


class Operator(Expression):
    """An arithmetic operator over numeric operands.

    Subclasses define ``token``, ``arity`` and ``_compute``, which combines
    the operand values in the working dtype and returns NaN where the
    operation is undefined.
    """

    token = "?"
    arity = 2
    associative = False

    def __init__(self, *operands: Expression) -> None:
        validate_operand_count(operands, self.arity, self.token)
        super().__init__(*operands)

    def _compute(self, *values: np.floating) -> np.floating:
        raise NotImplementedError

    def _approximate(self, context, angle_unit, config):
        values = [operand._approximate(context, angle_unit, config) for operand in self.operands]
        return config.cast(self._compute(*values))

    def shallow_reduce(self, context, angle_unit, replace_symbols):
        reduced = default_shallow_reduce(self)
        if reduced.is_undefined():
            return reduced
        if all(isinstance(operand, Number) for operand in self.operands):
            config = get_precision_config(Precision.FULL)
            with np.errstate(all="ignore"):
                value = self._compute(*(config.cast(operand.value) for operand in self.operands))
            return Undefined() if np.isnan(value) else Number(value)
        return self

    def needs_parentheses(self, operand: Expression, index: int) -> bool:
        if index == 0 or self.associative:
            return operand.precedence < self.precedence
        return operand.precedence <= self.precedence

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return infix_serialize(self, self.token, float_mode, significant_digits)

    def create_layout(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS):
        return infix_layout(self, self.token, float_mode, significant_digits)


class Addition(Operator):
    token = "+"
    precedence = PRECEDENCE_ADDITIVE
    associative = True

    def _compute(self, a, b):
        return a + b

    def polynomial_degree(self, symbol_name: str) -> int:
        degrees = [operand.polynomial_degree(symbol_name) for operand in self.operands]
        if UNKNOWN_DEGREE in degrees:
            return UNKNOWN_DEGREE
        return max(degrees)


class Subtraction(Addition):
    token = "-"
    associative = False

    def _compute(self, a, b):
        return a - b


class Multiplication(Operator):
    token = "*"
    precedence = PRECEDENCE_MULTIPLICATIVE
    associative = True

    def _compute(self, a, b):
        return a * b

    def polynomial_degree(self, symbol_name: str) -> int:
        degrees = [operand.polynomial_degree(symbol_name) for operand in self.operands]
        if UNKNOWN_DEGREE in degrees:
            return UNKNOWN_DEGREE
        return sum(degrees)


class Division(Operator):
    token = "/"
    precedence = PRECEDENCE_MULTIPLICATIVE

    def _compute(self, a, b):
        if b == 0:
            return type(a)(np.nan)
        return a / b

    def polynomial_degree(self, symbol_name: str) -> int:
        numerator, denominator = self.operands
        if denominator.polynomial_degree(symbol_name) != 0:
            return UNKNOWN_DEGREE
        return numerator.polynomial_degree(symbol_name)


class Power(Operator):
    token = "^"
    precedence = PRECEDENCE_POWER

    def _compute(self, a, b):
        if a == 0 and b <= 0:
            return type(a)(np.nan)
        return np.power(a, b)

    def needs_parentheses(self, operand: Expression, index: int) -> bool:
        # x^y^z reads as x^(y^z)
        if index == 0:
            return operand.precedence <= self.precedence
        return operand.precedence < self.precedence

    def polynomial_degree(self, symbol_name: str) -> int:
        base, exponent = self.operands
        base_degree = base.polynomial_degree(symbol_name)
        if base_degree == 0 and exponent.polynomial_degree(symbol_name) == 0:
            return 0
        if (
            base_degree != UNKNOWN_DEGREE
            and isinstance(exponent, Number)
            and exponent.value.is_integer()
            and exponent.value >= 0
        ):
            return base_degree * int(exponent.value)
        return UNKNOWN_DEGREE


class Opposite(Operator):
    token = "-"
    arity = 1
    precedence = PRECEDENCE_UNARY

    def _compute(self, a):
        return -a

    def polynomial_degree(self, symbol_name: str) -> int:
        return self.operands[0].polynomial_degree(symbol_name)

    def needs_parentheses(self, operand: Expression, index: int) -> bool:
        return operand.precedence < self.precedence

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        operand = self.operands[0]
        text = operand.serialize(float_mode, significant_digits)
        if self.needs_parentheses(operand, 0):
            text = f"({text})"
        return f"-{text}"

    def create_layout(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS):
        operand = self.operands[0]
        child = operand.create_layout(float_mode, significant_digits)
        if self.needs_parentheses(operand, 0):
            child = ParenthesisLayout(child)
        return HorizontalLayout([StringLayout("-"), child])
