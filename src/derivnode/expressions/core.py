"""Expression tree base class and terminal nodes.

An :class:`Expression` is an immutable node with an ordered tuple of
operands. Every node answers the same small protocol:

* ``approximate`` evaluates it to a scalar of the working precision, NaN
  meaning undefined;
* ``polynomial_degree`` bounds its degree in a symbol;
* ``reduce`` rewrites it to a simpler equivalent node;
* ``replace_unknown`` substitutes the unknown placeholder;
* ``serialize`` and ``create_layout`` give its text and display forms.

Operator nodes live in :mod:`derivnode.expressions.operators` and
:mod:`derivnode.expressions.functions`.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from derivnode.expressions.context import (
    DEFAULT_SIGNIFICANT_DIGITS,
    AngleUnit,
    Context,
    PrintFloatMode,
)
from derivnode.expressions.helpers import (
    UNDEFINED_TOKEN,
    UNKNOWN_SYMBOL_NAME,
    format_number,
)
from derivnode.expressions.layout import Layout, StringLayout
from derivnode.utils.precision import Precision, PrecisionConfig, as_precision_config

__all__ = [
    "UNKNOWN_DEGREE",
    "PRECEDENCE_ADDITIVE",
    "PRECEDENCE_MULTIPLICATIVE",
    "PRECEDENCE_UNARY",
    "PRECEDENCE_POWER",
    "PRECEDENCE_ATOM",
    "Expression",
    "Terminal",
    "Number",
    "Symbol",
    "Constant",
    "ImaginaryUnit",
    "Undefined",
    "default_shallow_reduce",
]

UNKNOWN_DEGREE = -1

PRECEDENCE_ADDITIVE = 1
PRECEDENCE_MULTIPLICATIVE = 2
PRECEDENCE_UNARY = 3
PRECEDENCE_POWER = 4
PRECEDENCE_ATOM = 10


class Expression:
    """Base class of expression tree nodes."""

    precedence = PRECEDENCE_ATOM

    def __init__(self, *operands: Expression) -> None:
        self.operands: tuple[Expression, ...] = tuple(operands)

    # Tree structure

    def number_of_operands(self) -> int:
        return len(self.operands)

    def child(self, index: int) -> Expression:
        return self.operands[index]

    def with_operands(self, operands: Iterable[Expression]) -> Expression:
        """Returns a node of the same type over ``operands``."""
        return type(self)(*operands)

    def is_undefined(self) -> bool:
        return False

    def contains(self, kinds: type | tuple[type, ...]) -> bool:
        """Returns True if this node or any descendant is one of ``kinds``."""
        if isinstance(self, kinds):
            return True
        return any(operand.contains(kinds) for operand in self.operands)

    # Approximation

    def approximate(
        self,
        context: Context | None = None,
        angle_unit: AngleUnit = AngleUnit.RADIAN,
        precision: Precision | str | PrecisionConfig = Precision.FULL,
    ) -> np.floating:
        """Evaluates the expression to a scalar.

        Args:
            context: Values of the free symbols. Unbound symbols are NaN.
            angle_unit: Angle convention of trigonometric functions.
            precision: Working precision.

        Returns:
            A scalar of the working dtype; NaN when the expression is
            undefined at the given values.
        """
        config = as_precision_config(precision)
        with np.errstate(all="ignore"):
            return config.cast(self._approximate(context or Context(), angle_unit, config))

    def approximate_with_value_for_symbol(
        self,
        name: str,
        value: float,
        context: Context | None = None,
        angle_unit: AngleUnit = AngleUnit.RADIAN,
        precision: Precision | str | PrecisionConfig = Precision.FULL,
    ) -> np.floating:
        """Evaluates the expression with ``name`` bound to ``value``."""
        context = context or Context()
        return self.approximate(context.with_binding(name, value), angle_unit, precision)

    def _approximate(self, context: Context, angle_unit: AngleUnit, config: PrecisionConfig) -> np.floating:
        raise NotImplementedError

    # Tree operations

    def polynomial_degree(self, symbol_name: str) -> int:
        """Degree of the expression as a polynomial in ``symbol_name``.

        The default is 0 when no operand depends on the symbol and
        :data:`UNKNOWN_DEGREE` otherwise.
        """
        for operand in self.operands:
            if operand.polynomial_degree(symbol_name) != 0:
                return UNKNOWN_DEGREE
        return 0

    def reduce(
        self,
        context: Context | None = None,
        angle_unit: AngleUnit = AngleUnit.RADIAN,
        replace_symbols: bool = True,
    ) -> Expression:
        """Reduces the operands, then this node.

        Args:
            context: Symbol values, substituted when ``replace_symbols``.
            angle_unit: Angle convention.
            replace_symbols: Whether symbols bound in ``context`` are
                replaced by their values.

        Returns:
            An equivalent, possibly simpler, expression.
        """
        context = context or Context()
        operands = [operand.reduce(context, angle_unit, replace_symbols) for operand in self.operands]
        return self.with_operands(operands).shallow_reduce(context, angle_unit, replace_symbols)

    def shallow_reduce(self, context: Context, angle_unit: AngleUnit, replace_symbols: bool) -> Expression:
        """Reduces this node assuming its operands are already reduced."""
        return default_shallow_reduce(self)

    def replace_unknown(self, symbol: Symbol) -> Expression:
        """Replaces the unknown placeholder by ``symbol`` everywhere below this node."""
        return self.with_operands(operand.replace_unknown(symbol) for operand in self.operands)

    # Text and display

    def serialize(
        self,
        float_mode: PrintFloatMode = PrintFloatMode.DECIMAL,
        significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS,
    ) -> str:
        raise NotImplementedError

    def create_layout(
        self,
        float_mode: PrintFloatMode = PrintFloatMode.DECIMAL,
        significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS,
    ) -> Layout:
        return StringLayout(self.serialize(float_mode, significant_digits))

    def needs_parentheses(self, operand: Expression, index: int) -> bool:
        """Whether operand ``index`` must be parenthesized when written infix."""
        return False

    # Comparison

    def _key(self) -> tuple:
        return self.operands

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.serialize()!r})"


class Terminal(Expression):
    """A node without operands."""

    def with_operands(self, operands: Iterable[Expression]) -> Expression:
        return self

    def reduce(
        self,
        context: Context | None = None,
        angle_unit: AngleUnit = AngleUnit.RADIAN,
        replace_symbols: bool = True,
    ) -> Expression:
        return self.shallow_reduce(context or Context(), angle_unit, replace_symbols)

    def shallow_reduce(self, context: Context, angle_unit: AngleUnit, replace_symbols: bool) -> Expression:
        return self

    def replace_unknown(self, symbol: Symbol) -> Expression:
        return self


class Number(Terminal):
    """A real number."""

    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = float(value)

    @property
    def precedence(self) -> int:
        # negative literals read like an opposite
        return PRECEDENCE_UNARY if self.value < 0 else PRECEDENCE_ATOM

    def _approximate(self, context, angle_unit, config):
        return config.cast(self.value)

    def polynomial_degree(self, symbol_name: str) -> int:
        return 0

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return format_number(self.value, float_mode, significant_digits)

    def _key(self) -> tuple:
        return (self.value,)


class Symbol(Terminal):
    """A named variable."""

    def __init__(self, name: str) -> None:
        super().__init__()
        if not isinstance(name, str) or not name:
            raise ValueError("Symbol name must be a non-empty string.")
        self.name = name

    @classmethod
    def unknown(cls) -> Symbol:
        """Returns the unknown placeholder symbol."""
        return cls(UNKNOWN_SYMBOL_NAME)

    def _approximate(self, context, angle_unit, config):
        value = context.value_for(self.name)
        if value is None:
            return config.nan
        return config.cast(value)

    def polynomial_degree(self, symbol_name: str) -> int:
        return 1 if self.name == symbol_name else 0

    def shallow_reduce(self, context, angle_unit, replace_symbols):
        if replace_symbols:
            value = context.value_for(self.name)
            if value is not None:
                return Number(value)
        return self

    def replace_unknown(self, symbol: Symbol) -> Expression:
        return symbol if self.name == UNKNOWN_SYMBOL_NAME else self

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return self.name

    def _key(self) -> tuple:
        return (self.name,)


class Constant(Terminal):
    """A named mathematical constant: ``pi`` or ``e``."""

    VALUES = {"pi": math.pi, "e": math.e}

    def __init__(self, name: str) -> None:
        super().__init__()
        if name not in self.VALUES:
            raise ValueError(f"Unknown constant '{name}'.")
        self.name = name

    def _approximate(self, context, angle_unit, config):
        return config.cast(self.VALUES[self.name])

    def polynomial_degree(self, symbol_name: str) -> int:
        return 0

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return self.name

    def _key(self) -> tuple:
        return (self.name,)


class ImaginaryUnit(Terminal):
    """The imaginary unit ``i``; undefined in real approximation."""

    def _approximate(self, context, angle_unit, config):
        return config.nan

    def polynomial_degree(self, symbol_name: str) -> int:
        return 0

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return "i"


class Undefined(Terminal):
    """The undefined value."""

    def is_undefined(self) -> bool:
        return True

    def _approximate(self, context, angle_unit, config):
        return config.nan

    def polynomial_degree(self, symbol_name: str) -> int:
        return UNKNOWN_DEGREE

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        return UNDEFINED_TOKEN


def default_shallow_reduce(expression: Expression) -> Expression:
    """Generic reduction shared by all operators.

    An operator with an undefined operand is undefined.
    """
    if any(operand.is_undefined() for operand in expression.operands):
        return Undefined()
    return expression
