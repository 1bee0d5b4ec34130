"""Expression tree hosting the derivative node."""

from derivnode.expressions.context import AngleUnit, Context, PrintFloatMode
from derivnode.expressions.core import (
    UNKNOWN_DEGREE,
    Constant,
    Expression,
    ImaginaryUnit,
    Number,
    Symbol,
    Undefined,
)
from derivnode.expressions.derivative import Derivative
from derivnode.expressions.functions import FUNCTIONS
from derivnode.expressions.matrix import Matrix
from derivnode.expressions.operators import (
    Addition,
    Division,
    Multiplication,
    Opposite,
    Power,
    Subtraction,
)
from derivnode.expressions.parser import parse

__all__ = [
    "AngleUnit",
    "Context",
    "PrintFloatMode",
    "UNKNOWN_DEGREE",
    "Expression",
    "Number",
    "Symbol",
    "Constant",
    "ImaginaryUnit",
    "Undefined",
    "Matrix",
    "Addition",
    "Subtraction",
    "Multiplication",
    "Division",
    "Power",
    "Opposite",
    "FUNCTIONS",
    "Derivative",
    "parse",
]
