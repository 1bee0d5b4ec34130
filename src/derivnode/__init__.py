"""Provides the derivative-at-a-point expression node and its numeric engine."""

from importlib.metadata import PackageNotFoundError, version

from derivnode.derivative_api import approximate_derivative, build_derivative, derivative_at
from derivnode.expressions import AngleUnit, Context, Derivative, parse
from derivnode.ridders import (
    DifferentiationResult,
    NumericDifferentiator,
    RiddersConfig,
    UndefinedReason,
    UndefinedResult,
)
from derivnode.utils.precision import Precision

try:
    __version__ = version("derivnode")
except PackageNotFoundError:
    pass

__all__ = [
    "AngleUnit",
    "Context",
    "Derivative",
    "DifferentiationResult",
    "NumericDifferentiator",
    "Precision",
    "RiddersConfig",
    "UndefinedReason",
    "UndefinedResult",
    "approximate_derivative",
    "build_derivative",
    "derivative_at",
    "parse",
]
