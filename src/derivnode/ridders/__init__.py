"""Adaptive Ridders extrapolation for numeric first derivatives."""

from derivnode.ridders.config import RiddersConfig
from derivnode.ridders.differentiator import (
    DifferentiationResult,
    NumericDifferentiator,
    UndefinedReason,
    UndefinedResult,
)

__all__ = [
    "RiddersConfig",
    "NumericDifferentiator",
    "DifferentiationResult",
    "UndefinedResult",
    "UndefinedReason",
]
