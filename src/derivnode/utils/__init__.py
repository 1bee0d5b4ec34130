"""Utility functions for the derivnode package."""

from .precision import (
    Precision,
    PrecisionConfig,
    get_precision_config,
)

__all__ = [
    "Precision",
    "PrecisionConfig",
    "get_precision_config",
]
