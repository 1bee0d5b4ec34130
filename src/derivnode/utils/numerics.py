"""Numerical utilities."""

from __future__ import annotations

import numpy as np

from derivnode.utils.precision import PrecisionConfig
from derivnode.utils.types import ScalarFunction

__all__ = [
    "is_nan",
    "representable_step",
    "central_difference",
    "relative_error",
    "round_half_away_from_zero",
    "round_to_error",
]


def is_nan(value) -> bool:
    """Returns True if ``value`` is a not-a-number scalar."""
    return bool(np.isnan(value))


def representable_step(x: np.floating, h: np.floating, config: PrecisionConfig) -> np.floating:
    """Adjusts a step so that ``x + h`` loses no precision.

    The step is replaced by ``(x + h) - x`` evaluated in the working dtype,
    which is the offset actually seen by the function. Using it in the
    difference quotient avoids the cancellation error of a step that is
    not exactly representable relative to ``x``.

    Args:
        x: Abscissa.
        h: Nominal step size.
        config: Working precision.

    Returns:
        The exactly representable step.
    """
    x = config.cast(x)
    shifted = config.cast(x + config.cast(h))
    return config.cast(shifted - x)


def central_difference(
    function: ScalarFunction,
    x: np.floating,
    h: np.floating,
    config: PrecisionConfig,
) -> np.floating:
    """Returns the central-difference growth rate ``(f(x+h) - f(x-h)) / (2h)``.

    Args:
        function: Scalar function evaluated in the working dtype.
        x: Abscissa.
        h: Step size, expected to be exactly representable around ``x``.
        config: Working precision.

    Returns:
        The growth rate in the working dtype. NaN when either evaluation is NaN.
    """
    x = config.cast(x)
    h = config.cast(h)
    plus = config.cast(function(config.cast(x + h)))
    minus = config.cast(function(config.cast(x - h)))
    with np.errstate(all="ignore"):
        return config.cast((plus - minus) / (config.cast(2) * h))


def relative_error(error: np.floating, value: np.floating) -> np.floating:
    """Returns ``|error / value|``.

    Division by zero is not an error here: ``0/0`` gives NaN and ``e/0``
    gives infinity, which callers compare against their tolerance.
    """
    with np.errstate(all="ignore"):
        return np.abs(np.divide(error, value))


def round_half_away_from_zero(value: np.floating) -> np.floating:
    """Rounds to the nearest integer, ties away from zero.

    The fractional part ``value - trunc(value)`` is exact, so values just
    below a half and integers beyond ``2**52`` are not disturbed by adding
    ``0.5`` first.
    """
    whole = np.trunc(value)
    carry = np.abs(value - whole) >= 0.5
    return type(value)(whole + np.sign(value) * carry)


def round_to_error(value: np.floating, error: np.floating, config: PrecisionConfig) -> np.floating:
    """Drops the digits of ``value`` that ``error`` makes meaningless.

    If the error is below the smallest normal magnitude of the working
    precision, ``value`` is returned unchanged. Otherwise ``value`` is
    rounded to the nearest multiple of ``10**(floor(log10(|error|)) + 2)``.

    Args:
        value: The estimate to round.
        error: Absolute error estimate of ``value``.
        config: Working precision.

    Returns:
        The rounded estimate in the working dtype.

    Examples:
        >>> from derivnode.utils.precision import get_precision_config
        >>> cfg = get_precision_config("full")
        >>> float(round_to_error(cfg.cast(6.000012345), cfg.cast(3e-6), cfg))
        6.0
    """
    value = config.cast(value)
    error = np.abs(config.cast(error))
    if error < config.minimum_magnitude:
        return value
    exponent = int(np.floor(np.log10(error))) + 2
    ten = config.cast(10)
    with np.errstate(all="ignore"):
        if exponent < 0:
            # dividing by an exact power of ten keeps round values exact
            scale = config.cast(ten ** -exponent)
            return config.cast(round_half_away_from_zero(config.cast(value * scale)) / scale)
        quantum = config.cast(ten ** exponent)
        return config.cast(round_half_away_from_zero(config.cast(value / quantum)) * quantum)
